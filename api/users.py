"""
User API endpoints: login, registration and profile lookup.
"""
from fastapi import APIRouter, Depends, HTTPException, status

from api.deps import get_record_store
from core.exceptions import DuplicateUserError
from schemas.user import LoginRequest, LoginResponse, UserCreate, UserResponse
from services.record_store import RecordStore

router = APIRouter(tags=["users"])


@router.post("/login", response_model=LoginResponse)
def login(request: LoginRequest, store: RecordStore = Depends(get_record_store)):
    """
    Verify user credentials.

    Returns 401 for wrong credentials. A database outage surfaces as 503
    through the StorageError handler, never as 401.
    """
    if not store.verify_credentials(request.user_id, request.password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid user id or password"
        )

    return LoginResponse(
        user_id=request.user_id,
        name=store.get_display_name(request.user_id)
    )


@router.post("/users", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def register(request: UserCreate, store: RecordStore = Depends(get_record_store)):
    """Create a user with a hashed password."""
    try:
        user = store.create_user(
            request.user_id,
            request.password,
            first_name=request.first_name,
            last_name=request.last_name
        )
    except DuplicateUserError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))

    return UserResponse(user_id=user.user_id, name=user.get_display_name())


@router.get("/users/{user_id}", response_model=UserResponse)
def get_user(user_id: str, store: RecordStore = Depends(get_record_store)):
    """Get a user's display name."""
    user = store.get_user(user_id)

    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"User with id {user_id} not found"
        )

    return UserResponse(user_id=user.user_id, name=user.get_display_name())
