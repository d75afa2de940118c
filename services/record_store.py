"""
Record store for restaurants, visit history and user credentials.

All SQL lives here. Every public method raises StorageError when the
database cannot be reached or a query fails; an empty result always means
"no data".
"""
import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Iterable, Iterator, List, Optional, Set

import bcrypt
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from core.exceptions import DuplicateUserError, StorageError
from models.history import History
from models.restaurant import Restaurant, parse_categories
from models.user import User

logger = logging.getLogger(__name__)


def hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode(), bcrypt.gensalt()).decode()


def check_password(plain: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(plain.encode(), hashed.encode())
    except ValueError:
        # Stored value is not a bcrypt hash
        logger.warning("Unreadable password hash encountered")
        return False


class RecordStore:
    """Data access for the restaurants, history and users tables."""

    def __init__(self, db: Session):
        """
        Args:
            db: SQLAlchemy session owned by the caller
        """
        self.db = db

    @contextmanager
    def _storage(self, action: str) -> Iterator[None]:
        """Translate SQLAlchemy failures into StorageError."""
        try:
            yield
        except SQLAlchemyError as e:
            self._rollback()
            logger.error("Storage operation '%s' failed", action, exc_info=True)
            raise StorageError(f"{action} failed: {e}") from e

    def _rollback(self) -> None:
        try:
            self.db.rollback()
        except SQLAlchemyError:
            logger.warning("Rollback failed", exc_info=True)

    # ==============================
    # Visit history
    # ==============================

    def record_visit(self, user_id: str, business_id: str) -> None:
        """Mark a restaurant as visited. Repeat visits refresh the timestamp."""
        self.record_visits(user_id, [business_id])

    def record_visits(self, user_id: str, business_ids: Iterable[str]) -> None:
        """Mark several restaurants as visited in one transaction."""
        unique_ids = list(dict.fromkeys(business_ids))
        if not unique_ids:
            return

        with self._storage("record visits"):
            now = datetime.now()
            for business_id in unique_ids:
                row = self.db.query(History).filter(
                    History.user_id == user_id,
                    History.business_id == business_id
                ).first()
                if row is None:
                    self.db.add(History(
                        user_id=user_id,
                        business_id=business_id,
                        last_visited_time=now
                    ))
                else:
                    row.last_visited_time = now
            self.db.commit()

    def remove_visit(self, user_id: str, business_id: str) -> None:
        """Forget a visit. No-op if it was never recorded."""
        self.remove_visits(user_id, [business_id])

    def remove_visits(self, user_id: str, business_ids: Iterable[str]) -> None:
        unique_ids = list(dict.fromkeys(business_ids))
        if not unique_ids:
            return

        with self._storage("remove visits"):
            self.db.query(History).filter(
                History.user_id == user_id,
                History.business_id.in_(unique_ids)
            ).delete(synchronize_session=False)
            self.db.commit()

    def list_visited(self, user_id: str) -> Set[str]:
        """Return the set of business IDs the user has visited."""
        with self._storage("list visited"):
            rows = self.db.query(History.business_id).filter(
                History.user_id == user_id
            ).all()
        return {business_id for (business_id,) in rows}

    def list_visited_by_time(self, user_id: str) -> List[str]:
        """Return visited business IDs, most recent first."""
        with self._storage("list visited by time"):
            rows = self.db.query(History.business_id).filter(
                History.user_id == user_id
            ).order_by(
                History.last_visited_time.desc(),
                History.visit_history_id.desc()
            ).all()
        return [business_id for (business_id,) in rows]

    # ==============================
    # Restaurants
    # ==============================

    def get_restaurant(self, business_id: str) -> Optional[Restaurant]:
        with self._storage("get restaurant"):
            return self.db.query(Restaurant).filter(
                Restaurant.business_id == business_id
            ).first()

    def get_categories(self, business_id: str) -> Set[str]:
        """
        Return the category tokens of a stored restaurant.

        Returns an empty set if the restaurant is unknown.
        """
        with self._storage("get categories"):
            row = self.db.query(Restaurant.categories).filter(
                Restaurant.business_id == business_id
            ).first()
        if row is None:
            return set()
        return parse_categories(row.categories)

    def get_business_ids_by_category(self, category: str, exact: bool = False) -> Set[str]:
        """
        Find restaurants tagged with a category.

        By default this is a case-sensitive substring match on the stored
        category string, so "Bar" also matches "Barbecue". With exact=True
        only whole tokens match.

        Args:
            category: Category token to look for
            exact: Require a whole-token match

        Returns:
            Set of matching business IDs
        """
        if not category:
            return set()

        with self._storage("get business ids by category"):
            # LIKE narrows the scan; its case sensitivity depends on collation
            rows = self.db.query(Restaurant.business_id, Restaurant.categories).filter(
                Restaurant.categories.contains(category, autoescape=True)
            ).all()

        if exact:
            return {
                business_id for business_id, categories in rows
                if category in parse_categories(categories)
            }
        return {
            business_id for business_id, categories in rows
            if categories and category in categories
        }

    def upsert_restaurant(self, restaurant: Restaurant) -> bool:
        """
        Insert a restaurant unless its business ID is already stored.

        Existing rows are never overwritten.

        Returns:
            True if a new row was inserted
        """
        with self._storage("upsert restaurant"):
            existing = self.db.query(Restaurant.business_id).filter(
                Restaurant.business_id == restaurant.business_id
            ).first()
            if existing is not None:
                return False

            self.db.add(restaurant)
            try:
                self.db.commit()
            except IntegrityError:
                # Inserted concurrently by another request
                self._rollback()
                logger.debug("Restaurant %s already inserted", restaurant.business_id)
                return False
        return True

    # ==============================
    # Users
    # ==============================

    def create_user(
        self,
        user_id: str,
        password: str,
        first_name: Optional[str] = None,
        last_name: Optional[str] = None
    ) -> User:
        """
        Register a user with a bcrypt-hashed password.

        Raises:
            DuplicateUserError: If the user ID is taken
        """
        with self._storage("create user"):
            if self.db.query(User).filter(User.user_id == user_id).first() is not None:
                raise DuplicateUserError(f"User {user_id} already exists")

            user = User(
                user_id=user_id,
                password=hash_password(password),
                first_name=first_name,
                last_name=last_name
            )
            self.db.add(user)
            self.db.commit()
        return user

    def verify_credentials(self, user_id: str, password: str) -> bool:
        """
        Check a password against the stored hash.

        Returns False for an unknown user or a wrong password. A database
        failure raises StorageError instead.
        """
        with self._storage("verify credentials"):
            user = self.db.query(User).filter(User.user_id == user_id).first()
        if user is None:
            return False
        return check_password(password, user.password)

    def get_user(self, user_id: str) -> Optional[User]:
        with self._storage("get user"):
            return self.db.query(User).filter(User.user_id == user_id).first()

    def get_display_name(self, user_id: str) -> str:
        """Return "first last" for the user, or "" if unknown."""
        with self._storage("get display name"):
            user = self.db.query(User).filter(User.user_id == user_id).first()
        if user is None:
            return ""
        return user.get_display_name()
