"""
Pydantic schemas for visit history requests.
"""
from pydantic import BaseModel, Field
from typing import List


class VisitHistoryRequest(BaseModel):
    """Request schema for POST /history and DELETE /history."""
    user_id: str = Field(min_length=1)
    visited: List[str] = []


class VisitHistoryResponse(BaseModel):
    """Acknowledgement for history writes."""
    status: str = "OK"
    user_id: str
    count: int
