"""
SQLAlchemy model for User table.
"""
from sqlalchemy import Column, String

from core.database import Base


class User(Base):
    """User model representing the users table."""

    __tablename__ = "users"

    user_id = Column(String(255), primary_key=True, nullable=False)
    password = Column(String(255), nullable=False, comment="bcrypt hash")
    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)

    def get_display_name(self) -> str:
        """Return "first last", or "" when neither is set."""
        return f"{self.first_name or ''} {self.last_name or ''}".strip()
