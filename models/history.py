"""
SQLAlchemy model for the visit history table.
"""
from datetime import datetime

from sqlalchemy import Column, DateTime, Integer, String, UniqueConstraint
from sqlalchemy.dialects import mysql

from core.database import Base


class History(Base):
    """One row per (user_id, business_id) visit."""

    __tablename__ = "history"
    __table_args__ = (
        UniqueConstraint("user_id", "business_id", name="uq_history_user_business"),
    )

    visit_history_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(255), nullable=False, index=True)
    business_id = Column(String(255), nullable=False, index=True)
    # Microsecond precision on MySQL, whose DATETIME defaults to whole seconds
    last_visited_time = Column(
        DateTime().with_variant(mysql.DATETIME(fsp=6), "mysql"),
        nullable=False,
        default=datetime.now
    )
