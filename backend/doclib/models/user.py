"""Contributor model.

Users exist only to attribute contributions.  They are created lazily the
first time a contribution arrives from an unseen email address.
"""

from sqlalchemy import Column, DateTime, Integer, String, Text
from ..database import Base


class User(Base):
    """A person who contributed at least one document."""

    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    email = Column(String(320), unique=True, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False)
