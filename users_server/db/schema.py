"""Database schema for the users server."""

from sqlalchemy import Column, Integer, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class UserDB(Base):
    """A stored user; ids are assigned by SQLite and never reused."""

    __tablename__ = "users"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, nullable=False)
    name = Column(Text)
