"""SQLModel data models.

Each class maps to a table. User identifiers are generated hex strings
assigned when the object is constructed, so callers can reference them
before the row is flushed.
"""

import datetime as dt
import uuid
from typing import List, Optional

from sqlmodel import SQLModel, Field, Relationship


def _new_id() -> str:
    return uuid.uuid4().hex


class User(SQLModel, table=True):
    """A tracked user.

    Fields:
    - `id`: generated identifier, immutable
    - `username`: unique, case-sensitive name
    """
    __tablename__ = "users"

    id: str = Field(default_factory=_new_id, primary_key=True, max_length=32)
    username: str = Field(index=True, nullable=False, unique=True)
    exercises: List["Exercise"] = Relationship(back_populates="user")


class Exercise(SQLModel, table=True):
    """A single exercise entry owned by one `User`.

    `date` is a calendar date; when omitted it defaults to the day the
    entry is created. The integer `id` grows with every insert and gives
    the log its insertion order.
    """
    __tablename__ = "exercises"

    id: Optional[int] = Field(default=None, primary_key=True)
    description: str = Field(nullable=False)
    duration: int = Field(nullable=False)
    date: dt.date = Field(default_factory=dt.date.today, index=True)
    user_id: str = Field(foreign_key="users.id", index=True, nullable=False)
    user: Optional[User] = Relationship(back_populates="exercises")
