"""Pydantic request/response schemas used by the API.

Schemas keep API input/output shapes stable. Identifiers are emitted
under the `_id` key.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class UserIn(BaseModel):
    """Payload for the create-user endpoint."""
    username: Optional[Any] = None


class ExerciseIn(BaseModel):
    """Payload for the add-exercise endpoint.

    Values are kept raw; `utils.parsers` turns them into typed values so
    a bad duration or date yields a named error instead of a 422.
    """
    description: Optional[Any] = None
    duration: Optional[Any] = None
    date: Optional[Any] = None


class UserOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: str
    id: str = Field(alias="_id")


class ExerciseOut(BaseModel):
    """Response for a newly added exercise; `_id` is the owner's id."""
    model_config = ConfigDict(populate_by_name=True)

    username: str
    description: str
    duration: int
    date: str
    id: str = Field(alias="_id")


class LogEntry(BaseModel):
    description: str
    duration: int
    date: str


class LogOut(BaseModel):
    """A user's filtered exercise log."""
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    username: str
    count: int
    log: List[LogEntry]


class ErrorOut(BaseModel):
    error: str
