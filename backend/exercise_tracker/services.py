"""Business logic services used by HTTP controllers.

This module holds small service classes that coordinate repositories and
the value parsers. Services perform validation in a fixed order, persist
through repositories and return response schemas.
"""

import logging
from typing import Any, List, Optional

from sqlmodel import Session

from . import models, repositories
from .exceptions import BadInputError, ConflictError, NotFoundError
from .schemas import ExerciseIn, ExerciseOut, LogEntry, LogOut, UserOut
from .utils.parsers import clean_text, format_date, parse_date, parse_duration, parse_limit

logger = logging.getLogger("exercise_tracker.services")


class UserService:
    """Create and list users."""
    def __init__(self, session: Session):
        self.session = session
        self.user_repo = repositories.UserRepository(session)

    def list_users(self) -> List[UserOut]:
        return [UserOut(username=u.username, id=u.id) for u in self.user_repo.list_all()]

    def create_user(self, username: Any) -> UserOut:
        """Create a user with a fresh username.

        The lookup by username is a fast path; the unique index on the
        table still rejects a concurrent duplicate, and the repository
        reports that as the same `ConflictError`. Scalar JSON values are
        stored as their string form; the name is otherwise kept exactly as
        sent, so uniqueness is checked on the unstripped value.
        """
        if isinstance(username, (dict, list, bool)):
            raise BadInputError("Invalid username")
        if clean_text(username) is None:
            raise BadInputError("Username is required")
        name = str(username)
        if self.user_repo.get_by_username(name):
            raise ConflictError("Username already exists")
        user = self.user_repo.create(models.User(username=name))
        logger.info("user created id=%s", user.id)
        return UserOut(username=user.username, id=user.id)


class ExerciseService:
    """Record exercises and build a user's log."""
    def __init__(self, session: Session):
        self.session = session
        self.user_repo = repositories.UserRepository(session)
        self.exercise_repo = repositories.ExerciseRepository(session)

    def _require_user(self, user_id: str) -> models.User:
        user = self.user_repo.get(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    def add_exercise(self, user_id: str, payload: ExerciseIn) -> ExerciseOut:
        """Validate `payload` and persist it as an exercise of `user_id`.

        Checks run in order: user exists, description present, duration
        is an integer, date (when given) is a calendar date.
        """
        user = self._require_user(user_id)
        description = clean_text(payload.description)
        if description is None:
            raise BadInputError("Description is required")
        duration = parse_duration(payload.duration)
        when = parse_date(payload.date)

        exercise = models.Exercise(description=description, duration=duration, user_id=user.id)
        if when is not None:
            exercise.date = when
        exercise = self.exercise_repo.create(exercise)
        return ExerciseOut(
            username=user.username,
            description=exercise.description,
            duration=exercise.duration,
            date=format_date(exercise.date),
            id=user.id,
        )

    def get_log(
        self,
        user_id: str,
        date_from: Optional[str] = None,
        date_to: Optional[str] = None,
        limit: Optional[str] = None,
    ) -> LogOut:
        """Return the user's exercises filtered by an inclusive date range."""
        user = self._require_user(user_id)
        rows = self.exercise_repo.find_for_user(
            user.id,
            date_from=parse_date(date_from),
            date_to=parse_date(date_to),
            limit=parse_limit(limit),
        )
        log = [
            LogEntry(description=description, duration=duration, date=format_date(day))
            for description, duration, day in rows
        ]
        return LogOut(id=user.id, username=user.username, count=len(log), log=log)
