"""Repository classes encapsulating database operations.

Each repository is small and focused on a single table (users,
exercises). Repositories return SQLModel objects, commit where
appropriate and translate driver failures into `exceptions` types.
"""

import datetime as dt
from typing import List, Optional, Sequence

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from . import models
from .exceptions import ConflictError, StorageError


class UserRepository:
    """CRUD operations for `User` objects."""
    def __init__(self, session: Session):
        self.session = session

    def create(self, user: models.User) -> models.User:
        """Persist a new user and return the managed instance.

        A unique-index violation on `username` is reported as a
        `ConflictError`, the same as the explicit pre-insert check.
        """
        self.session.add(user)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            raise ConflictError("Username already exists")
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError(str(e)) from e
        self.session.refresh(user)
        return user

    def list_all(self) -> List[models.User]:
        """Return every user."""
        try:
            return list(self.session.exec(select(models.User)).all())
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e

    def get(self, user_id: str) -> Optional[models.User]:
        """Get a `User` by primary key."""
        try:
            return self.session.get(models.User, user_id)
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e

    def get_by_username(self, username: str) -> Optional[models.User]:
        """Return a `User` by username or `None` if not found."""
        stmt = select(models.User).where(models.User.username == username)
        try:
            return self.session.exec(stmt).first()
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e


class ExerciseRepository:
    """Persist exercises and query a user's log."""
    def __init__(self, session: Session):
        self.session = session

    def create(self, exercise: models.Exercise) -> models.Exercise:
        """Persist a new exercise and return the managed instance."""
        self.session.add(exercise)
        try:
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            raise StorageError(str(e)) from e
        self.session.refresh(exercise)
        return exercise

    def find_for_user(
        self,
        user_id: str,
        date_from: Optional[dt.date] = None,
        date_to: Optional[dt.date] = None,
        limit: Optional[int] = None,
    ) -> Sequence[tuple]:
        """Return `(description, duration, date)` rows for `user_id`.

        Both date bounds are inclusive and optional. Rows come back in
        insertion order, capped at `limit` when it is given.
        """
        stmt = select(
            models.Exercise.description,
            models.Exercise.duration,
            models.Exercise.date,
        ).where(models.Exercise.user_id == user_id)
        if date_from is not None:
            stmt = stmt.where(models.Exercise.date >= date_from)
        if date_to is not None:
            stmt = stmt.where(models.Exercise.date <= date_to)
        stmt = stmt.order_by(models.Exercise.id)
        if limit is not None:
            stmt = stmt.limit(limit)
        try:
            return self.session.exec(stmt).all()
        except SQLAlchemyError as e:
            raise StorageError(str(e)) from e
