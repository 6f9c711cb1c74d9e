import datetime as dt

import pytest

from exercise_tracker import models
from exercise_tracker.exceptions import ConflictError
from exercise_tracker.repositories import ExerciseRepository, UserRepository


def test_user_create_and_lookup(session):
    repo = UserRepository(session)
    user = repo.create(models.User(username="alice"))
    assert len(user.id) == 32
    assert repo.get(user.id).username == "alice"
    assert repo.get_by_username("alice").id == user.id
    assert repo.get_by_username("Alice") is None
    assert repo.get("missing") is None
    assert [u.username for u in repo.list_all()] == ["alice"]


def test_unique_index_maps_to_conflict(session):
    repo = UserRepository(session)
    repo.create(models.User(username="bob"))
    with pytest.raises(ConflictError):
        repo.create(models.User(username="bob"))
    # session stays usable after the rollback
    assert len(repo.list_all()) == 1


def test_find_for_user_filters_limits_and_projects(session):
    user = UserRepository(session).create(models.User(username="carol"))
    other = UserRepository(session).create(models.User(username="dave"))
    repo = ExerciseRepository(session)
    for day in (1, 5, 10, 15):
        repo.create(models.Exercise(description=f"d{day}", duration=day, date=dt.date(2023, 1, day), user_id=user.id))
    repo.create(models.Exercise(description="x", duration=1, date=dt.date(2023, 1, 5), user_id=other.id))

    rows = repo.find_for_user(user.id)
    assert [tuple(r) for r in rows] == [
        ("d1", 1, dt.date(2023, 1, 1)),
        ("d5", 5, dt.date(2023, 1, 5)),
        ("d10", 10, dt.date(2023, 1, 10)),
        ("d15", 15, dt.date(2023, 1, 15)),
    ]
    ranged = repo.find_for_user(user.id, date_from=dt.date(2023, 1, 5), date_to=dt.date(2023, 1, 10))
    assert [r[0] for r in ranged] == ["d5", "d10"]
    assert [r[0] for r in repo.find_for_user(user.id, date_from=dt.date(2023, 1, 11))] == ["d15"]
    assert len(repo.find_for_user(user.id, limit=2)) == 2


def test_log_keeps_insertion_order_for_same_date(session):
    user = UserRepository(session).create(models.User(username="erin"))
    repo = ExerciseRepository(session)
    ids = []
    for name in ("c", "a", "b"):
        ids.append(repo.create(models.Exercise(description=name, duration=1, date=dt.date(2023, 3, 1), user_id=user.id)).id)
    assert ids == sorted(ids)
    assert [r[0] for r in repo.find_for_user(user.id)] == ["c", "a", "b"]
