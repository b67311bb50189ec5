from datetime import datetime, timezone

import pytest

from app.core.errors import NotFoundError, PreconditionFailedError
from app.db.models.base import as_utc
from app.db.repositories.todos import TodoRepository
from app.db.repositories.users import UserRepository
from app.features.todos.services import TodoService

NOW = datetime(2025, 1, 2, 3, 4, 5, tzinfo=timezone.utc)


@pytest.fixture()
def owners(db_session):
    users = UserRepository(db_session)
    return (
        users.create(email="a@x.com", hashed_password="h").id,
        users.create(email="b@x.com", hashed_password="h").id,
    )


@pytest.fixture()
def svc(db_session):
    return TodoService(TodoRepository(db_session), now_fn=lambda: NOW)


def test_completion_invariant_follows_the_flag(svc, owners):
    owner, _ = owners
    todo = svc.create(owner, title="t", description="d")
    assert (todo.is_completed, todo.completed_on) == (False, None)

    todo = svc.mark_complete(todo.id, owner)
    assert todo.is_completed and as_utc(todo.completed_on) == NOW

    todo = svc.patch(todo.id, owner, {"is_completed": False})
    assert (todo.is_completed, todo.completed_on) == (False, None)

    todo = svc.replace(todo.id, owner, title="t", description="d", is_completed=True)
    assert todo.is_completed and as_utc(todo.completed_on) == NOW


def test_every_write_bumps_the_version(svc, owners):
    owner, _ = owners
    todo = svc.create(owner, title="t", description="d")
    assert todo.version == 1
    todo = svc.patch(todo.id, owner, {"title": "t2"})
    assert todo.version == 2
    todo = svc.mark_complete(todo.id, owner)
    assert todo.version == 3


def test_empty_patch_changes_nothing(svc, owners):
    owner, _ = owners
    todo = svc.create(owner, title="t", description="d")
    same = svc.patch(todo.id, owner, {})
    assert same.version == 1
    assert same.title == "t"


def test_stale_version_is_refused(svc, owners):
    owner, _ = owners
    todo = svc.create(owner, title="t", description="d")
    svc.patch(todo.id, owner, {"title": "t2"}, expected_version=1)
    with pytest.raises(PreconditionFailedError):
        svc.mark_complete(todo.id, owner, expected_version=1)
    with pytest.raises(PreconditionFailedError):
        svc.delete(todo.id, owner, expected_version=1)


def test_lookups_are_owner_scoped(svc, owners):
    owner, other = owners
    todo = svc.create(owner, title="t", description="d")
    with pytest.raises(NotFoundError):
        svc.get(todo.id, other)
    with pytest.raises(NotFoundError):
        svc.delete(todo.id, other)
    assert svc.list_active(other) == []
    assert [t.id for t in svc.list_active(owner)] == [todo.id]


def test_completed_list_owner_check(db_session, owners):
    owner, other = owners
    repo = TodoRepository(db_session)
    strict = TodoService(repo)
    legacy = TodoService(repo, completed_list_owner_check=False)
    todo = strict.mark_complete(strict.create(owner, title="t", description="d").id, owner)

    assert [t.id for t in strict.list_completed(owner, caller_id=owner)] == [todo.id]
    with pytest.raises(NotFoundError):
        strict.list_completed(owner, caller_id=other)
    assert [t.id for t in legacy.list_completed(owner, caller_id=other)] == [todo.id]


def test_delete_returns_snapshot(svc, owners):
    owner, _ = owners
    todo = svc.create(owner, title="t", description="d")
    todo_id = todo.id
    deleted = svc.delete(todo_id, owner)
    assert deleted.id == todo_id
    assert deleted.title == "t"
    with pytest.raises(NotFoundError):
        svc.get(todo_id, owner)
