from datetime import date, timedelta

import pytest
from sqlmodel import Session

from tasktracker.core.errors import InvalidInput, NotFound
from tasktracker.models.task import TaskPriority
from tasktracker.schemas.task import TaskUpdate
from tasktracker.stores import tasks as task_store
from tasktracker.stores.credentials import register_user


@pytest.fixture()
def owner(session: Session):
    return register_user(session, "owner@x.com", "secret1")


@pytest.fixture()
def other(session: Session):
    return register_user(session, "other@x.com", "secret1")


def test_create_applies_defaults_and_trims(session: Session, owner) -> None:
    task = task_store.create_task(session, owner.id, "  Buy milk  ", description="   ")

    assert task.id is not None
    assert task.title == "Buy milk"
    assert task.description is None
    assert task.priority == TaskPriority.MEDIUM
    assert task.completed is False
    assert task.created_at == task.updated_at


@pytest.mark.parametrize("title", ["", "   ", None])
def test_create_rejects_blank_title(session: Session, owner, title) -> None:
    with pytest.raises(InvalidInput):
        task_store.create_task(session, owner.id, title)
    assert task_store.list_tasks(session, owner.id) == []


def test_new_task_is_first_when_sorted_by_created_desc(session: Session, owner) -> None:
    for title in ("one", "two", "three"):
        newest = task_store.create_task(session, owner.id, title)

    tasks = task_store.list_tasks(session, owner.id, "createdAt", "desc")
    assert tasks[0].id == newest.id
    assert [t.title for t in tasks] == ["three", "two", "one"]


def test_priority_sort_follows_declared_order(session: Session, owner) -> None:
    for priority in (TaskPriority.LOW, TaskPriority.URGENT, TaskPriority.HIGH, TaskPriority.MEDIUM):
        task_store.create_task(session, owner.id, priority.value.lower(), priority=priority)

    ascending = task_store.list_tasks(session, owner.id, "priority", "asc")
    assert [t.priority.value for t in ascending] == ["LOW", "MEDIUM", "HIGH", "URGENT"]

    descending = task_store.list_tasks(session, owner.id, "priority", "desc")
    assert [t.priority.value for t in descending] == ["URGENT", "HIGH", "MEDIUM", "LOW"]


def test_due_date_sort_puts_undated_tasks_last(session: Session, owner) -> None:
    task_store.create_task(session, owner.id, "undated")
    task_store.create_task(session, owner.id, "later", due_date=date(2030, 1, 2))
    task_store.create_task(session, owner.id, "sooner", due_date=date(2030, 1, 1))

    ascending = task_store.list_tasks(session, owner.id, "dueDate", "asc")
    assert [t.title for t in ascending] == ["sooner", "later", "undated"]

    descending = task_store.list_tasks(session, owner.id, "dueDate", "desc")
    assert [t.title for t in descending] == ["later", "sooner", "undated"]


def test_unknown_sort_options_fall_back_to_created_desc(session: Session, owner) -> None:
    first = task_store.create_task(session, owner.id, "first")
    second = task_store.create_task(session, owner.id, "second")

    tasks = task_store.list_tasks(session, owner.id, "title", "sideways")
    assert [t.id for t in tasks] == [second.id, first.id]


def test_equal_keys_keep_a_stable_order(session: Session, owner) -> None:
    for i in range(5):
        task_store.create_task(session, owner.id, f"task {i}", priority=TaskPriority.HIGH)

    runs = [[t.id for t in task_store.list_tasks(session, owner.id, "priority", "asc")] for _ in range(3)]
    assert runs[0] == runs[1] == runs[2]


def test_update_applies_only_present_fields(session: Session, owner) -> None:
    task = task_store.create_task(
        session, owner.id, "Buy milk", description="2 litres", priority=TaskPriority.HIGH
    )

    updated = task_store.update_task(session, owner.id, task.id, TaskUpdate(completed=True))

    assert updated.completed is True
    assert updated.title == "Buy milk"
    assert updated.description == "2 litres"
    assert updated.priority == TaskPriority.HIGH


def test_empty_update_only_moves_updated_at(session: Session, owner) -> None:
    task = task_store.create_task(session, owner.id, "Buy milk", due_date=date(2030, 5, 1))
    before = (task.title, task.description, task.due_date, task.priority, task.completed, task.created_at)
    previous_updated_at = task.updated_at

    updated = task_store.update_task(session, owner.id, task.id, TaskUpdate())

    after = (updated.title, updated.description, updated.due_date, updated.priority, updated.completed, updated.created_at)
    assert after == before
    assert updated.updated_at > previous_updated_at


def test_update_trims_and_clears(session: Session, owner) -> None:
    task = task_store.create_task(session, owner.id, "Buy milk", description="note", due_date=date(2030, 5, 1))

    changes = TaskUpdate(title="  Buy oat milk ", description=None, due_date=None)
    updated = task_store.update_task(session, owner.id, task.id, changes)

    assert updated.title == "Buy oat milk"
    assert updated.description is None
    assert updated.due_date is None


@pytest.mark.parametrize(
    "changes",
    [TaskUpdate(title="  "), TaskUpdate(title=None), TaskUpdate(priority=None), TaskUpdate(completed=None)],
)
def test_update_rejects_invalid_values_without_writing(session: Session, owner, changes) -> None:
    task = task_store.create_task(session, owner.id, "Buy milk")

    with pytest.raises(InvalidInput):
        task_store.update_task(session, owner.id, task.id, changes)

    session.expire_all()
    assert task_store.get_task(session, owner.id, task.id).title == "Buy milk"


def test_other_users_tasks_are_invisible(session: Session, owner, other) -> None:
    task = task_store.create_task(session, owner.id, "private")

    assert task_store.list_tasks(session, other.id) == []
    with pytest.raises(NotFound):
        task_store.get_task(session, other.id, task.id)
    with pytest.raises(NotFound):
        task_store.update_task(session, other.id, task.id, TaskUpdate(completed=True))
    with pytest.raises(NotFound):
        task_store.delete_task(session, other.id, task.id)

    assert task_store.get_task(session, owner.id, task.id).completed is False


def test_delete_removes_task_permanently(session: Session, owner) -> None:
    task_id = task_store.create_task(session, owner.id, "Buy milk").id

    task_store.delete_task(session, owner.id, task_id)

    assert task_id not in [t.id for t in task_store.list_tasks(session, owner.id)]
    with pytest.raises(NotFound):
        task_store.delete_task(session, owner.id, task_id)


def test_timestamps_round_trip_as_aware_utc(session: Session, owner) -> None:
    task_id = task_store.create_task(session, owner.id, "Buy milk").id
    session.expire_all()

    reloaded = task_store.get_task(session, owner.id, task_id)

    assert reloaded.created_at.utcoffset() == timedelta(0)
    assert reloaded.updated_at.utcoffset() == timedelta(0)
    assert reloaded.user.created_at.tzinfo is not None


@pytest.mark.parametrize("task_id", [0, -1, 2**63, 10**20])
def test_out_of_range_task_ids_are_not_found(session: Session, owner, task_id) -> None:
    with pytest.raises(NotFound):
        task_store.get_task(session, owner.id, task_id)
    with pytest.raises(NotFound):
        task_store.delete_task(session, owner.id, task_id)
