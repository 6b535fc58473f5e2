import logging
from datetime import date, timedelta
from typing import List, Optional

from sqlalchemy import case, nulls_last
from sqlmodel import Session, select

from ..core.errors import InvalidInput, NotFound
from ..models.base import MAX_DB_ID, utcnow
from ..models.task import Task, TaskPriority
from ..schemas.task import TaskUpdate

logger = logging.getLogger(__name__)

SORT_FIELDS = ("createdAt", "dueDate", "priority")
DEFAULT_SORT_BY = "createdAt"
DEFAULT_SORT_ORDER = "desc"
PRIORITY_RANK = {priority: rank for rank, priority in enumerate(TaskPriority)}


def _clean_title(title: Optional[str]) -> str:
    title = (title or "").strip()
    if not title:
        raise InvalidInput("Title is required")
    return title


def _clean_description(description: Optional[str]) -> Optional[str]:
    if description is None:
        return None
    return description.strip() or None


def _sort_column(sort_by: str):
    if sort_by == "dueDate":
        return Task.due_date
    if sort_by == "priority":
        # Rank by the order the labels are declared in TaskPriority
        return case(PRIORITY_RANK, value=Task.priority)
    return Task.created_at


def create_task(
    session: Session,
    owner_id: int,
    title: Optional[str],
    description: Optional[str] = None,
    due_date: Optional[date] = None,
    priority: Optional[TaskPriority] = None,
) -> Task:
    now = utcnow()
    task = Task(
        user_id=owner_id,
        title=_clean_title(title),
        description=_clean_description(description),
        due_date=due_date,
        priority=priority or TaskPriority.MEDIUM,
        completed=False,
        created_at=now,
        updated_at=now,
    )
    session.add(task)
    session.commit()
    session.refresh(task)

    logger.debug("Created task id=%s user_id=%s", task.id, owner_id)
    return task


def list_tasks(
    session: Session,
    owner_id: int,
    sort_by: str = DEFAULT_SORT_BY,
    sort_order: str = DEFAULT_SORT_ORDER,
) -> List[Task]:
    """
    Return every task owned by ``owner_id``.

    Unknown ``sort_by`` values fall back to creation time and unknown
    ``sort_order`` values to descending. Equal keys are ordered by id in the
    same direction; tasks without a due date come last either way.
    """
    if sort_by not in SORT_FIELDS:
        sort_by = DEFAULT_SORT_BY
    descending = (sort_order or DEFAULT_SORT_ORDER).lower() != "asc"

    column = _sort_column(sort_by)
    primary = column.desc() if descending else column.asc()
    if sort_by == "dueDate":
        primary = nulls_last(primary)
    tiebreak = Task.id.desc() if descending else Task.id.asc()

    statement = select(Task).where(Task.user_id == owner_id).order_by(primary, tiebreak)
    return list(session.exec(statement).all())


def get_task(session: Session, owner_id: int, task_id: int) -> Task:
    if not 0 < task_id <= MAX_DB_ID:
        raise NotFound("Task not found")
    # Someone else's task looks exactly like a missing one
    statement = select(Task).where(Task.id == task_id, Task.user_id == owner_id)
    task = session.exec(statement).first()
    if task is None:
        raise NotFound("Task not found")
    return task


def update_task(session: Session, owner_id: int, task_id: int, changes: TaskUpdate) -> Task:
    task = get_task(session, owner_id, task_id)

    task_data = changes.model_dump(exclude_unset=True)
    if "title" in task_data:
        task_data["title"] = _clean_title(task_data["title"])
    if "description" in task_data:
        task_data["description"] = _clean_description(task_data["description"])
    for key in ("priority", "completed"):
        if key in task_data and task_data[key] is None:
            raise InvalidInput(f"{key} cannot be null")

    for key, value in task_data.items():
        setattr(task, key, value)

    # updated_at must move forward even when the clock has not
    task.updated_at = max(utcnow(), task.updated_at + timedelta(microseconds=1))
    session.add(task)
    session.commit()
    session.refresh(task)

    logger.debug("Updated task id=%s fields=%s", task.id, sorted(task_data))
    return task


def delete_task(session: Session, owner_id: int, task_id: int) -> None:
    task = get_task(session, owner_id, task_id)
    session.delete(task)
    session.commit()
    logger.debug("Deleted task id=%s user_id=%s", task_id, owner_id)
