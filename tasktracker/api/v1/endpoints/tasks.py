from fastapi import APIRouter, Depends, Query, Response, status
from sqlmodel import Session
from typing import List

from tasktracker.db.session import get_session
from tasktracker.models.user import User
from tasktracker.schemas.task import TaskCreate, TaskRead, TaskUpdate
from tasktracker.api.deps import get_current_user
from tasktracker.stores import tasks as task_store

router = APIRouter()

@router.get("", response_model=List[TaskRead])
def list_user_tasks(
    sort_by: str = Query(default=task_store.DEFAULT_SORT_BY, alias="sortBy"),
    sort_order: str = Query(default=task_store.DEFAULT_SORT_ORDER, alias="sortOrder"),
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    return task_store.list_tasks(session, current_user.id, sort_by=sort_by, sort_order=sort_order)

@router.post("", response_model=TaskRead, status_code=status.HTTP_201_CREATED)
def create_task(
    task_create: TaskCreate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    return task_store.create_task(
        session,
        current_user.id,
        title=task_create.title,
        description=task_create.description,
        due_date=task_create.due_date,
        priority=task_create.priority,
    )

@router.get("/{task_id}", response_model=TaskRead)
def get_task(
    task_id: int,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    return task_store.get_task(session, current_user.id, task_id)

@router.put("/{task_id}", response_model=TaskRead)
def update_task(
    task_id: int,
    task_update: TaskUpdate,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    return task_store.update_task(session, current_user.id, task_id, task_update)

@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(
    task_id: int,
    current_user: User = Depends(get_current_user),
    session: Session = Depends(get_session)
):
    task_store.delete_task(session, current_user.id, task_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
