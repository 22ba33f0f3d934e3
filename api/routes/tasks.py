from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.orm import Session

from app import tasks
from app.db import get_db
from app.validation import validate_task
from schemas.auth import Message
from schemas.task import TaskOut, TaskPage

router = APIRouter(prefix="/api/tasks", tags=["Tasks"])


@router.get("", response_model=TaskPage)
def list_tasks(
    priority: Optional[str] = Query(None, description="Exact match: low, medium or high"),
    status: Optional[str] = Query(None, description="Exact match: todo, inprogress or done"),
    assignee: Optional[str] = Query(None, description="Member id"),
    sort: Optional[str] = Query(None, description="Field to sort on, createdAt by default"),
    order: Optional[str] = Query(None, description="asc (default) or desc"),
    page: Optional[str] = Query(None, description="1-based page number"),
    limit: Optional[str] = Query(None, description="Page size, 10 by default"),
    db: Session = Depends(get_db),
):
    """List tasks with optional filters, sorting and pagination."""
    result = tasks.list_tasks(
        db,
        priority=priority,
        status=status,
        assignee=assignee,
        sort=sort,
        order=order,
        page=page,
        limit=limit,
    )
    result["tasks"] = [task.to_dict() for task in result["tasks"]]
    return result


@router.get("/{task_id}", response_model=TaskOut)
def get_task(task_id: str, db: Session = Depends(get_db)):
    return tasks.get_task(db, task_id).to_dict()


@router.post("", response_model=TaskOut, status_code=201)
def create_task(payload: Any = Body(...), db: Session = Depends(get_db)):
    """Create a task. Missing priority and status default to medium and todo."""
    fields = validate_task(payload).raise_for_errors()
    return tasks.create_task(db, fields).to_dict()


@router.put("/{task_id}", response_model=TaskOut)
def update_task(task_id: str, payload: Any = Body(...), db: Session = Depends(get_db)):
    fields = validate_task(payload).raise_for_errors()
    return tasks.update_task(db, task_id, fields).to_dict()


@router.delete("/{task_id}", response_model=Message)
def delete_task(task_id: str, db: Session = Depends(get_db)):
    return tasks.delete_task(db, task_id)
