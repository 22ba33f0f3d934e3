"""
Task registry: CRUD plus the filtered, sorted and paginated listing.
"""
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from app.db import commit_or_raise
from app.errors import NotFoundError
from app.logger import get_logger
from app.models import Task

logger = get_logger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
DEFAULT_SORT = "createdAt"
# Upper bound for OFFSET and LIMIT values
MAX_SQL_INT = 2**31 - 1

# Public field names (and their snake_case spellings) accepted by ?sort=
SORTABLE_COLUMNS = {
    "id": Task.id,
    "title": Task.title,
    "description": Task.description,
    "priority": Task.priority,
    "status": Task.status,
    "assignee": Task.assignee_id,
    "assignee_id": Task.assignee_id,
    "dueDate": Task.due_date,
    "due_date": Task.due_date,
    "createdAt": Task.created_at,
    "created_at": Task.created_at,
    "updatedAt": Task.updated_at,
    "updated_at": Task.updated_at,
}


def parse_positive_int(raw: Optional[str], default: int) -> int:
    """Leading-digit parse of a query value, capped at MAX_SQL_INT; anything unusable gives the default."""
    if raw is None:
        return default
    digits = ""
    for char in str(raw).strip():
        if char not in "0123456789":
            break
        digits += char
    digits = digits.lstrip("0")
    if len(digits) > len(str(MAX_SQL_INT)):
        return MAX_SQL_INT
    value = int(digits) if digits else 0
    return min(value, MAX_SQL_INT) if value > 0 else default


def _get_or_404(db: Session, task_id: str) -> Task:
    task = db.query(Task).filter(Task.id == task_id).first()
    if not task:
        raise NotFoundError("Task not found")
    return task


def create_task(db: Session, fields: Dict[str, Any]) -> Task:
    task = Task(**fields)
    db.add(task)
    commit_or_raise(db)
    db.refresh(task)
    logger.info(f"Created task {task.id} ({task.priority}/{task.status})")
    return task


def list_tasks(
    db: Session,
    priority: Optional[str] = None,
    status: Optional[str] = None,
    assignee: Optional[str] = None,
    sort: Optional[str] = None,
    order: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
) -> dict:
    page_number = parse_positive_int(page, DEFAULT_PAGE)
    page_size = parse_positive_int(limit, DEFAULT_LIMIT)
    skip = min((page_number - 1) * page_size, MAX_SQL_INT)

    query = db.query(Task)
    if priority:
        query = query.filter(Task.priority == priority)
    if status:
        query = query.filter(Task.status == status)
    if assignee:
        query = query.filter(Task.assignee_id == assignee)

    total = query.count()

    column = SORTABLE_COLUMNS.get(sort or DEFAULT_SORT, SORTABLE_COLUMNS[DEFAULT_SORT])
    direction = column.desc() if order == "desc" else column.asc()
    tasks = (
        query.order_by(direction, Task.created_at.asc(), Task.id.asc())
        .offset(skip)
        .limit(page_size)
        .all()
    )

    return {"page": page_number, "limit": page_size, "total": total, "tasks": tasks}


def get_task(db: Session, task_id: str) -> Task:
    return _get_or_404(db, task_id)


def update_task(db: Session, task_id: str, fields: Dict[str, Any]) -> Task:
    task = _get_or_404(db, task_id)
    for key, value in fields.items():
        setattr(task, key, value)
    commit_or_raise(db)
    db.refresh(task)
    logger.info(f"Updated task {task.id}")
    return task


def delete_task(db: Session, task_id: str) -> dict:
    task = _get_or_404(db, task_id)
    db.delete(task)
    commit_or_raise(db)
    logger.info(f"Deleted task {task_id}")
    return {"message": "Task deleted"}
