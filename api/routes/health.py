from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from app.db import check_db_connection

router = APIRouter(tags=["Health"])


@router.get("/", response_class=PlainTextResponse)
def root():
    return "Task Manager API online"


@router.get("/health")
def health():
    """Report whether the database answers."""
    database = check_db_connection()
    return {"status": "healthy" if database else "degraded", "database": database}
