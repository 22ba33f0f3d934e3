"""
Member directory: CRUD over the team roster.
"""
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from app.db import commit_or_raise
from app.errors import ConflictError, NotFoundError
from app.logger import get_logger
from app.models import Member
from app.validation import validate_member

logger = get_logger(__name__)

EMAIL_TAKEN = "Email already in use"


def _get_or_404(db: Session, member_id: str) -> Member:
    member = db.query(Member).filter(Member.id == member_id).first()
    if not member:
        raise NotFoundError("Member not found")
    return member


def _email_taken(db: Session, email: str, exclude_id: str = None) -> bool:
    query = db.query(Member.id).filter(Member.email == email)
    if exclude_id:
        query = query.filter(Member.id != exclude_id)
    return query.first() is not None


def create_member(db: Session, payload: Dict[str, Any]) -> Member:
    fields = validate_member(payload).raise_for_errors()

    if _email_taken(db, fields["email"]):
        raise ConflictError(EMAIL_TAKEN)

    member = Member(**fields)
    db.add(member)
    commit_or_raise(db, conflict_message=EMAIL_TAKEN)
    db.refresh(member)
    logger.info(f"Created member {member.id} ({member.email})")
    return member


def list_members(db: Session) -> List[Member]:
    return db.query(Member).order_by(Member.name.asc()).all()


def update_member(db: Session, member_id: str, payload: Dict[str, Any]) -> Member:
    member = _get_or_404(db, member_id)
    fields = validate_member(payload, partial=True).raise_for_errors()

    if "email" in fields and _email_taken(db, fields["email"], exclude_id=member_id):
        raise ConflictError(EMAIL_TAKEN)

    for key, value in fields.items():
        setattr(member, key, value)
    commit_or_raise(db, conflict_message=EMAIL_TAKEN)
    db.refresh(member)
    logger.info(f"Updated member {member.id}: {', '.join(sorted(fields)) or 'no changes'}")
    return member


def delete_member(db: Session, member_id: str) -> dict:
    member = _get_or_404(db, member_id)
    db.delete(member)
    commit_or_raise(db)
    logger.info(f"Deleted member {member_id}")
    return {"message": "Member deleted"}
