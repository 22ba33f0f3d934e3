from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app import members
from app.db import get_db
from auth.dependencies import require_auth
from schemas.auth import Message
from schemas.member import MemberCreate, MemberOut, MemberUpdate

# Every member route requires a bearer token
router = APIRouter(
    prefix="/api/members",
    tags=["Members"],
    dependencies=[Depends(require_auth)],
)


@router.get("", response_model=List[MemberOut])
def list_members(db: Session = Depends(get_db)):
    """List all members ordered by name."""
    return [member.to_dict() for member in members.list_members(db)]


@router.post("", response_model=MemberOut, status_code=201)
def create_member(body: MemberCreate, db: Session = Depends(get_db)):
    return members.create_member(db, body.model_dump(exclude_unset=True)).to_dict()


@router.put("/{member_id}", response_model=MemberOut)
def update_member(member_id: str, body: MemberUpdate, db: Session = Depends(get_db)):
    return members.update_member(db, member_id, body.model_dump(exclude_unset=True)).to_dict()


@router.delete("/{member_id}", response_model=Message)
def delete_member(member_id: str, db: Session = Depends(get_db)):
    return members.delete_member(db, member_id)
