"""
Credential store: lookups and inserts on the users table.
"""
from typing import Optional

from sqlalchemy.orm import Session

from app.db import commit_or_raise
from app.models import User


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()


def create_user(db: Session, username: str, password_hash: str) -> User:
    user = User(username=username, password_hash=password_hash)
    db.add(user)
    commit_or_raise(db, conflict_message="Username already taken")
    db.refresh(user)
    return user
