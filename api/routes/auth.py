from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.db import get_db
from auth import service
from schemas.auth import Credentials, Message, Token

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/register", response_model=Message, status_code=201)
def register(credentials: Credentials, db: Session = Depends(get_db)):
    """Create an account. The password is stored as a bcrypt hash only."""
    return service.register(db, credentials.username, credentials.password)


@router.post("/login", response_model=Token)
def login(credentials: Credentials, db: Session = Depends(get_db)):
    """Exchange valid credentials for a signed bearer token."""
    return service.login(db, credentials.username, credentials.password)
