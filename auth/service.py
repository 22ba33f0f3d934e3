"""
Auth service: user registration and login.
"""
from sqlalchemy.orm import Session

from app.credentials import create_user, get_user_by_username
from app.errors import AuthError, ConflictError
from app.logger import get_logger
from app.validation import validate_credentials
from auth.jwt_handler import create_access_token
from auth.security import dummy_verify, hash_password, verify_password

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


def register(db: Session, username: str, password: str) -> dict:
    credentials = validate_credentials(username, password).raise_for_errors()

    if get_user_by_username(db, credentials["username"]):
        raise ConflictError("Username already taken")

    user = create_user(db, credentials["username"], hash_password(credentials["password"]))
    logger.info(f"Registered user {user.username}")
    return {"message": "Account created"}


def login(db: Session, username: str, password: str) -> dict:
    credentials = validate_credentials(username, password).raise_for_errors()

    user = get_user_by_username(db, credentials["username"])
    if user is None:
        dummy_verify()
        logger.info("Login failed: unknown username")
        raise AuthError(INVALID_CREDENTIALS, status_code=400)

    if not verify_password(credentials["password"], str(user.password_hash)):
        logger.info(f"Login failed for {user.username}: wrong password")
        raise AuthError(INVALID_CREDENTIALS, status_code=400)

    token = create_access_token({"id": user.id, "username": user.username})
    logger.info(f"User {user.username} logged in")
    return {"token": token}
