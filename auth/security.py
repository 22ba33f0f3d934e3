from passlib.context import CryptContext

from app.config import settings

MIN_BCRYPT_ROUNDS = 10

pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=max(settings.bcrypt_rounds, MIN_BCRYPT_ROUNDS),
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    return pwd_context.verify(password, hashed)


def dummy_verify() -> None:
    """Spend the same time as a real check when there is no hash to compare against."""
    pwd_context.dummy_verify()
