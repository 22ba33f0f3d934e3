"""
Database engine and session management.
"""
from typing import Generator, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from app.config import settings
from app.errors import ConflictError, InternalError
from app.logger import get_logger

logger = get_logger(__name__)


def _build_engine(database_url: str):
    """Create engine safely for SQLite and server databases."""
    if database_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
        # In-memory databases live as long as their single connection
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            return create_engine(
                database_url,
                connect_args=connect_args,
                poolclass=StaticPool,
            )
        return create_engine(database_url, connect_args=connect_args)
    return create_engine(database_url, pool_pre_ping=True)


engine = _build_engine(settings.database_url)

# Session factory
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


def get_db() -> Generator[Session, None, None]:
    """
    Dependency for FastAPI to get database session.
    Yields a session and ensures it's closed after use.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def commit_or_raise(db: Session, conflict_message: Optional[str] = None) -> None:
    """
    Commit the session, translating database failures into API errors.
    A unique-constraint violation becomes ConflictError when a message is given.
    """
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if conflict_message:
            raise ConflictError(conflict_message) from e
        logger.error(f"Integrity error on commit: {e}")
        raise InternalError("Database error") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Database session error: {e}")
        raise InternalError("Database error") from e


def init_db() -> None:
    """
    Initialize database tables.
    Call this on application startup.
    """
    from app.models import Base

    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created successfully.")


def check_db_connection() -> bool:
    """
    Check if database connection is healthy.
    """
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True
    except Exception as e:
        logger.error(f"Database connection check failed: {e}")
        return False


@event.listens_for(engine, "connect")
def on_connect(dbapi_conn, connection_record):
    """Log new database connections."""
    logger.debug("New database connection established")
