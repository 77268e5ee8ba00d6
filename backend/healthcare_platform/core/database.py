import logging
from collections.abc import Generator
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from healthcare_platform.core.config import settings
from healthcare_platform.core.exceptions import ConflictError

logger = logging.getLogger(__name__)

engine = create_engine(
    settings.APP_DATABASE_DSN,
    connect_args=({"check_same_thread": False} if "sqlite" in settings.APP_DATABASE_DSN else {}),
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base: Any = declarative_base()


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Initialize database tables."""
    import healthcare_platform.models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def commit_or_conflict(db: Session, detail: str) -> None:
    """Commit the unit of work, turning a constraint violation into a 409.

    The unique indexes are the source of truth for uniqueness; the repository
    pre-checks only exist to produce a friendlier message in the common case.
    """
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Integrity violation on commit: %s", exc.orig)
        raise ConflictError(detail) from exc
