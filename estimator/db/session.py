"""
Engine and request-scoped sessions for the estimator database.

SQLite is the default store for a single contractor install; any other
SQLAlchemy URL gets a small pre-pinged connection pool.
"""

from typing import Any, Generator

from sqlmodel import Session, SQLModel, create_engine

from estimator.core.config import settings
from estimator.core.logging import get_logger

logger = get_logger(__name__)


def _engine_options() -> dict[str, Any]:
    if settings.is_sqlite:
        # Route handlers run in a threadpool
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True, "pool_size": 5, "max_overflow": 10}


engine = create_engine(settings.SQLALCHEMY_DATABASE_URI, echo=settings.DEBUG, **_engine_options())


def init_db() -> None:
    """Create the profile, client, template, estimate and project tables."""
    # Table classes must be imported before create_all sees them
    from estimator.models import client, estimate, profile, project, template  # noqa: F401

    SQLModel.metadata.create_all(engine)
    logger.info(f"Database ready ({'sqlite' if settings.is_sqlite else 'server'})")


def get_session() -> Generator[Session, None, None]:
    """Yield one session per request; closed when the response is done."""
    with Session(engine) as session:
        yield session
