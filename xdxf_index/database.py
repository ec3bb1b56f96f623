import os
from functools import lru_cache
from typing import Any, Dict, Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, declarative_base, sessionmaker


Base = declarative_base()


@lru_cache
def _database_url() -> str:
    return os.getenv("DATABASE_URL", "sqlite:///xdxf_index.db")


def _engine_options(url: str) -> Dict[str, Any]:
    options: Dict[str, Any] = {"echo": False, "future": True, "pool_pre_ping": True}
    if make_url(url).get_backend_name() == "sqlite":
        # Sessions are opened in FastAPI's threadpool, not the creating thread.
        options["connect_args"] = {"check_same_thread": False}
    return options


def _create_engine() -> Engine:
    url = _database_url()
    return create_engine(url, **_engine_options(url))


engine = _create_engine()

SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
    future=True,
)


def get_session() -> Iterator[Session]:
    """Request-scoped session: committed on success, rolled back on error."""

    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


def init_db(bind: Optional[Engine] = None) -> None:
    """Create the article and abbreviation tables if they are missing."""

    from xdxf_index import models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
