from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.orm import Session

from battle_stats.core.config import settings
from battle_stats.db import DatabaseConfig, create_db_engine, create_session_factory, ensure_schema


@contextmanager
def session_scope() -> Iterator[Session]:
    """
    Context-managed DB session for CLI commands.
    Ensures proper close and rolls back on exception.
    """
    cfg = DatabaseConfig(database_url=settings.database_url, echo=settings.db_echo)
    engine = create_db_engine(cfg)
    if cfg.is_sqlite:
        ensure_schema(engine)
    SessionLocal = create_session_factory(engine)
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
        engine.dispose()
