from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from battle_stats.db.base import Base


@dataclass(frozen=True)
class DatabaseConfig:
    database_url: str
    echo: bool = False

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")


def create_db_engine(cfg: DatabaseConfig) -> Engine:
    return create_engine(cfg.database_url, echo=cfg.echo, pool_pre_ping=True)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)


def ensure_schema(engine: Engine) -> None:
    """Create missing tables. Local SQLite files are used without running migrations."""

    import battle_stats.db.models  # noqa: F401

    Base.metadata.create_all(engine)
