"""Engine and session access for the peer evaluation store.

The store is a single SQLite file. Its location comes from an explicit
argument, then PEEREVAL_DB_PATH, then DEFAULT_DB_PATH. One engine and
one session factory exist per resolved file.
"""

from __future__ import annotations

import os
from pathlib import Path

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from peereval.db.schema import Base

DEFAULT_DB_PATH = Path("data/peereval.db")

# Keyed by absolute database path
_engines: dict[str, Engine] = {}
_session_factories: dict[str, sessionmaker] = {}


def resolve_db_path(db_path: Path | None = None) -> Path:
    """Resolve the database path from argument, environment or default."""
    if db_path is not None:
        return Path(db_path)
    return Path(os.environ.get("PEEREVAL_DB_PATH", str(DEFAULT_DB_PATH)))


def _store_key(db_path: Path) -> str:
    return str(db_path.resolve())


def get_engine(db_path: Path | None = None) -> Engine:
    """Return the engine for the evaluation store, creating it on first use.

    The parent directory is created along with the engine. Request
    handlers run on a thread pool, so the SQLite connection is shared
    through StaticPool with check_same_thread disabled.
    """
    path = resolve_db_path(db_path)
    key = _store_key(path)
    engine = _engines.get(key)
    if engine is None:
        path.parent.mkdir(parents=True, exist_ok=True)
        engine = create_engine(
            f"sqlite:///{path}",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        _engines[key] = engine
    return engine


def get_session(db_path: Path | None = None) -> Session:
    """Open a new session on the evaluation store. The caller closes it."""
    path = resolve_db_path(db_path)
    key = _store_key(path)
    factory = _session_factories.get(key)
    if factory is None:
        factory = _session_factories[key] = sessionmaker(bind=get_engine(path))
    return factory()


def init_db(db_path: Path | None = None) -> None:
    """Create the users, courses, batches, exams and evaluations tables if missing."""
    Base.metadata.create_all(get_engine(db_path))
