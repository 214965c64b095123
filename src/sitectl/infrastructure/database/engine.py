"""SQLite engine for the local platform state store (``.sitectl/state.db``).

The store is written by ``apply`` and ``certs set`` and read by ``status``
and ``reconcile``; two of those may run at once from different shells, so
connections use WAL journaling and wait on a locked database instead of
failing immediately.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from sitectl.infrastructure.database.schema import metadata

DB_FILENAME = "state.db"
BUSY_TIMEOUT_MS = 5000


def create_db_engine(db_path: Path) -> Engine:
    engine = create_engine(f"sqlite:///{db_path}", echo=False)

    @event.listens_for(engine, "connect")
    def _configure_connection(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute(f"PRAGMA busy_timeout={BUSY_TIMEOUT_MS}")
        cursor.close()

    return engine


def init_database(state_dir: Path) -> Engine:
    """Open ``{state_dir}/state.db``, creating the directory and tables as needed."""
    state_dir.mkdir(parents=True, exist_ok=True)
    engine = create_db_engine(state_dir / DB_FILENAME)
    metadata.create_all(engine)
    return engine
