"""SQLite state store for the local platform via SQLAlchemy Core."""

from sitectl.infrastructure.database.engine import create_db_engine, init_database
from sitectl.infrastructure.database.schema import apps, branches, certificates, domains, metadata

__all__ = [
    "apps",
    "branches",
    "certificates",
    "create_db_engine",
    "domains",
    "init_database",
    "metadata",
]
