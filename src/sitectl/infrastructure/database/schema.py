"""SQLAlchemy Core table definitions for the local platform state store.

The local platform mirrors what a managed hosting platform records for an
application: the app itself, its branches, its domain associations, and
one certificate request per served hostname.
"""

from __future__ import annotations

from sqlalchemy import (
    Column,
    ForeignKey,
    Integer,
    MetaData,
    Table,
    Text,
    UniqueConstraint,
)

metadata = MetaData()

apps = Table(
    "apps",
    metadata,
    Column("app_id", Text, primary_key=True),
    Column("name", Text, nullable=False, unique=True),
    Column("repository", Text, nullable=False),
    Column("default_domain", Text, nullable=False),
    Column("auto_branch_deletion", Integer, default=1, server_default="1"),
    Column("custom_rules", Text),  # JSON array
    Column("created", Text, nullable=False),
    Column("modified", Text, nullable=False),
)

branches = Table(
    "branches",
    metadata,
    Column("app_id", Text, ForeignKey("apps.app_id"), nullable=False),
    Column("branch_name", Text, nullable=False),
    Column("stage", Text, nullable=False),
    Column("auto_build", Integer, default=1, server_default="1"),
    Column("indexing", Text, nullable=False),
    Column("environment_variables", Text),  # JSON object
    Column("custom_headers", Text),  # JSON array
    Column("build_spec", Text, nullable=False),  # JSON document
    Column("cache_namespace", Text, nullable=False),
    Column("created", Text, nullable=False),
    Column("modified", Text, nullable=False),
    UniqueConstraint("app_id", "branch_name"),
)

domains = Table(
    "domains",
    metadata,
    Column("hostname", Text, primary_key=True),
    Column("app_id", Text, ForeignKey("apps.app_id"), nullable=False),
    Column("domain_name", Text, nullable=False),
    Column("prefix", Text, default="", server_default=""),
    Column("branch_name", Text, nullable=False),
    Column("zone", Text, nullable=False),
    Column("recorded_status", Text),  # certificate state as of the last apply/reconcile
    Column("created", Text, nullable=False),
    Column("modified", Text, nullable=False),
)

certificates = Table(
    "certificates",
    metadata,
    Column("hostname", Text, primary_key=True),
    Column("app_id", Text, ForeignKey("apps.app_id"), nullable=False),
    Column("zone", Text, nullable=False),
    Column("status", Text, nullable=False),  # pending | validated | failed
    Column("requested", Text, nullable=False),
    Column("updated", Text, nullable=False),
)
