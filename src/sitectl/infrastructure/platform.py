"""LocalPlatform: file-backed stand-in for the managed hosting platform.

Records applications, branches, domain associations, and certificate
requests in the SQLite state store with the same upsert semantics the
managed platform exposes:

- Apps are keyed by name. Re-registering updates, never duplicates.
- Branches are keyed by ``(app_id, branch_name)``.
- Domain associations are keyed by served hostname; a hostname held by
  one app is never handed to another.
- A certificate request for a hostname that already has a pending or
  validated certificate is a no-op; a failed one is re-requested.

Certificate validation itself happens outside this process. The state
store only holds the last status written by whoever validates (the
platform, an operator, or a test).
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, insert, select, update

from sitectl.infrastructure.database.engine import init_database
from sitectl.infrastructure.database.schema import apps, branches, certificates, domains

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

CREATED = "created"
UPDATED = "updated"
UNCHANGED = "unchanged"
CONFLICT = "conflict"


def now_iso() -> str:
    """Current UTC time as ISO 8601."""
    return datetime.now(UTC).isoformat()


def _dumps(value: Any) -> str:
    return json.dumps(value, sort_keys=True, separators=(",", ":"))


class LocalPlatform:
    """Platform state store rooted at a state directory."""

    def __init__(self, state_dir: Path) -> None:
        self._state_dir = state_dir
        self._engine: Engine | None = None

    @property
    def engine(self) -> Engine:
        """SQLAlchemy engine (database created lazily on first access)."""
        if self._engine is None:
            self._engine = init_database(self._state_dir)
        return self._engine

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None

    # ------------------------------------------------------------------
    # Apps
    # ------------------------------------------------------------------

    def register_app(self, app: dict[str, Any]) -> dict[str, Any]:
        """Upsert an application by name. Returns ``{app_id, action}``."""
        now = now_iso()
        values = {
            "app_id": app["appId"],
            "repository": app["repository"]["url"],
            "default_domain": app["defaultDomain"],
            "auto_branch_deletion": int(bool(app.get("autoBranchDeletion", True))),
            "custom_rules": _dumps(app.get("customRules", [])),
        }
        with self.engine.begin() as conn:
            row = conn.execute(select(apps).where(apps.c.name == app["name"])).mappings().first()
            if row is None:
                conn.execute(
                    insert(apps).values(name=app["name"], created=now, modified=now, **values)
                )
                action = CREATED
            elif any(row[k] != v for k, v in values.items()):
                conn.execute(
                    update(apps).where(apps.c.name == app["name"]).values(modified=now, **values)
                )
                action = UPDATED
            else:
                action = UNCHANGED
        logger.debug("register_app %s: %s", app["name"], action)
        return {"app_id": values["app_id"], "action": action}

    def get_app(self, name: str) -> dict[str, Any] | None:
        with self.engine.connect() as conn:
            row = conn.execute(select(apps).where(apps.c.name == name)).mappings().first()
        if row is None:
            return None
        data = dict(row)
        data["custom_rules"] = json.loads(data["custom_rules"] or "[]")
        data["auto_branch_deletion"] = bool(data["auto_branch_deletion"])
        return data

    # ------------------------------------------------------------------
    # Branches
    # ------------------------------------------------------------------

    def upsert_branch(self, app_id: str, branch: dict[str, Any]) -> str:
        """Create or update one branch. Returns the action taken."""
        now = now_iso()
        values = {
            "stage": branch["stage"],
            "auto_build": int(bool(branch["enableAutoBuild"])),
            "indexing": branch["indexing"],
            "environment_variables": _dumps(branch.get("environmentVariables", {})),
            "custom_headers": _dumps(branch.get("customHeaders", [])),
            "build_spec": _dumps(branch["buildSpec"]),
            "cache_namespace": branch["cacheNamespace"],
        }
        key = (branches.c.app_id == app_id) & (branches.c.branch_name == branch["branchName"])
        with self.engine.begin() as conn:
            row = conn.execute(select(branches).where(key)).mappings().first()
            if row is None:
                conn.execute(
                    insert(branches).values(
                        app_id=app_id,
                        branch_name=branch["branchName"],
                        created=now,
                        modified=now,
                        **values,
                    )
                )
                return CREATED
            if any(row[k] != v for k, v in values.items()):
                conn.execute(update(branches).where(key).values(modified=now, **values))
                return UPDATED
        return UNCHANGED

    def remove_branch(self, app_id: str, branch_name: str) -> bool:
        """Delete a branch with its domain associations and their certificates."""
        owned = (domains.c.app_id == app_id) & (domains.c.branch_name == branch_name)
        with self.engine.begin() as conn:
            conn.execute(
                delete(certificates).where(
                    certificates.c.hostname.in_(select(domains.c.hostname).where(owned))
                )
            )
            conn.execute(delete(domains).where(owned))
            result = conn.execute(
                delete(branches).where(
                    (branches.c.app_id == app_id) & (branches.c.branch_name == branch_name)
                )
            )
        return result.rowcount > 0

    def list_branches(self, app_id: str) -> list[dict[str, Any]]:
        with self.engine.connect() as conn:
            rows = (
                conn.execute(
                    select(branches)
                    .where(branches.c.app_id == app_id)
                    .order_by(branches.c.created, branches.c.branch_name)
                )
                .mappings()
                .all()
            )
        result = []
        for row in rows:
            data = dict(row)
            data["auto_build"] = bool(data["auto_build"])
            data["environment_variables"] = json.loads(data["environment_variables"] or "{}")
            data["custom_headers"] = json.loads(data["custom_headers"] or "[]")
            data["build_spec"] = json.loads(data["build_spec"])
            result.append(data)
        return result

    # ------------------------------------------------------------------
    # Domains and certificates
    # ------------------------------------------------------------------

    def upsert_domain(self, app_id: str, binding: dict[str, Any]) -> str:
        """Associate a served hostname with a branch. Returns the action taken.

        A hostname serves one application at a time: when another app
        already holds it, nothing is written and :data:`CONFLICT` is
        returned.
        """
        now = now_iso()
        values = {
            "app_id": app_id,
            "domain_name": binding["domainName"],
            "prefix": binding["prefix"],
            "branch_name": binding["branchName"],
            "zone": binding["zone"],
        }
        hostname = binding["hostname"]
        key = domains.c.hostname == hostname
        with self.engine.begin() as conn:
            row = conn.execute(select(domains).where(key)).mappings().first()
            if row is not None and row["app_id"] != app_id:
                logger.warning("%s is held by app %s", hostname, row["app_id"])
                return CONFLICT
            if row is None:
                conn.execute(
                    insert(domains).values(hostname=hostname, created=now, modified=now, **values)
                )
                return CREATED
            if any(row[k] != v for k, v in values.items()):
                conn.execute(
                    update(domains).where(key).values(modified=now, **values)
                )
                return UPDATED
        return UNCHANGED

    def remove_domain(self, app_id: str, hostname: str) -> bool:
        """Drop a domain association of *app_id* and its certificate."""
        with self.engine.begin() as conn:
            result = conn.execute(
                delete(domains).where(
                    (domains.c.app_id == app_id) & (domains.c.hostname == hostname)
                )
            )
            if result.rowcount:
                conn.execute(
                    delete(certificates).where(
                        (certificates.c.app_id == app_id) & (certificates.c.hostname == hostname)
                    )
                )
        return result.rowcount > 0

    def record_certificate_status(self, app_id: str, hostname: str, status: str) -> bool:
        """Remember the certificate state sitectl last reported for *hostname*.

        Kept apart from the certificate itself so reconciliation can tell
        a fresh validation from one it has already seen.
        """
        with self.engine.begin() as conn:
            result = conn.execute(
                update(domains)
                .where((domains.c.app_id == app_id) & (domains.c.hostname == hostname))
                .values(recorded_status=status)
            )
        return result.rowcount > 0

    def list_domains(self, app_id: str) -> list[dict[str, Any]]:
        query = (
            select(domains, certificates.c.status)
            .select_from(
                domains.outerjoin(certificates, domains.c.hostname == certificates.c.hostname)
            )
            .where(domains.c.app_id == app_id)
            .order_by(domains.c.created, domains.c.hostname)
        )
        with self.engine.connect() as conn:
            return [dict(row) for row in conn.execute(query).mappings().all()]

    def request_certificate(self, app_id: str, hostname: str, zone: str) -> str:
        """Request a certificate for *hostname*; returns its resulting status.

        Asynchronous by contract: the request is recorded as ``pending``
        and validation completes out of band.
        """
        now = now_iso()
        with self.engine.begin() as conn:
            row = (
                conn.execute(select(certificates).where(certificates.c.hostname == hostname))
                .mappings()
                .first()
            )
            if row is None:
                conn.execute(
                    insert(certificates).values(
                        hostname=hostname,
                        app_id=app_id,
                        zone=zone,
                        status="pending",
                        requested=now,
                        updated=now,
                    )
                )
                return "pending"
            if row["status"] == "failed":
                conn.execute(
                    update(certificates)
                    .where(certificates.c.hostname == hostname)
                    .values(status="pending", requested=now, updated=now)
                )
                return "pending"
            return str(row["status"])

    def certificate_status(self, hostname: str) -> str | None:
        with self.engine.connect() as conn:
            row = conn.execute(
                select(certificates.c.status).where(certificates.c.hostname == hostname)
            ).first()
        return None if row is None else str(row[0])

    def set_certificate_status(self, hostname: str, status: str) -> bool:
        """Record an out-of-band validation outcome. Returns False if unknown."""
        with self.engine.begin() as conn:
            result = conn.execute(
                update(certificates)
                .where(certificates.c.hostname == hostname)
                .values(status=status, updated=now_iso())
            )
        return result.rowcount > 0
