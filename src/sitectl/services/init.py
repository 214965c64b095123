"""InitService: write a starter ``sitectl.toml``.

Runs before any workspace exists, so the service is a set of static
methods rather than a :class:`BaseService` subclass.
"""

from __future__ import annotations

from pathlib import Path

from sitectl.config.discovery import CONFIG_FILENAME
from sitectl.domain.ids import is_valid_hostname, normalize_hostname
from sitectl.infrastructure.templates import build_template_environment
from sitectl.services.result import ServiceError, ServiceResult

CONFIG_TEMPLATE = "sitectl.toml.j2"


class InitService:
    """Project initialization."""

    @staticmethod
    def init_project(
        path: Path,
        *,
        name: str,
        owner: str,
        repository: str,
        zone: str,
        dev_domain: str | None = None,
        force: bool = False,
    ) -> ServiceResult:
        """Write ``sitectl.toml`` declaring a dev and a production branch.

        The development branch ``main`` is served at *dev_domain*
        (default ``dev.<zone>``) and the production branch ``prod`` at
        the zone apex.
        """
        op = "init_project"
        config_file = path / CONFIG_FILENAME
        if config_file.exists() and not force:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="CONFIG_EXISTS",
                    message=f"{config_file} already exists (use --force to overwrite)",
                    detail={"path": str(config_file)},
                ),
            )

        zone_name = normalize_hostname(zone)
        dev_host = normalize_hostname(dev_domain) if dev_domain else f"dev.{zone_name}"
        for value in (zone_name, dev_host):
            if not is_valid_hostname(value):
                return ServiceResult(
                    ok=False,
                    op=op,
                    error=ServiceError(
                        code="CONFIGURATION_ERROR",
                        message=f"Invalid domain name: {value!r}",
                        detail={"field": "zone"},
                    ),
                )

        branches = [
            {"name": "main", "stage": "development"},
            {"name": "prod", "stage": "production"},
        ]
        domains = [
            {"domain_name": dev_host, "branch": "main"},
            {"domain_name": zone_name, "branch": "prod"},
        ]
        env = build_template_environment("project")
        content = env.get_template(CONFIG_TEMPLATE).render(
            name=name,
            owner=owner,
            repository=repository,
            zone=zone_name,
            branches=branches,
            domains=domains,
        )

        path.mkdir(parents=True, exist_ok=True)
        config_file.write_text(content, encoding="utf-8")
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "path": str(path),
                "config_file": str(config_file),
                "name": name,
                "repository": f"{owner}/{repository}",
                "zone": zone_name,
                "domains": [d["domain_name"] for d in domains],
            },
        )
