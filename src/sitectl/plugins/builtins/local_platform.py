"""Built-in hosting platform plugin backed by :class:`LocalPlatform`."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pluggy

if TYPE_CHECKING:
    from sitectl.infrastructure.platform import LocalPlatform

hookimpl = pluggy.HookimplMarker("sitectl")


class LocalPlatformPlugin:
    """Route platform hooks to the SQLite state store."""

    def __init__(self, platform: LocalPlatform) -> None:
        self._platform = platform

    @hookimpl
    def sitectl_register_app(self, app: dict[str, Any]) -> dict[str, Any]:
        return self._platform.register_app(app)

    @hookimpl
    def sitectl_upsert_branch(self, app_id: str, branch: dict[str, Any]) -> str:
        return self._platform.upsert_branch(app_id, branch)

    @hookimpl
    def sitectl_remove_branch(self, app_id: str, branch_name: str) -> bool:
        return self._platform.remove_branch(app_id, branch_name)

    @hookimpl
    def sitectl_list_branches(self, app_id: str) -> list[dict[str, Any]]:
        return self._platform.list_branches(app_id)

    @hookimpl
    def sitectl_upsert_domain(self, app_id: str, binding: dict[str, Any]) -> str:
        return self._platform.upsert_domain(app_id, binding)

    @hookimpl
    def sitectl_remove_domain(self, app_id: str, hostname: str) -> bool:
        return self._platform.remove_domain(app_id, hostname)

    @hookimpl
    def sitectl_list_domains(self, app_id: str) -> list[dict[str, Any]]:
        return self._platform.list_domains(app_id)

    @hookimpl
    def sitectl_request_certificate(self, app_id: str, hostname: str, zone: str) -> str:
        return self._platform.request_certificate(app_id, hostname, zone)

    @hookimpl
    def sitectl_certificate_status(self, hostname: str) -> str | None:
        return self._platform.certificate_status(hostname)

    @hookimpl
    def sitectl_record_certificate_status(self, app_id: str, hostname: str, status: str) -> bool:
        return self._platform.record_certificate_status(app_id, hostname, status)
