"""Pluggy hook specifications for sitectl's external collaborators.

Three groups of hooks:

- Zone lookup: the DNS provider resolves a domain to a hosted zone.
- Platform: the managed hosting platform stores apps, branches, domain
  associations, and certificate requests. Every platform hook is
  ``firstresult`` so exactly one platform plugin answers.
- Lifecycle: ``post_apply`` and ``post_reconcile`` notify observers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pluggy

if TYPE_CHECKING:
    from sitectl.domain.binding import HostedZone

hookspec = pluggy.HookspecMarker("sitectl")


class SitectlHookSpec:
    """Hook specifications for the sitectl plugin system."""

    # --- Hosted-zone provider ---

    @hookspec(firstresult=True)
    def sitectl_resolve_zone(self, domain_name: str) -> HostedZone | None:
        """Return the hosted zone containing *domain_name*, or None."""

    # --- Hosting platform ---

    @hookspec(firstresult=True)
    def sitectl_register_app(self, app: dict[str, Any]) -> dict[str, Any] | None:
        """Create or update the application (keyed by name)."""

    @hookspec(firstresult=True)
    def sitectl_upsert_branch(self, app_id: str, branch: dict[str, Any]) -> str | None:
        """Create or update a branch; return created/updated/unchanged."""

    @hookspec(firstresult=True)
    def sitectl_remove_branch(self, app_id: str, branch_name: str) -> bool | None:
        """Delete a branch that is no longer declared."""

    @hookspec(firstresult=True)
    def sitectl_list_branches(self, app_id: str) -> list[dict[str, Any]] | None:
        """Return the branches the platform currently holds."""

    @hookspec(firstresult=True)
    def sitectl_upsert_domain(self, app_id: str, binding: dict[str, Any]) -> str | None:
        """Associate a served hostname with a branch.

        Return created/updated/unchanged, or ``"conflict"`` when another
        application already holds the hostname.
        """

    @hookspec(firstresult=True)
    def sitectl_remove_domain(self, app_id: str, hostname: str) -> bool | None:
        """Drop a hostname that is no longer declared, with its certificate."""

    @hookspec(firstresult=True)
    def sitectl_list_domains(self, app_id: str) -> list[dict[str, Any]] | None:
        """Return domain associations with their certificate status."""

    @hookspec(firstresult=True)
    def sitectl_request_certificate(self, app_id: str, hostname: str, zone: str) -> str | None:
        """Request a certificate without waiting; return its current status."""

    @hookspec(firstresult=True)
    def sitectl_certificate_status(self, hostname: str) -> str | None:
        """Return pending/validated/failed, or None if never requested."""

    @hookspec(firstresult=True)
    def sitectl_record_certificate_status(
        self, app_id: str, hostname: str, status: str
    ) -> bool | None:
        """Store the certificate state sitectl last reported for *hostname*."""

    # --- Lifecycle events ---

    @hookspec
    def post_apply(self, app_id: str, summary: dict[str, Any]) -> None:
        """Called after a descriptor has been applied to the platform."""

    @hookspec
    def post_reconcile(self, app_id: str, transitions: list[dict[str, Any]]) -> None:
        """Called after certificate states have been reconciled."""
