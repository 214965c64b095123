"""DeployService: push a validated descriptor to the hosting platform.

Pipeline for ``apply``: SYNTH -> REGISTER -> BRANCHES -> PRUNE -> DOMAINS
-> CERTIFICATES -> PRUNE DOMAINS -> EVENT. The full descriptor is
validated before the first platform call, so a declaration error never
leaves the platform half-updated. Every platform call is an idempotent
upsert; re-applying an unchanged descriptor reports ``unchanged``
everywhere.

Certificate issuance is fire-and-forget. ``reconcile`` is the separate
step that polls the platform and records ``pending -> validated|failed``.
"""

from __future__ import annotations

from typing import Any

import structlog

from sitectl.domain.descriptor import ApplicationDescriptor
from sitectl.domain.errors import DescriptorError
from sitectl.domain.ids import generate_app_id, normalize_hostname
from sitectl.domain.types import CertificateStatus
from sitectl.infrastructure.platform import CONFLICT
from sitectl.services.base import BaseService
from sitectl.services.descriptor import DescriptorService
from sitectl.services.result import ServiceResult

log = structlog.get_logger(__name__)

PLATFORM_ERROR = "PLATFORM_ERROR"
NO_PLATFORM = "NO_PLATFORM"
NOT_FOUND = "NOT_FOUND"
DOMAIN_CONFLICT = "DOMAIN_CONFLICT"


class PlatformCallError(Exception):
    """A platform plugin failed or no plugin answered a platform hook."""

    def __init__(self, hook_name: str, message: str, *, code: str = PLATFORM_ERROR) -> None:
        self.hook_name = hook_name
        self.code = code
        super().__init__(message)


class DeployService(BaseService):
    """Apply, inspect, and reconcile the deployed application."""

    def _call(self, hook_name: str, **kwargs: Any) -> Any:
        """Invoke a ``firstresult`` platform hook, requiring an answer."""
        hook = getattr(self._workspace.hook, hook_name)
        try:
            result = hook(**kwargs)
        except Exception as exc:
            log.error("platform.call_failed", hook=hook_name, error=str(exc))
            raise PlatformCallError(hook_name, f"{hook_name} failed: {exc}") from exc
        if result is None:
            raise PlatformCallError(
                hook_name,
                f"No hosting platform plugin answered {hook_name}",
                code=NO_PLATFORM,
            )
        return result

    @staticmethod
    def _platform_failure(op: str, exc: PlatformCallError) -> ServiceResult:
        return ServiceResult.failure(op, exc.code, str(exc), {"hook": exc.hook_name})

    # ------------------------------------------------------------------
    # apply
    # ------------------------------------------------------------------

    def apply(self) -> ServiceResult:
        """Validate the declaration, then upsert it on the platform."""
        op = "apply"
        warnings: list[str] = []

        # SYNTH
        try:
            descriptor = DescriptorService(self._workspace).build()
        except DescriptorError as exc:
            log.warning("apply.rejected", code=exc.code, error=exc.message)
            return self._failure(op, exc)

        document = descriptor.to_document()
        app_id = descriptor.app_id
        try:
            # REGISTER
            registered = self._call("sitectl_register_app", app=document["app"])
            app_action = registered.get("action", "unchanged")

            # BRANCHES
            branch_actions = [
                {
                    "name": branch["branchName"],
                    "action": self._call("sitectl_upsert_branch", app_id=app_id, branch=branch),
                }
                for branch in document["branches"]
            ]

            # PRUNE
            removed = self._prune_branches(descriptor) if descriptor.auto_branch_deletion else []

            # DOMAINS + CERTIFICATES
            domain_actions = []
            for binding in descriptor.bindings:
                action = self._call(
                    "sitectl_upsert_domain", app_id=app_id, binding=binding.to_document()
                )
                if action == CONFLICT:
                    log.warning("apply.domain_conflict", hostname=binding.hostname)
                    return ServiceResult.failure(
                        op,
                        DOMAIN_CONFLICT,
                        f"{binding.hostname} is already associated with another application",
                        {"hostname": binding.hostname, "app_id": app_id},
                    )
                status = self._call(
                    "sitectl_request_certificate",
                    app_id=app_id,
                    hostname=binding.hostname,
                    zone=binding.zone,
                )
                descriptor.record_certificate_status(binding.hostname, status)
                self._call(
                    "sitectl_record_certificate_status",
                    app_id=app_id,
                    hostname=binding.hostname,
                    status=status,
                )
                domain_actions.append(
                    {
                        "hostname": binding.hostname,
                        "branch": binding.target,
                        "action": action,
                        "certificate_status": status,
                    }
                )

            # PRUNE DOMAINS
            removed_domains = self._prune_domains(descriptor)
        except PlatformCallError as exc:
            return self._platform_failure(op, exc)

        pending = [d["hostname"] for d in domain_actions if d["certificate_status"] != "validated"]
        if pending:
            warnings.append(
                f"{len(pending)} certificate(s) not yet validated; run 'sitectl certs reconcile'"
            )

        summary: dict[str, Any] = {
            "app": descriptor.name,
            "app_id": app_id,
            "app_action": app_action,
            "branches": branch_actions,
            "removed_branches": removed,
            "removed_domains": removed_domains,
            "domains": domain_actions,
            "outputs": descriptor.emit_outputs(),
        }
        log.info(
            "apply.completed",
            app=descriptor.name,
            app_id=app_id,
            branches=len(branch_actions),
            removed=len(removed),
            removed_domains=len(removed_domains),
            domains=len(domain_actions),
        )

        # EVENT
        self._dispatch_event("post_apply", {"app_id": app_id, "summary": summary}, warnings)

        return ServiceResult(ok=True, op=op, data=summary, warnings=warnings)

    def _prune_branches(self, descriptor: ApplicationDescriptor) -> list[str]:
        declared = {b.name for b in descriptor.branches}
        existing = self._call("sitectl_list_branches", app_id=descriptor.app_id)
        removed = []
        for branch in existing:
            name = branch["branch_name"]
            if name in declared:
                continue
            self._call("sitectl_remove_branch", app_id=descriptor.app_id, branch_name=name)
            removed.append(name)
        return removed

    def _prune_domains(self, descriptor: ApplicationDescriptor) -> list[str]:
        declared = {b.hostname for b in descriptor.bindings}
        existing = self._call("sitectl_list_domains", app_id=descriptor.app_id)
        removed = []
        for domain in existing:
            hostname = domain["hostname"]
            if hostname in declared:
                continue
            self._call("sitectl_remove_domain", app_id=descriptor.app_id, hostname=hostname)
            removed.append(hostname)
        return removed

    # ------------------------------------------------------------------
    # status
    # ------------------------------------------------------------------

    def status(self) -> ServiceResult:
        """Report the branches and domains the platform currently holds."""
        op = "status"
        settings = self._workspace.settings
        app_id = generate_app_id(settings.app.name)
        try:
            branches = self._call("sitectl_list_branches", app_id=app_id)
            domains = self._call("sitectl_list_domains", app_id=app_id)
        except PlatformCallError as exc:
            return self._platform_failure(op, exc)

        warnings = []
        if not branches and not domains:
            warnings.append(f"Nothing applied yet for {settings.app.name}")

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "app": settings.app.name,
                "app_id": app_id,
                "platform": self._workspace.plugins.answering_plugin("sitectl_list_branches"),
                "branches": [
                    {
                        "name": b["branch_name"],
                        "stage": b["stage"],
                        "auto_build": b["auto_build"],
                        "indexing": b["indexing"],
                    }
                    for b in branches
                ],
                "domains": [
                    {
                        "hostname": d["hostname"],
                        "branch": d["branch_name"],
                        "certificate_status": d.get("status") or "not_requested",
                    }
                    for d in domains
                ],
            },
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # reconcile
    # ------------------------------------------------------------------

    def reconcile(self) -> ServiceResult:
        """Poll certificate status for every declared binding.

        Never blocks: each hostname is asked once. Transitions are measured
        against the status the platform recorded on the previous apply or
        reconcile, and the observed state is recorded back for the next run.
        """
        op = "reconcile"
        warnings: list[str] = []
        try:
            descriptor = DescriptorService(self._workspace).build()
        except DescriptorError as exc:
            return self._failure(op, exc)

        try:
            recorded = {
                d["hostname"]: d.get("recorded_status")
                for d in self._call("sitectl_list_domains", app_id=descriptor.app_id)
            }
        except PlatformCallError as exc:
            return self._platform_failure(op, exc)

        certificates: list[dict[str, Any]] = []
        transitions: list[dict[str, Any]] = []
        for binding in descriptor.bindings:
            if recorded.get(binding.hostname):
                binding = descriptor.record_certificate_status(
                    binding.hostname, recorded[binding.hostname]
                )
            before = str(binding.certificate_status)
            try:
                observed = self._workspace.hook.sitectl_certificate_status(
                    hostname=binding.hostname
                )
            except Exception as exc:
                log.error("reconcile.poll_failed", hostname=binding.hostname, error=str(exc))
                return self._platform_failure(
                    op,
                    PlatformCallError("sitectl_certificate_status", f"Status poll failed: {exc}"),
                )
            if observed is None:
                warnings.append(f"No certificate requested for {binding.hostname}; run apply")
                certificates.append({"hostname": binding.hostname, "status": "not_requested"})
                continue

            updated = descriptor.record_certificate_status(binding.hostname, observed)
            after = str(updated.certificate_status)
            try:
                self._call(
                    "sitectl_record_certificate_status",
                    app_id=descriptor.app_id,
                    hostname=binding.hostname,
                    status=after,
                )
            except PlatformCallError as exc:
                return self._platform_failure(op, exc)
            certificates.append({"hostname": binding.hostname, "status": after})
            if after != before:
                transitions.append({"hostname": binding.hostname, "from": before, "to": after})
                log.info("certificate.transition", hostname=binding.hostname, to=after)

        failed = [c["hostname"] for c in certificates if c["status"] == CertificateStatus.FAILED]
        for hostname in failed:
            warnings.append(f"Certificate failed for {hostname}; re-run apply to re-request")

        self._dispatch_event(
            "post_reconcile",
            {"app_id": descriptor.app_id, "transitions": transitions},
            warnings,
        )

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "app_id": descriptor.app_id,
                "certificates": certificates,
                "transitions": transitions,
                "all_validated": bool(certificates)
                and all(c["status"] == CertificateStatus.VALIDATED for c in certificates),
            },
            warnings=warnings,
        )

    # ------------------------------------------------------------------
    # Out-of-band validation (local platform)
    # ------------------------------------------------------------------

    def set_certificate(self, hostname: str, status: str) -> ServiceResult:
        """Record a validation outcome on the local platform store.

        Stands in for the managed platform's own validation when running
        against the bundled local platform.
        """
        op = "set_certificate"
        try:
            resolved = CertificateStatus(status)
        except ValueError:
            return ServiceResult.failure(
                op,
                "INVALID_STATUS",
                f"Unknown certificate status: {status}",
                {"allowed": [s.value for s in CertificateStatus]},
            )
        host = normalize_hostname(hostname)
        if not self._workspace.platform.set_certificate_status(host, resolved.value):
            return ServiceResult.failure(
                op, NOT_FOUND, f"No certificate requested for {host}", {"hostname": host}
            )
        return ServiceResult(ok=True, op=op, data={"hostname": host, "status": resolved.value})
