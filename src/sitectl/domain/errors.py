"""Declaration-time errors raised by the descriptor aggregate.

Every error is a local validation failure raised before the aggregate is
mutated, so there is never partial state to undo. Services translate
these into ``ServiceResult`` failures using :attr:`DescriptorError.code`.
"""

from __future__ import annotations

from typing import Any


class DescriptorError(Exception):
    """Base class for all descriptor validation errors."""

    code = "DESCRIPTOR_ERROR"

    def __init__(self, message: str, detail: dict[str, Any] | None = None) -> None:
        self.message = message
        self.detail = detail or {}
        super().__init__(message)


class ConfigurationError(DescriptorError):
    """A required declaration field is missing or malformed."""

    code = "CONFIGURATION_ERROR"

    def __init__(self, message: str, *, field: str | None = None) -> None:
        detail = {"field": field} if field else {}
        super().__init__(message, detail)
        self.field = field


class DuplicateBranchError(DescriptorError):
    """A branch name, or its host label, is registered twice on one descriptor."""

    code = "DUPLICATE_BRANCH"

    def __init__(self, branch: str, *, existing: str | None = None) -> None:
        if existing is None:
            message = f"Branch already registered: {branch}"
            detail = {"branch": branch}
        else:
            message = f"Branch {branch} shares its host label with {existing}"
            detail = {"branch": branch, "existing": existing}
        super().__init__(message, detail)
        self.branch = branch
        self.existing = existing


class DomainConflictError(DescriptorError):
    """A hostname is already bound to a different branch environment."""

    code = "DOMAIN_CONFLICT"

    def __init__(self, hostname: str, existing: str, requested: str) -> None:
        super().__init__(
            f"{hostname} is already bound to '{existing}', cannot bind to '{requested}'",
            {"hostname": hostname, "existing": existing, "requested": requested},
        )
        self.hostname = hostname
        self.existing = existing
        self.requested = requested


class UnresolvedZoneError(DescriptorError):
    """No hosted zone reachable by the deployer contains the domain."""

    code = "UNRESOLVED_ZONE"

    def __init__(self, domain_name: str) -> None:
        super().__init__(f"No hosted zone found for {domain_name}", {"domain": domain_name})
        self.domain_name = domain_name


class UnknownTargetError(DescriptorError):
    """A domain binding references a branch that was never registered."""

    code = "UNKNOWN_TARGET"

    def __init__(self, target: str, known: list[str]) -> None:
        super().__init__(
            f"Unknown branch environment: {target}",
            {"target": target, "known": known},
        )
        self.target = target
