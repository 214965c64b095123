"""BaseService: abstract foundation for all sitectl services.

Every service receives a :class:`Workspace` at construction time. The
workspace provides the resolved settings, plugin hooks, and platform
state store.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sitectl.services.result import ServiceError, ServiceResult

if TYPE_CHECKING:
    from sitectl.domain.errors import DescriptorError
    from sitectl.infrastructure.workspace import Workspace

logger = logging.getLogger(__name__)


class BaseService:
    """Abstract base for all service-layer classes.

    Usage::

        class DeployService(BaseService):
            def apply(self) -> ServiceResult:
                descriptor = ...
                self._workspace.hook.sitectl_register_app(app=...)
    """

    def __init__(self, workspace: Workspace) -> None:
        self._workspace = workspace

    @staticmethod
    def _failure(op: str, exc: DescriptorError) -> ServiceResult:
        """Translate a descriptor validation error into a failed result."""
        return ServiceResult(ok=False, op=op, error=ServiceError.from_exception(exc))

    def _dispatch_event(
        self,
        hook_name: str,
        payload: dict[str, Any],
        warnings: list[str],
    ) -> None:
        """Dispatch a lifecycle event to observer plugins.

        INVARIANT: Observer failures are warnings, never errors.
        """
        hook = getattr(self._workspace.hook, hook_name, None)
        if hook is None:
            return
        try:
            hook(**payload)
        except Exception:
            logger.debug("Event dispatch failed for %s", hook_name, exc_info=True)
            warnings.append(f"Event dispatch failed for {hook_name}")
