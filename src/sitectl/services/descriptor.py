"""DescriptorService: build the application descriptor from config.

The declaration in ``sitectl.toml`` is replayed through the descriptor's
validated operations in a fixed order (register, build spec, branches,
domains), so every declaration error surfaces here, before anything is
sent to the hosting platform.
"""

from __future__ import annotations

from typing import Any

import structlog

from sitectl.domain.buildspec import BuildSpecification
from sitectl.domain.descriptor import ApplicationDescriptor
from sitectl.domain.environment import CustomRule
from sitectl.domain.errors import ConfigurationError, DescriptorError
from sitectl.domain.source import SourceRepository
from sitectl.domain.types import RedirectStatus
from sitectl.services.base import BaseService
from sitectl.services.result import ServiceResult

log = structlog.get_logger(__name__)


class DescriptorService(BaseService):
    """Synthesize, inspect, and summarize the declared descriptor."""

    def build(self) -> ApplicationDescriptor:
        """Construct the descriptor from settings.

        Raises:
            DescriptorError: the first declaration error encountered.
        """
        settings = self._workspace.settings
        token = settings.source.oauth_token
        source = SourceRepository.from_fields(
            settings.source.owner,
            settings.source.repository,
            token.get_secret_value() if token is not None else None,
        )
        descriptor = ApplicationDescriptor.register(
            settings.app.name,
            source,
            zone_resolver=self._workspace.resolve_zone,
            platform_domain=settings.platform.default_domain,
            auto_branch_deletion=settings.app.auto_branch_deletion,
            custom_rules=self._custom_rules(),
        )

        spec = self._build_spec()

        for name, branch in settings.branches.items():
            descriptor.add_branch_environment(
                name,
                spec,
                branch.environment_variables,
                branch.auto_build,
                stage=branch.stage,
                indexing=branch.indexing,
            )

        for domain in settings.domains:
            descriptor.add_domain_binding(
                domain.domain_name,
                domain.branch,
                domain.root,
                prefix=domain.prefix,
            )

        log.debug(
            "descriptor.built",
            app=descriptor.name,
            repository=source.full_name,
            branches=len(descriptor.branches),
            domains=len(descriptor.bindings),
        )
        return descriptor

    def _build_spec(self) -> BuildSpecification:
        build = self._workspace.settings.build
        return BuildSpecification.define(
            build.install_commands,
            build.build_commands,
            build.artifact_dir,
            build.artifact_files,
            build.cache_paths,
            version=build.version,
        )

    def _custom_rules(self) -> list[CustomRule]:
        rules = []
        for rule in self._workspace.settings.rules:
            try:
                status = RedirectStatus(rule.status)
            except ValueError as exc:
                msg = f"Unsupported rule status: {rule.status!r}"
                raise ConfigurationError(msg, field="rules.status") from exc
            rules.append(CustomRule(source=rule.source, target=rule.target, status=status))
        return rules

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def synth(self) -> ServiceResult:
        """Validate the declaration and return the synthesized document."""
        op = "synth"
        try:
            descriptor = self.build()
        except DescriptorError as exc:
            log.warning("descriptor.invalid", code=exc.code, error=exc.message)
            return self._failure(op, exc)

        document = descriptor.to_document()
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "app": descriptor.name,
                "app_id": descriptor.app_id,
                "branches": [b.name for b in descriptor.branches],
                "domains": [b.hostname for b in descriptor.bindings],
                "document": document,
                "yaml": descriptor.to_yaml(),
            },
        )

    def buildspec(self) -> ServiceResult:
        """Return the shared build specification as document and YAML."""
        op = "buildspec"
        try:
            descriptor = self.build()
            # Every branch shares the one specification build() defined.
            spec = descriptor.branches[0].build_spec if descriptor.branches else self._build_spec()
        except DescriptorError as exc:
            return self._failure(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "document": spec.to_document(),
                "yaml": spec.to_yaml(),
                "cache_namespaces": {
                    b.name: b.cache_namespace(descriptor.name) for b in descriptor.branches
                },
            },
        )

    def outputs(self) -> ServiceResult:
        """Return the declared outputs (app ID, default and custom URLs)."""
        op = "outputs"
        try:
            descriptor = self.build()
        except DescriptorError as exc:
            return self._failure(op, exc)

        items: list[dict[str, Any]] = [o.model_dump() for o in descriptor.describe_outputs()]
        return ServiceResult(
            ok=True,
            op=op,
            data={"app_id": descriptor.app_id, "items": items},
        )
