"""ApplicationDescriptor: the aggregate mapping branches to domains.

The descriptor owns its branch environments and domain bindings. It is
built through a sequence of validated append operations:

1. :meth:`ApplicationDescriptor.register`: identity + source repository.
2. :meth:`add_branch_environment`: one per deployable branch.
3. :meth:`add_domain_binding`: attach hostnames to registered branches.
4. :meth:`emit_outputs`: pure view of the resulting URLs.

INVARIANT: every append validates completely before touching state, so a
raised :class:`~sitectl.domain.errors.DescriptorError` leaves the
descriptor exactly as it was.
"""

from __future__ import annotations

from io import StringIO
from typing import Any

from pydantic import BaseModel
from ruamel.yaml import YAML

from sitectl.domain.binding import DomainBinding, HostedZone, ZoneResolver
from sitectl.domain.buildspec import BuildSpecification
from sitectl.domain.environment import SPA_REWRITE, BranchEnvironment, CustomRule
from sitectl.domain.errors import (
    ConfigurationError,
    DomainConflictError,
    DuplicateBranchError,
    UnknownTargetError,
    UnresolvedZoneError,
)
from sitectl.domain.ids import (
    generate_app_id,
    is_valid_hostname,
    normalize_hostname,
    pascal_case,
)
from sitectl.domain.source import SourceRepository
from sitectl.domain.types import (
    CERTIFICATE_TRANSITIONS,
    CertificateStatus,
    is_valid_transition,
)

DEFAULT_PLATFORM_DOMAIN = "amplifyapp.com"


class DeclaredOutput(BaseModel):
    """One named output of the descriptor."""

    model_config = {"frozen": True}

    name: str
    value: str
    description: str


def _unique_name(name: str, used: set[str]) -> str:
    candidate = name
    n = 2
    while candidate in used:
        candidate = f"{name}{n}"
        n += 1
    used.add(candidate)
    return candidate


class ApplicationDescriptor:
    """Aggregate of one hosted application, its environments and domains.

    Construct via :meth:`register`; the zone resolver is injected rather
    than looked up globally so two descriptors never share state.
    """

    def __init__(
        self,
        name: str,
        source: SourceRepository,
        *,
        zone_resolver: ZoneResolver,
        platform_domain: str = DEFAULT_PLATFORM_DOMAIN,
        auto_branch_deletion: bool = True,
        custom_rules: list[CustomRule] | None = None,
    ) -> None:
        self.name = name
        self.source = source
        self.app_id = generate_app_id(name)
        self.platform_domain = platform_domain
        self.auto_branch_deletion = auto_branch_deletion
        self.custom_rules: tuple[CustomRule, ...] = tuple(
            custom_rules if custom_rules is not None else [SPA_REWRITE]
        )
        self._resolve_zone = zone_resolver
        self._branches: dict[str, BranchEnvironment] = {}
        self._bindings: dict[str, DomainBinding] = {}

    @classmethod
    def register(
        cls,
        name: str,
        source: SourceRepository | dict[str, Any],
        *,
        zone_resolver: ZoneResolver,
        platform_domain: str = DEFAULT_PLATFORM_DOMAIN,
        auto_branch_deletion: bool = True,
        custom_rules: list[CustomRule] | None = None,
    ) -> ApplicationDescriptor:
        """Validate identity and source, returning an empty descriptor.

        *source* may be a :class:`SourceRepository` or a mapping with
        ``owner``, ``repository`` (or ``repo``) and ``oauth_token``.

        Raises:
            ConfigurationError: blank *name* or incomplete *source*.
        """
        app_name = (name or "").strip()
        if not app_name:
            raise ConfigurationError("application name must not be empty", field="name")
        if isinstance(source, dict):
            source = SourceRepository.from_fields(
                source.get("owner"),
                source.get("repository") or source.get("repo"),
                source.get("oauth_token"),
            )
        if not isinstance(source, SourceRepository):
            raise ConfigurationError("source repository reference is required", field="source")
        if not platform_domain or not is_valid_hostname(normalize_hostname(platform_domain)):
            msg = f"Invalid platform domain: {platform_domain!r}"
            raise ConfigurationError(msg, field="platform_domain")
        return cls(
            app_name,
            source,
            zone_resolver=zone_resolver,
            platform_domain=normalize_hostname(platform_domain),
            auto_branch_deletion=auto_branch_deletion,
            custom_rules=custom_rules,
        )

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def branches(self) -> list[BranchEnvironment]:
        """Branch environments in registration order."""
        return list(self._branches.values())

    @property
    def bindings(self) -> list[DomainBinding]:
        """Domain bindings in declaration order."""
        return list(self._bindings.values())

    @property
    def default_domain(self) -> str:
        return f"{self.app_id}.{self.platform_domain}"

    def branch(self, name: str) -> BranchEnvironment | None:
        return self._branches.get(name)

    def binding(self, hostname: str) -> DomainBinding | None:
        return self._bindings.get(normalize_hostname(hostname))

    def bindings_for(self, branch_name: str) -> list[DomainBinding]:
        return [b for b in self._bindings.values() if b.target == branch_name]

    def default_url(self, branch: BranchEnvironment) -> str:
        return f"https://{branch.host_label}.{self.default_domain}"

    # ------------------------------------------------------------------
    # Validated appends
    # ------------------------------------------------------------------

    def add_branch_environment(
        self,
        branch_name: str,
        build_spec: BuildSpecification,
        env_vars: dict[str, str] | None = None,
        auto_build: bool = True,
        *,
        stage: str = "development",
        indexing: str | None = None,
    ) -> BranchEnvironment:
        """Register a branch environment using *build_spec*.

        Raises:
            DuplicateBranchError: *branch_name*, or another branch with the
                same host label, is already registered.
            ConfigurationError: invalid branch name or variables.
        """
        env = BranchEnvironment.declare(
            branch_name,
            build_spec,
            env_vars,
            auto_build,
            stage=stage,
            indexing=indexing,
        )
        if env.name in self._branches:
            raise DuplicateBranchError(env.name)
        for other in self._branches.values():
            # Host labels key the cache namespace, artifact path and branch URL.
            if other.host_label == env.host_label:
                raise DuplicateBranchError(env.name, existing=other.name)
        self._branches[env.name] = env
        return env

    def add_domain_binding(
        self,
        domain_name: str,
        target: BranchEnvironment | str,
        root_mapping: bool = True,
        *,
        prefix: str | None = None,
    ) -> DomainBinding:
        """Bind *domain_name* (or ``prefix.domain_name``) to *target*.

        Re-declaring an identical binding returns the existing one
        unchanged, including its certificate state.

        Raises:
            ConfigurationError: malformed domain or prefix.
            UnresolvedZoneError: no reachable zone contains the domain.
            UnknownTargetError: *target* is not registered here.
            DomainConflictError: the served hostname belongs to another branch.
        """
        domain = normalize_hostname(domain_name or "")
        if not is_valid_hostname(domain):
            raise ConfigurationError(f"Invalid domain name: {domain_name!r}", field="domain_name")

        zone = self._resolve_zone(domain)
        if zone is None or not isinstance(zone, HostedZone) or not zone.contains(domain):
            raise UnresolvedZoneError(domain)

        target_name = target.name if isinstance(target, BranchEnvironment) else str(target)
        env = self._branches.get(target_name)
        if env is None:
            raise UnknownTargetError(target_name, list(self._branches))

        label = ""
        if not root_mapping:
            label = normalize_hostname(prefix) if prefix else env.host_label
            if not is_valid_hostname(label) or "." in label:
                raise ConfigurationError(f"Invalid subdomain prefix: {label!r}", field="prefix")

        candidate = DomainBinding(
            domain_name=domain,
            target=env.name,
            root_mapping=root_mapping,
            prefix=label,
            zone=normalize_hostname(zone.name),
        )
        existing = self._bindings.get(candidate.hostname)
        if existing is not None:
            if existing.target != candidate.target:
                raise DomainConflictError(candidate.hostname, existing.target, candidate.target)
            return existing

        self._bindings[candidate.hostname] = candidate
        return candidate

    def record_certificate_status(self, hostname: str, status: str) -> DomainBinding:
        """Apply an externally observed certificate state to a binding.

        Disallowed transitions (e.g. ``validated -> pending``) leave the
        binding unchanged.

        Raises:
            ConfigurationError: no binding serves *hostname*, or *status*
                is not a known certificate state.
        """
        key = normalize_hostname(hostname)
        existing = self._bindings.get(key)
        if existing is None:
            raise ConfigurationError(f"No binding serves {hostname}", field="hostname")
        try:
            status = CertificateStatus(status).value
        except ValueError as exc:
            raise ConfigurationError(
                f"Unknown certificate status: {status}", field="status"
            ) from exc
        current = str(existing.certificate_status)
        if status == current or not is_valid_transition(current, status, CERTIFICATE_TRANSITIONS):
            return existing
        updated = existing.with_certificate_status(status)
        self._bindings[key] = updated
        return updated

    # ------------------------------------------------------------------
    # Outputs and serialization (pure)
    # ------------------------------------------------------------------

    def describe_outputs(self) -> list[DeclaredOutput]:
        """Named outputs with descriptions, in a stable order."""
        used: set[str] = set()
        outputs = [
            DeclaredOutput(
                name=_unique_name("AppId", used),
                value=self.app_id,
                description="Hosting platform application ID",
            )
        ]
        for env in self._branches.values():
            stem = pascal_case(env.name) or "Branch"
            outputs.append(
                DeclaredOutput(
                    name=_unique_name(f"{stem}BranchUrl", used),
                    value=self.default_url(env),
                    description=f"{env.name} branch default URL",
                )
            )
            for binding in self.bindings_for(env.name):
                outputs.append(
                    DeclaredOutput(
                        name=_unique_name(f"{stem}DomainUrl", used),
                        value=binding.url,
                        description=f"{env.stage} environment URL ({env.name} branch)",
                    )
                )
        return outputs

    def emit_outputs(self) -> dict[str, str]:
        """Mapping of output name to value."""
        return {o.name: o.value for o in self.describe_outputs()}

    def to_document(self) -> dict[str, Any]:
        """Full synthesized declaration; the credential is never included."""
        return {
            "app": {
                "name": self.name,
                "appId": self.app_id,
                "defaultDomain": self.default_domain,
                "repository": self.source.public_dict(),
                "autoBranchDeletion": self.auto_branch_deletion,
                "customRules": [r.to_document() for r in self.custom_rules],
            },
            "branches": [env.to_document(self.name) for env in self._branches.values()],
            "domains": [b.to_document() for b in self._bindings.values()],
            "outputs": {
                o.name: {"value": o.value, "description": o.description}
                for o in self.describe_outputs()
            },
        }

    def to_yaml(self) -> str:
        y = YAML()
        y.default_flow_style = False
        stream = StringIO()
        y.dump(self.to_document(), stream)
        return stream.getvalue()
