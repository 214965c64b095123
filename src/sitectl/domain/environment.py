"""Branch environments, response headers, and redirect/rewrite rules.

A branch environment is a named, independently buildable target bound to
one source branch. Its indexing policy is declarative: non-production
environments answer every request with an ``X-Robots-Tag`` header so
crawlers skip them, production environments carry no marker.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from sitectl.domain.buildspec import BuildSpecification
from sitectl.domain.errors import ConfigurationError
from sitectl.domain.ids import ENV_VAR_PATTERN, branch_host_label
from sitectl.domain.types import IndexingPolicy, RedirectStatus, Stage, default_indexing

NOINDEX_HEADER = "X-Robots-Tag"
NOINDEX_VALUE = "noindex, nofollow"
ALL_PATHS = "**/*"


class CustomHeader(BaseModel):
    """Response headers applied to every path matching *pattern*."""

    model_config = {"frozen": True}

    pattern: str
    headers: dict[str, str]

    def to_document(self) -> dict[str, Any]:
        return {
            "pattern": self.pattern,
            "headers": [{"key": k, "value": v} for k, v in self.headers.items()],
        }


class CustomRule(BaseModel):
    """App-level redirect or rewrite rule, evaluated by the platform in order."""

    model_config = {"frozen": True}

    source: str
    target: str
    status: RedirectStatus = RedirectStatus.NOT_FOUND_REWRITE

    def to_document(self) -> dict[str, Any]:
        return {"source": self.source, "target": self.target, "status": str(self.status)}


# Single-page-app fallback: unknown paths are served by index.html.
SPA_REWRITE = CustomRule(source="/<*>", target="/index.html")


class BranchEnvironment(BaseModel):
    """A deployable environment tracking one source branch.

    Attributes:
        name: Branch name in the source repository.
        build_spec: Shared build specification (held by reference).
        environment_variables: Build-time variables, unique keys.
        auto_build: Whether new commits on the branch trigger a build.
        stage: Production or development.
        indexing: Crawler policy; derived from *stage* unless overridden.
    """

    model_config = {"frozen": True}

    name: str
    build_spec: BuildSpecification
    environment_variables: dict[str, str] = Field(default_factory=dict)
    auto_build: bool = True
    stage: Stage = Stage.DEVELOPMENT
    indexing: IndexingPolicy = IndexingPolicy.NOINDEX

    @classmethod
    def declare(
        cls,
        name: str,
        build_spec: BuildSpecification,
        env_vars: dict[str, str] | None = None,
        auto_build: bool = True,
        *,
        stage: str = Stage.DEVELOPMENT,
        indexing: str | None = None,
    ) -> BranchEnvironment:
        """Validate inputs and construct an environment.

        Raises:
            ConfigurationError: blank or whitespace-containing branch name,
                invalid variable names, or an unknown stage/indexing value.
        """
        branch = (name or "").strip()
        if not branch or any(ch.isspace() for ch in branch):
            raise ConfigurationError(f"Invalid branch name: {name!r}", field="branch")
        if build_spec is None:
            raise ConfigurationError("branch requires a build specification", field="build_spec")

        variables: dict[str, str] = {}
        for key, value in (env_vars or {}).items():
            if not ENV_VAR_PATTERN.match(key):
                raise ConfigurationError(
                    f"Invalid environment variable name: {key!r}", field="environment_variables"
                )
            variables[key] = str(value)

        try:
            resolved_stage = Stage(stage)
            resolved_indexing = (
                IndexingPolicy(indexing) if indexing else default_indexing(resolved_stage)
            )
        except ValueError as exc:
            raise ConfigurationError(str(exc), field="stage") from exc

        return cls(
            name=branch,
            build_spec=build_spec,
            environment_variables=variables,
            auto_build=auto_build,
            stage=resolved_stage,
            indexing=resolved_indexing,
        )

    @property
    def host_label(self) -> str:
        return branch_host_label(self.name)

    def custom_headers(self) -> list[CustomHeader]:
        """Headers the platform applies to every response of this environment."""
        if self.indexing == IndexingPolicy.NOINDEX:
            return [CustomHeader(pattern=ALL_PATHS, headers={NOINDEX_HEADER: NOINDEX_VALUE})]
        return []

    def cache_namespace(self, app_name: str) -> str:
        """Per-branch cache key; concurrent builds never share a cache."""
        return f"{app_name}/{self.host_label}"

    def artifact_path(self, app_name: str) -> str:
        """Per-branch artifact location on the platform."""
        return f"{app_name}/{self.host_label}/{self.build_spec.artifact_dir}"

    def to_document(self, app_name: str) -> dict[str, Any]:
        doc: dict[str, Any] = {
            "branchName": self.name,
            "stage": str(self.stage).upper(),
            "enableAutoBuild": self.auto_build,
            "environmentVariables": dict(sorted(self.environment_variables.items())),
            "indexing": str(self.indexing),
            "cacheNamespace": self.cache_namespace(app_name),
            "buildSpec": self.build_spec.to_document(),
        }
        headers = self.custom_headers()
        if headers:
            doc["customHeaders"] = [h.to_document() for h in headers]
        return doc
