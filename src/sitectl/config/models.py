"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, sitectl.toml only contains
overrides. The defaults describe the landing-page deployment (a ``main``
development branch and a ``prod`` production branch, each with its own
domain), so a fresh project needs only the [source] section.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, SecretStr

# --- sitectl.toml sections ---


class AppConfig(BaseModel):
    """[app] section."""

    model_config = {"frozen": True}

    name: str = "trakkyfood-landing-page"
    auto_branch_deletion: bool = True


class SourceConfig(BaseModel):
    """[source] section.

    The token is normally supplied via ``SITECTL_SOURCE__OAUTH_TOKEN``
    rather than committed to the TOML file.
    """

    model_config = {"frozen": True}

    owner: str | None = None
    repository: str | None = None
    oauth_token: SecretStr | None = None


class BuildConfig(BaseModel):
    """[build] section."""

    model_config = {"frozen": True}

    version: str = "1.0"
    install_commands: list[str] = Field(default_factory=lambda: ["npm ci"])
    build_commands: list[str] = Field(default_factory=lambda: ["npm run build"])
    artifact_dir: str = "dist"
    artifact_files: list[str] = Field(default_factory=lambda: ["**/*"])
    cache_paths: list[str] = Field(default_factory=lambda: ["node_modules/**/*"])


class BranchConfig(BaseModel):
    """[branches.<name>] table."""

    model_config = {"frozen": True}

    auto_build: bool = True
    stage: str = "development"
    indexing: str | None = None
    environment_variables: dict[str, str] = Field(default_factory=dict)


class DomainConfig(BaseModel):
    """[[domains]] entry."""

    model_config = {"frozen": True}

    domain_name: str
    branch: str
    root: bool = True
    prefix: str | None = None


class RuleConfig(BaseModel):
    """[[rules]] entry."""

    model_config = {"frozen": True}

    source: str
    target: str
    status: str = "404-200"


class ZonesConfig(BaseModel):
    """[zones] section: hosted zones the deployer controls."""

    model_config = {"frozen": True}

    hosted: list[str] = Field(default_factory=lambda: ["trakkyfood.it"])


class PlatformConfig(BaseModel):
    """[platform] section."""

    model_config = {"frozen": True}

    default_domain: str = "amplifyapp.com"
    state_dir: str = ".sitectl"


class FaqEntryConfig(BaseModel):
    """[[faq]] entry."""

    model_config = {"frozen": True}

    question: str
    answer: str


class PluginsConfig(BaseModel):
    """[plugins] section."""

    model_config = {"frozen": True}

    static_zones: dict[str, Any] = Field(default_factory=lambda: {"enabled": True})
    local_platform: dict[str, Any] = Field(default_factory=lambda: {"enabled": True})


def default_branches() -> dict[str, BranchConfig]:
    return {
        "main": BranchConfig(stage="development"),
        "prod": BranchConfig(stage="production"),
    }


def default_domains() -> list[DomainConfig]:
    return [
        DomainConfig(domain_name="dev-landing-page.trakkyfood.it", branch="main"),
        DomainConfig(domain_name="trakkyfood.it", branch="prod"),
    ]


def default_rules() -> list[RuleConfig]:
    return [RuleConfig(source="/<*>", target="/index.html", status="404-200")]


class SitectlConfig(BaseModel):
    """Root configuration composing all sections."""

    model_config = {"frozen": True}

    app: AppConfig = Field(default_factory=AppConfig)
    source: SourceConfig = Field(default_factory=SourceConfig)
    build: BuildConfig = Field(default_factory=BuildConfig)
    branches: dict[str, BranchConfig] = Field(default_factory=default_branches)
    domains: list[DomainConfig] = Field(default_factory=default_domains)
    rules: list[RuleConfig] = Field(default_factory=default_rules)
    zones: ZonesConfig = Field(default_factory=ZonesConfig)
    platform: PlatformConfig = Field(default_factory=PlatformConfig)
    faq: list[FaqEntryConfig] = Field(default_factory=list)
    plugins: PluginsConfig = Field(default_factory=PluginsConfig)
