"""Shared pytest fixtures and test helpers for sitectl tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

from sitectl.config.settings import SitectlSettings
from sitectl.domain.binding import HostedZone, match_zone
from sitectl.domain.buildspec import BuildSpecification
from sitectl.domain.descriptor import ApplicationDescriptor
from sitectl.domain.source import SourceRepository
from sitectl.infrastructure.workspace import Workspace

TEST_TOKEN = "ghp_test_token_do_not_print"

SAMPLE_TOML = """\
[app]
name = "trakkyfood-landing-page"

[source]
owner = "acme"
repository = "site"
"""


@pytest.fixture(autouse=True)
def _sitectl_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Isolate tests from the caller's SITECTL_* environment."""
    monkeypatch.delenv("SITECTL_CONFIG", raising=False)
    monkeypatch.setenv("SITECTL_SOURCE__OAUTH_TOKEN", TEST_TOKEN)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def project_root(tmp_path: Path) -> Path:
    """Temporary project directory holding a minimal sitectl.toml."""
    (tmp_path / "sitectl.toml").write_text(SAMPLE_TOML, encoding="utf-8")
    return tmp_path


@pytest.fixture
def settings(project_root: Path) -> SitectlSettings:
    return SitectlSettings.from_cli(project_root=project_root)


@pytest.fixture
def workspace(settings: SitectlSettings) -> Iterator[Workspace]:
    """Workspace with the built-in plugins only."""
    ws = Workspace(settings, discover=False)
    try:
        yield ws
    finally:
        ws.close()


@pytest.fixture
def _isolated_project(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp project so the CLI discovers its sitectl.toml."""
    monkeypatch.chdir(project_root)


# ---------------------------------------------------------------------------
# Shared test helpers (used across domain and service test modules)
# ---------------------------------------------------------------------------


def zone_resolver(*zone_names: str):
    """Resolver backed by a fixed list of hosted zones."""
    zones = [HostedZone(name=n, zone_id=f"Z{i}") for i, n in enumerate(zone_names)]
    return lambda domain_name: match_zone(domain_name, zones)


def make_spec(**kwargs) -> BuildSpecification:
    defaults = {
        "install_commands": ["npm ci"],
        "build_commands": ["npm run build"],
        "artifact_dir": "dist",
        "cache_paths": ["node_modules/**/*"],
    }
    defaults.update(kwargs)
    return BuildSpecification.define(**defaults)


def make_descriptor(
    name: str = "trakkyfood-landing-page",
    zones: tuple[str, ...] = ("trakkyfood.it",),
) -> ApplicationDescriptor:
    source = SourceRepository.from_fields("acme", "site", TEST_TOKEN)
    return ApplicationDescriptor.register(name, source, zone_resolver=zone_resolver(*zones))
