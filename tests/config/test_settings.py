"""Tests for SitectlSettings: unified settings with TOML source."""

from __future__ import annotations

from pathlib import Path

import click
import pytest

from sitectl.config.settings import SitectlSettings
from tests.conftest import TEST_TOKEN


class TestDefaults:
    def test_all_defaults(self, tmp_path: Path) -> None:
        settings = SitectlSettings.from_cli(project_root=tmp_path)
        assert settings.project_root == tmp_path
        assert settings.config_path is None
        assert settings.json_output is False
        assert settings.app.name == "trakkyfood-landing-page"
        assert list(settings.branches) == ["main", "prod"]
        assert settings.branches["prod"].stage == "production"
        assert [d.domain_name for d in settings.domains] == [
            "dev-landing-page.trakkyfood.it",
            "trakkyfood.it",
        ]
        assert settings.zones.hosted == ["trakkyfood.it"]
        assert settings.rules[0].status == "404-200"

    def test_state_dir(self, tmp_path: Path) -> None:
        settings = SitectlSettings.from_cli(project_root=tmp_path)
        assert settings.state_dir == tmp_path / ".sitectl"

    def test_frozen(self, tmp_path: Path) -> None:
        settings = SitectlSettings.from_cli(project_root=tmp_path)
        with pytest.raises(Exception):
            settings.quiet = True  # type: ignore[misc]


class TestTomlSource:
    def test_loads_from_toml(self, project_root: Path) -> None:
        settings = SitectlSettings.from_cli(project_root=project_root)
        assert settings.config_path == project_root / "sitectl.toml"
        assert settings.source.owner == "acme"
        assert settings.source.repository == "site"
        assert settings.build.artifact_dir == "dist"  # default preserved

    def test_branch_table_replaces_defaults(self, tmp_path: Path) -> None:
        (tmp_path / "sitectl.toml").write_text(
            '[branches.main]\nstage = "development"\n'
            '[branches.main.environment_variables]\nAPI_URL = "https://api.example.com"\n'
        )
        settings = SitectlSettings.from_cli(project_root=tmp_path)
        assert list(settings.branches) == ["main"]
        assert settings.branches["main"].environment_variables == {
            "API_URL": "https://api.example.com"
        }

    def test_domains_array(self, tmp_path: Path) -> None:
        (tmp_path / "sitectl.toml").write_text(
            '[[domains]]\ndomain_name = "example.com"\nbranch = "prod"\n'
            '[[domains]]\ndomain_name = "example.com"\nbranch = "main"\n'
            'root = false\nprefix = "dev"\n'
        )
        settings = SitectlSettings.from_cli(project_root=tmp_path)
        assert len(settings.domains) == 2
        assert settings.domains[1].root is False
        assert settings.domains[1].prefix == "dev"

    def test_explicit_config_path(self, tmp_path: Path) -> None:
        custom = tmp_path / "custom" / "site.toml"
        custom.parent.mkdir(parents=True)
        custom.write_text('[app]\nname = "custom-site"\n')
        settings = SitectlSettings.from_cli(config_path=str(custom), project_root=tmp_path)
        assert settings.app.name == "custom-site"
        assert settings.config_path == custom

    def test_invalid_toml(self, tmp_path: Path) -> None:
        (tmp_path / "sitectl.toml").write_text("[app\nname = ")
        with pytest.raises(click.ClickException):
            SitectlSettings.from_cli(project_root=tmp_path)


class TestEnvironment:
    def test_token_from_env_merges_with_toml(self, project_root: Path) -> None:
        settings = SitectlSettings.from_cli(project_root=project_root)
        assert settings.source.owner == "acme"
        assert settings.source.oauth_token is not None
        assert settings.source.oauth_token.get_secret_value() == TEST_TOKEN
        assert TEST_TOKEN not in repr(settings)

    def test_env_overrides_toml(self, project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("SITECTL_APP__NAME", "from-env")
        settings = SitectlSettings.from_cli(project_root=project_root)
        assert settings.app.name == "from-env"


class TestCliFlags:
    def test_cli_flags_override(self, tmp_path: Path) -> None:
        settings = SitectlSettings.from_cli(
            project_root=tmp_path,
            json_output=True,
            quiet=True,
            verbose=True,
            log_json=True,
        )
        assert settings.json_output is True
        assert settings.quiet is True
        assert settings.verbose is True
        assert settings.log_json is True
