"""Tests for faq and init commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from sitectl.cli import cli


@pytest.mark.usefixtures("_isolated_project")
class TestFaqCommand:
    def test_prints_html(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["faq"])
        assert result.exit_code == 0
        assert result.output.startswith('<section class="faq">')
        assert "Is the location tracking really live?" in result.output

    def test_output_file(self, cli_runner: CliRunner, project_root: Path) -> None:
        result = cli_runner.invoke(cli, ["faq", "--title", "FAQ", "-o", "public/faq.html"])
        assert result.exit_code == 0
        assert "output_file" in result.output
        assert "FAQ" in (project_root / "public" / "faq.html").read_text(encoding="utf-8")


class TestInitCommand:
    def test_init(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(
            cli,
            [
                "--json",
                "init",
                str(tmp_path),
                "--owner",
                "acme",
                "--repository",
                "landing",
                "--zone",
                "acme.dev",
            ],
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["op"] == "init_project"
        assert data["data"]["name"] == tmp_path.name
        assert (tmp_path / "sitectl.toml").is_file()

    def test_init_existing_fails(self, cli_runner: CliRunner, project_root: Path) -> None:
        result = cli_runner.invoke(
            cli,
            ["init", str(project_root), "--owner", "a", "--repository", "b", "--zone", "c.it"],
        )
        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_init_requires_owner(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["init", str(tmp_path), "--repository", "b"])
        assert result.exit_code == 2
