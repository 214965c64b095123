"""Tests for FaqService rendering."""

from __future__ import annotations

from pathlib import Path

from sitectl.config.settings import SitectlSettings
from sitectl.domain.faq import DEFAULT_FAQ
from sitectl.infrastructure.workspace import Workspace
from sitectl.services.faq import FaqService
from tests.conftest import SAMPLE_TOML


class TestRender:
    def test_default_items_in_order(self, workspace: Workspace) -> None:
        result = FaqService(workspace).render()
        assert result.ok
        assert result.data["count"] == 4
        assert result.data["questions"] == [item.question for item in DEFAULT_FAQ]
        html = result.data["html"]
        assert html.index("How much does the app cost?") < html.index(
            "How do I register my own food truck?"
        )
        assert 'id="item-0"' in html
        assert 'id="item-3"' in html
        assert "Frequently Asked Questions" in html

    def test_answers_escaped(self, workspace: Workspace) -> None:
        html = FaqService(workspace).render().data["html"]
        assert "&#34;For Business&#34;" in html or "&quot;For Business&quot;" in html

    def test_configured_items(self, project_root: Path) -> None:
        (project_root / "sitectl.toml").write_text(
            SAMPLE_TOML + '\n[[faq]]\nquestion = "Q1?"\nanswer = "A1"\n', encoding="utf-8"
        )
        ws = Workspace(SitectlSettings.from_cli(project_root=project_root), discover=False)
        try:
            result = FaqService(ws).render(title="Help")
        finally:
            ws.close()
        assert result.data["questions"] == ["Q1?"]
        assert "<h3 class=\"faq__title\">Help</h3>" in result.data["html"]

    def test_write_to_file(self, workspace: Workspace, tmp_path: Path) -> None:
        target = tmp_path / "public" / "faq.html"
        result = FaqService(workspace).render(output=target)
        assert result.data["output_file"] == str(target)
        assert target.read_text(encoding="utf-8") == result.data["html"]

    def test_project_override_template(self, workspace: Workspace, project_root: Path) -> None:
        override = project_root / ".sitectl" / "templates" / "site"
        override.mkdir(parents=True)
        (override / "faq.html.j2").write_text(
            "<ul>{% for item in items %}<li>{{ item.question }}</li>{% endfor %}</ul>"
        )
        html = FaqService(workspace).render().data["html"]
        assert html.startswith("<ul><li>How much does the app cost?</li>")

    def test_broken_template(self, workspace: Workspace, project_root: Path) -> None:
        override = project_root / ".sitectl" / "templates" / "site"
        override.mkdir(parents=True)
        (override / "faq.html.j2").write_text("{% for item in items %}")
        result = FaqService(workspace).render()
        assert not result.ok
        assert result.error.code == "TEMPLATE_ERROR"
