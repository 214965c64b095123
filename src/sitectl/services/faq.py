"""FaqService: render the landing-page FAQ section."""

from __future__ import annotations

from pathlib import Path

from jinja2 import TemplateError

from sitectl.domain.faq import DEFAULT_FAQ, FaqItem
from sitectl.infrastructure.templates import build_template_environment
from sitectl.services.base import BaseService
from sitectl.services.result import ServiceResult

FAQ_TEMPLATE = "faq.html.j2"
DEFAULT_TITLE = "Frequently Asked Questions"


class FaqService(BaseService):
    """Render configured (or default) FAQ items to HTML."""

    def items(self) -> list[FaqItem]:
        configured = self._workspace.settings.faq
        if configured:
            return [FaqItem(question=e.question, answer=e.answer) for e in configured]
        return list(DEFAULT_FAQ)

    def render(self, *, title: str = DEFAULT_TITLE, output: Path | None = None) -> ServiceResult:
        """Render the FAQ section, optionally writing it to *output*."""
        op = "faq"
        items = self.items()
        env = build_template_environment("site", state_dir=self._workspace.settings.state_dir)
        try:
            html = env.get_template(FAQ_TEMPLATE).render(title=title, items=items)
        except TemplateError as exc:
            return ServiceResult.failure(
                op, "TEMPLATE_ERROR", f"Failed to render {FAQ_TEMPLATE}: {exc}"
            )

        data: dict[str, object] = {
            "title": title,
            "count": len(items),
            "questions": [item.question for item in items],
            "html": html,
        }
        if output is not None:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(html, encoding="utf-8")
            data["output_file"] = str(output)
        return ServiceResult(ok=True, op=op, data=data)
