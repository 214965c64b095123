"""Command: render the landing-page FAQ section."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from sitectl.commands._base import SitectlCommand

if TYPE_CHECKING:
    from sitectl.commands._context import AppContext

_FAQ_EXAMPLES = """\
  sitectl faq
  sitectl faq --output public/faq.html
  sitectl faq --title "FAQ" """


@click.command("faq", cls=SitectlCommand, examples=_FAQ_EXAMPLES)
@click.option("--title", default="Frequently Asked Questions", help="Section heading.")
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write the HTML to a file instead of stdout.",
)
@click.pass_obj
def faq(app: AppContext, title: str, output: Path | None) -> None:
    """Render the FAQ items as an HTML section."""
    from sitectl.services.faq import FaqService

    app.emit(FaqService(app.workspace).render(title=title, output=output))
