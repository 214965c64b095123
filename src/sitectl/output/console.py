"""Rich Console factory and theme for sitectl output.

Consoles render into a StringIO buffer so every renderer keeps the
``render_result() -> str`` contract. In non-TTY environments (tests,
pipes) Rich drops the color codes on its own.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

SITECTL_THEME = Theme(
    {
        "site.ok": "bold green",
        "site.error": "bold red",
        "site.warning": "bold yellow",
        "site.op": "bold cyan",
        "site.key": "dim",
        "site.id": "bold blue",
        "site.url": "underline",
        "site.branch": "bold",
        "site.stage.production": "magenta",
        "site.stage.development": "cyan",
        "site.cert.pending": "yellow",
        "site.cert.validated": "green",
        "site.cert.failed": "red",
    }
)

_CERT_STYLES: dict[str, str] = {
    "pending": "site.cert.pending",
    "validated": "site.cert.validated",
    "failed": "site.cert.failed",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer."""
    return Console(
        file=StringIO(),
        theme=SITECTL_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_certificate(status: str) -> str:
    return _CERT_STYLES.get(status, "dim")


def style_for_stage(stage: str) -> str:
    return f"site.stage.{stage.lower()}"
