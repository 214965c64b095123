"""AppContext: the object every subcommand receives via ``@click.pass_obj``.

It configures logging once, builds the workspace on demand, and owns the
output contract: results on stdout, warnings and failures on stderr,
exit status 1 on failure.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from sitectl.config.logging import REDACTED
from sitectl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from sitectl.config.settings import SitectlSettings
    from sitectl.infrastructure.workspace import Workspace
    from sitectl.services.result import ServiceResult


class AppContext:
    """Per-invocation state shared by the root group and its subcommands.

    The workspace is created on first use so ``--help``, ``--examples``,
    and ``init`` never load plugins or open the state store.
    """

    def __init__(self, settings: SitectlSettings) -> None:
        self.settings = settings
        self._workspace: Workspace | None = None

        from sitectl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @property
    def workspace(self) -> Workspace:
        if self._workspace is None:
            from sitectl.infrastructure.workspace import Workspace

            self._workspace = Workspace(self.settings)
        return self._workspace

    @property
    def output_settings(self) -> OutputSettings:
        return OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )

    def close(self) -> None:
        if self._workspace is not None:
            self._workspace.close()
            self._workspace = None

    def _scrub(self, text: str) -> str:
        """Mask the repository token should any payload ever carry it."""
        token = self.settings.source.oauth_token
        secret = token.get_secret_value() if token is not None else ""
        return text.replace(secret, REDACTED) if secret else text

    def emit(self, result: ServiceResult) -> None:
        """Print *result*; exits with status 1 when it is a failure.

        Warnings are echoed to stderr in human modes only; ``--json``
        already carries them in the payload.
        """
        settings = self.output_settings
        output = self._scrub(format_result(result, settings=settings))
        if not result.ok:
            click.echo(output, err=True)
            raise SystemExit(1)

        click.echo(output)
        if not settings.json_output:
            for warning in result.warnings:
                click.echo(f"WARNING: {self._scrub(warning)}", err=True)
