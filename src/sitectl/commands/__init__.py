"""Subcommand modules for sitectl.

Provides register_commands() which uses deferred imports to keep
``sitectl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all command groups and standalone commands on the root CLI group.

    1 group (``certs``) + 6 standalone commands.
    """
    # --- Groups ---
    from sitectl.commands.certs import certs

    cli.add_command(certs)

    # --- Standalone commands ---
    from sitectl.commands.apply import apply
    from sitectl.commands.buildspec import buildspec
    from sitectl.commands.faq import faq
    from sitectl.commands.init_cmd import init_cmd
    from sitectl.commands.outputs import outputs
    from sitectl.commands.synth import synth

    cli.add_command(init_cmd)
    cli.add_command(synth)
    cli.add_command(buildspec)
    cli.add_command(outputs)
    cli.add_command(apply)
    cli.add_command(faq)
