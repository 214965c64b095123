"""Command: synthesize and validate the deployment descriptor."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from sitectl.commands._base import SitectlCommand

if TYPE_CHECKING:
    from sitectl.commands._context import AppContext

_SYNTH_EXAMPLES = """\
  sitectl synth
  sitectl -v synth
  sitectl -q synth > descriptor.yaml
  sitectl --json synth"""


@click.command("synth", cls=SitectlCommand, examples=_SYNTH_EXAMPLES)
@click.pass_obj
def synth(app: AppContext) -> None:
    """Validate the declaration and print the synthesized descriptor."""
    from sitectl.services.descriptor import DescriptorService

    app.emit(DescriptorService(app.workspace).synth())
