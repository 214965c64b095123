"""Command: print the shared build specification."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from sitectl.commands._base import SitectlCommand

if TYPE_CHECKING:
    from sitectl.commands._context import AppContext

_BUILDSPEC_EXAMPLES = """\
  sitectl buildspec
  sitectl -q buildspec > amplify.yml"""


@click.command("buildspec", cls=SitectlCommand, examples=_BUILDSPEC_EXAMPLES)
@click.pass_obj
def buildspec(app: AppContext) -> None:
    """Print the build specification every branch builds with."""
    from sitectl.services.descriptor import DescriptorService

    app.emit(DescriptorService(app.workspace).buildspec())
