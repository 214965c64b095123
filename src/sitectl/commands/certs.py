"""Command group: certificate status and reconciliation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from sitectl.commands._base import SitectlGroup
from sitectl.domain.types import CertificateStatus

if TYPE_CHECKING:
    from sitectl.commands._context import AppContext

_CERTS_EXAMPLES = """\
  sitectl certs status
  sitectl certs reconcile
  sitectl certs set trakkyfood.it validated"""


@click.group(cls=SitectlGroup, examples=_CERTS_EXAMPLES)
@click.pass_obj
def certs(app: AppContext) -> None:
    """Inspect and reconcile domain certificates."""


@certs.command(
    examples="""\
  sitectl certs status
  sitectl --json certs status"""
)
@click.pass_obj
def status(app: AppContext) -> None:
    """Show branches and domains recorded on the platform."""
    from sitectl.services.deploy import DeployService

    app.emit(DeployService(app.workspace).status())


@certs.command(
    examples="""\
  sitectl certs reconcile
  sitectl -q certs reconcile"""
)
@click.pass_obj
def reconcile(app: AppContext) -> None:
    """Poll certificate status once for every declared hostname."""
    from sitectl.services.deploy import DeployService

    app.emit(DeployService(app.workspace).reconcile())


@certs.command(
    "set",
    examples="""\
  sitectl certs set dev-landing-page.trakkyfood.it validated
  sitectl certs set trakkyfood.it failed""",
)
@click.argument("hostname")
@click.argument(
    "status_value",
    metavar="STATUS",
    type=click.Choice([s.value for s in CertificateStatus], case_sensitive=False),
)
@click.pass_obj
def set_status(app: AppContext, hostname: str, status_value: str) -> None:
    """Record a validation outcome in the local platform store."""
    from sitectl.services.deploy import DeployService

    app.emit(DeployService(app.workspace).set_certificate(hostname, status_value.lower()))
