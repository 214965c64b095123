"""Domain bindings and hosted-zone resolution rules.

A binding attaches a domain from a hosted zone to one branch environment,
either at the domain itself (root mapping) or at ``<prefix>.<domain>``.
The hostname a binding actually answers on is its *served hostname*;
a served hostname belongs to exactly one environment at a time.

Certificate issuance is asynchronous and owned by the platform. A binding
only records the last observed state; reconciliation updates it.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from pydantic import BaseModel

from sitectl.domain.ids import normalize_hostname
from sitectl.domain.types import CertificateStatus


class HostedZone(BaseModel):
    """Handle to a DNS zone the deployer controls."""

    model_config = {"frozen": True}

    name: str
    zone_id: str = ""

    def contains(self, domain_name: str) -> bool:
        zone = normalize_hostname(self.name)
        domain = normalize_hostname(domain_name)
        return domain == zone or domain.endswith(f".{zone}")


ZoneResolver = Callable[[str], HostedZone | None]


def match_zone(domain_name: str, zones: Iterable[HostedZone]) -> HostedZone | None:
    """Return the most specific zone containing *domain_name*, if any."""
    candidates = [z for z in zones if z.contains(domain_name)]
    if not candidates:
        return None
    return max(candidates, key=lambda z: len(normalize_hostname(z.name)))


class DomainBinding(BaseModel):
    """Assignment of a domain (or one of its subdomains) to an environment.

    Attributes:
        domain_name: Fully-qualified domain, normalized to lower case.
        target: Branch name of the environment served.
        root_mapping: Serve the domain itself rather than a subdomain.
        prefix: Subdomain label when not a root mapping.
        zone: Name of the hosted zone the domain resolved in.
        certificate_status: Last known certificate state on the platform.
    """

    model_config = {"frozen": True}

    domain_name: str
    target: str
    root_mapping: bool = True
    prefix: str = ""
    zone: str = ""
    certificate_status: CertificateStatus = CertificateStatus.PENDING

    @property
    def hostname(self) -> str:
        """The hostname this binding answers on."""
        if self.root_mapping or not self.prefix:
            return self.domain_name
        return f"{self.prefix}.{self.domain_name}"

    @property
    def url(self) -> str:
        return f"https://{self.hostname}"

    @property
    def is_apex(self) -> bool:
        """True when the served hostname is the zone apex itself."""
        return self.hostname == self.zone

    def with_certificate_status(self, status: str) -> DomainBinding:
        return self.model_copy(update={"certificate_status": CertificateStatus(status)})

    def to_document(self) -> dict[str, Any]:
        return {
            "domainName": self.domain_name,
            "prefix": "" if self.root_mapping else self.prefix,
            "branchName": self.target,
            "hostname": self.hostname,
            "zone": self.zone,
            "certificateStatus": str(self.certificate_status),
        }
