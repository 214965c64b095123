"""Built-in hosted-zone provider backed by the ``[zones]`` config section.

Only zones listed in config are considered reachable by the deployer;
anything else fails resolution.
"""

from __future__ import annotations

import hashlib

import pluggy

from sitectl.domain.binding import HostedZone, match_zone
from sitectl.domain.ids import normalize_hostname

hookimpl = pluggy.HookimplMarker("sitectl")


def _zone_id(name: str) -> str:
    digest = hashlib.sha256(name.encode("utf-8")).hexdigest()[:13].upper()
    return f"Z{digest}"


class StaticZonesPlugin:
    """Resolve domains against a fixed list of hosted zone names."""

    def __init__(self, zone_names: list[str] | None = None) -> None:
        self._zones = [
            HostedZone(name=normalize_hostname(n), zone_id=_zone_id(normalize_hostname(n)))
            for n in (zone_names or [])
            if n.strip()
        ]

    @property
    def zones(self) -> list[HostedZone]:
        return list(self._zones)

    @hookimpl
    def sitectl_resolve_zone(self, domain_name: str) -> HostedZone | None:
        return match_zone(domain_name, self._zones)
