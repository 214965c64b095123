"""Tests for hosted zones and domain bindings."""

from __future__ import annotations

from sitectl.domain.binding import DomainBinding, HostedZone, match_zone
from sitectl.domain.types import CertificateStatus


class TestHostedZone:
    def test_contains_apex_and_subdomains(self) -> None:
        zone = HostedZone(name="trakkyfood.it")
        assert zone.contains("trakkyfood.it")
        assert zone.contains("dev-landing-page.trakkyfood.it")
        assert zone.contains("DEV.TrakkyFood.it.")

    def test_rejects_lookalikes(self) -> None:
        zone = HostedZone(name="trakkyfood.it")
        assert not zone.contains("nottrakkyfood.it")
        assert not zone.contains("trakkyfood.it.evil.com")

    def test_match_zone_prefers_most_specific(self) -> None:
        zones = [HostedZone(name="trakkyfood.it"), HostedZone(name="dev.trakkyfood.it")]
        assert match_zone("a.dev.trakkyfood.it", zones).name == "dev.trakkyfood.it"
        assert match_zone("www.trakkyfood.it", zones).name == "trakkyfood.it"

    def test_match_zone_none(self) -> None:
        assert match_zone("example.com", [HostedZone(name="trakkyfood.it")]) is None


class TestDomainBinding:
    def test_root_mapping_hostname(self) -> None:
        binding = DomainBinding(domain_name="trakkyfood.it", target="prod", zone="trakkyfood.it")
        assert binding.hostname == "trakkyfood.it"
        assert binding.url == "https://trakkyfood.it"
        assert binding.is_apex

    def test_subdomain_hostname(self) -> None:
        binding = DomainBinding(
            domain_name="trakkyfood.it",
            target="main",
            root_mapping=False,
            prefix="preview",
            zone="trakkyfood.it",
        )
        assert binding.hostname == "preview.trakkyfood.it"
        assert not binding.is_apex
        assert binding.to_document()["prefix"] == "preview"

    def test_starts_pending(self) -> None:
        binding = DomainBinding(domain_name="trakkyfood.it", target="prod")
        assert binding.certificate_status == CertificateStatus.PENDING

    def test_with_certificate_status_returns_copy(self) -> None:
        binding = DomainBinding(domain_name="trakkyfood.it", target="prod")
        updated = binding.with_certificate_status("validated")
        assert updated.certificate_status == CertificateStatus.VALIDATED
        assert binding.certificate_status == CertificateStatus.PENDING

    def test_document(self) -> None:
        binding = DomainBinding(
            domain_name="dev-landing-page.trakkyfood.it", target="main", zone="trakkyfood.it"
        )
        assert binding.to_document() == {
            "domainName": "dev-landing-page.trakkyfood.it",
            "prefix": "",
            "branchName": "main",
            "hostname": "dev-landing-page.trakkyfood.it",
            "zone": "trakkyfood.it",
            "certificateStatus": "pending",
        }
