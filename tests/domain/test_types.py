"""Tests for classification enums and certificate transitions."""

from __future__ import annotations

from sitectl.domain.types import (
    CERTIFICATE_TRANSITIONS,
    CertificateStatus,
    IndexingPolicy,
    RedirectStatus,
    Stage,
    default_indexing,
    is_valid_transition,
)


class TestEnums:
    def test_str_values(self) -> None:
        assert str(Stage.PRODUCTION) == "production"
        assert str(IndexingPolicy.NOINDEX) == "noindex"
        assert str(RedirectStatus.NOT_FOUND_REWRITE) == "404-200"

    def test_default_indexing(self) -> None:
        assert default_indexing(Stage.PRODUCTION) == IndexingPolicy.INDEX
        assert default_indexing(Stage.DEVELOPMENT) == IndexingPolicy.NOINDEX
        assert default_indexing("development") == IndexingPolicy.NOINDEX


class TestCertificateTransitions:
    def test_pending_resolves(self) -> None:
        for target in (CertificateStatus.VALIDATED, CertificateStatus.FAILED):
            assert is_valid_transition("pending", target, CERTIFICATE_TRANSITIONS)

    def test_validated_is_terminal(self) -> None:
        for target in ("pending", "failed"):
            assert not is_valid_transition("validated", target, CERTIFICATE_TRANSITIONS)

    def test_failed_can_be_re_requested(self) -> None:
        assert is_valid_transition("failed", "pending", CERTIFICATE_TRANSITIONS)
        assert not is_valid_transition("failed", "validated", CERTIFICATE_TRANSITIONS)

    def test_unknown_state(self) -> None:
        assert not is_valid_transition("revoked", "pending", CERTIFICATE_TRANSITIONS)
