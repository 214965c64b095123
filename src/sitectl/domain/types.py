"""Classification enums for environments, bindings, and routing rules."""

from __future__ import annotations

from enum import StrEnum


class Stage(StrEnum):
    """Deployment stage of a branch environment."""

    PRODUCTION = "production"
    DEVELOPMENT = "development"


class IndexingPolicy(StrEnum):
    """Whether crawlers may index the content served by an environment."""

    INDEX = "index"
    NOINDEX = "noindex"


class CertificateStatus(StrEnum):
    """Platform-side certificate state of a domain binding."""

    PENDING = "pending"
    VALIDATED = "validated"
    FAILED = "failed"


class RedirectStatus(StrEnum):
    """Status codes accepted by the platform's redirect/rewrite rules."""

    REWRITE = "200"
    PERMANENT_REDIRECT = "301"
    TEMPORARY_REDIRECT = "302"
    NOT_FOUND = "404"
    NOT_FOUND_REWRITE = "404-200"


# --- Certificate transitions ---

CERTIFICATE_TRANSITIONS: dict[str, list[str]] = {
    "pending": ["validated", "failed"],
    "validated": [],
    "failed": ["pending"],  # re-requested on next apply
}


def default_indexing(stage: str) -> IndexingPolicy:
    """Production is indexable; every other stage is hidden from crawlers."""
    if stage == Stage.PRODUCTION:
        return IndexingPolicy.INDEX
    return IndexingPolicy.NOINDEX


def is_valid_transition(
    current: str,
    target: str,
    transitions: dict[str, list[str]],
) -> bool:
    """Check if transitioning from *current* to *target* is allowed."""
    allowed = transitions.get(current, [])
    return target in allowed
