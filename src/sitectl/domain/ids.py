"""Identifier and hostname helpers.

App IDs are content-hash identifiers derived from the application name:
``d`` followed by 13 hex chars of SHA-256, the shape the hosting platform
uses for its own app IDs.

INVARIANT: the same application name always yields the same app ID, so
re-registering an application resolves to the existing identity.
"""

from __future__ import annotations

import hashlib
import re

APP_ID_PATTERN = re.compile(r"^d[0-9a-f]{13}$")
HOST_LABEL_PATTERN = re.compile(r"^(?!-)[a-z0-9-]{1,63}(?<!-)$")
ENV_VAR_PATTERN = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def generate_app_id(app_name: str) -> str:
    """Derive the stable app ID for *app_name*."""
    digest = hashlib.sha256(app_name.strip().encode("utf-8")).hexdigest()[:13]
    return f"d{digest}"


def normalize_hostname(name: str) -> str:
    """Lower-case a hostname and drop any trailing root dot."""
    return name.strip().lower().rstrip(".")


def is_valid_hostname(name: str) -> bool:
    """Check every dot-separated label of *name* against RFC 1123 rules."""
    if not name or len(name) > 253:
        return False
    return all(HOST_LABEL_PATTERN.match(label) for label in name.split("."))


def branch_host_label(branch: str) -> str:
    """Host label the platform uses for a branch's default URL.

    Slashes in branch names (``feature/faq``) become dashes.
    """
    return branch.replace("/", "-").lower()


def pascal_case(name: str) -> str:
    """``dev-landing/page`` -> ``DevLandingPage`` (for output names)."""
    parts = re.split(r"[^A-Za-z0-9]+", name)
    return "".join(p[:1].upper() + p[1:] for p in parts if p)
