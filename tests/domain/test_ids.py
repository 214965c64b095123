"""Tests for app IDs and hostname helpers."""

from __future__ import annotations

import pytest

from sitectl.domain.ids import (
    APP_ID_PATTERN,
    branch_host_label,
    generate_app_id,
    is_valid_hostname,
    normalize_hostname,
    pascal_case,
)


class TestGenerateAppId:
    def test_deterministic(self) -> None:
        assert generate_app_id("trakkyfood-landing-page") == generate_app_id(
            "trakkyfood-landing-page"
        )

    def test_shape(self) -> None:
        app_id = generate_app_id("trakkyfood-landing-page")
        assert APP_ID_PATTERN.match(app_id)
        assert len(app_id) == 14

    def test_distinct_names_distinct_ids(self) -> None:
        assert generate_app_id("site-a") != generate_app_id("site-b")

    def test_surrounding_whitespace_ignored(self) -> None:
        assert generate_app_id("  site ") == generate_app_id("site")


class TestHostnames:
    def test_normalize(self) -> None:
        assert normalize_hostname(" TrakkyFood.IT. ") == "trakkyfood.it"

    @pytest.mark.parametrize(
        "name",
        ["trakkyfood.it", "dev-landing-page.trakkyfood.it", "a.b.c.example.com", "localhost"],
    )
    def test_valid(self, name: str) -> None:
        assert is_valid_hostname(name)

    @pytest.mark.parametrize(
        "name",
        ["", "-bad.it", "bad-.it", "under_score.it", "two..dots.it", "has space.it", "a" * 64],
    )
    def test_invalid(self, name: str) -> None:
        assert not is_valid_hostname(name)


class TestLabels:
    def test_branch_host_label(self) -> None:
        assert branch_host_label("main") == "main"
        assert branch_host_label("feature/FAQ") == "feature-faq"

    def test_pascal_case(self) -> None:
        assert pascal_case("main") == "Main"
        assert pascal_case("dev-landing/page") == "DevLandingPage"
        assert pascal_case("---") == ""
