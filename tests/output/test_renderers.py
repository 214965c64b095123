"""Tests for Rich renderers and output formatting."""

from __future__ import annotations

import json

from sitectl.infrastructure.workspace import Workspace
from sitectl.output.formatters import OutputSettings, format_result
from sitectl.output.renderers import render_quiet, render_result
from sitectl.services.descriptor import DescriptorService
from sitectl.services.result import ServiceError, ServiceResult


def _error() -> ServiceResult:
    return ServiceResult(
        ok=False,
        op="apply",
        error=ServiceError(
            code="DOMAIN_CONFLICT",
            message="trakkyfood.it is already bound to 'prod'",
            detail={"hostname": "trakkyfood.it"},
        ),
    )


class TestFormatResult:
    def test_json_mode(self) -> None:
        result = ServiceResult(ok=True, op="outputs", data={"items": []})
        parsed = json.loads(format_result(result, settings=OutputSettings(json_output=True)))
        assert parsed["ok"] is True
        assert parsed["op"] == "outputs"

    def test_json_wins_over_quiet(self) -> None:
        result = ServiceResult(ok=True, op="apply")
        settings = OutputSettings(json_output=True, quiet=True)
        assert json.loads(format_result(result, settings=settings))["op"] == "apply"

    def test_default_is_rich(self) -> None:
        output = format_result(ServiceResult(ok=True, op="apply", data={"app": "site"}))
        first = output.splitlines()[0]
        assert first.startswith("OK")
        assert first.endswith("apply")


class TestErrorRendering:
    def test_error_line(self) -> None:
        output = render_result(_error())
        assert "ERROR" in output
        assert "[DOMAIN_CONFLICT]" in output
        assert "already bound" in output
        assert "detail" not in output

    def test_verbose_shows_detail(self) -> None:
        output = render_result(_error(), verbose=True)
        assert "hostname: trakkyfood.it" in output

    def test_quiet_error(self) -> None:
        assert render_quiet(_error()).startswith("ERROR: apply:")


class TestDescriptorRenderers:
    def test_synth_summary(self, workspace: Workspace) -> None:
        result = DescriptorService(workspace).synth()
        output = render_result(result)
        assert output.splitlines()[0].endswith("synth")
        assert "main" in output
        assert "trakkyfood.it" in output
        assert "frontend:" not in output

    def test_synth_verbose_includes_yaml(self, workspace: Workspace) -> None:
        output = render_result(DescriptorService(workspace).synth(), verbose=True)
        assert "frontend:" in output

    def test_synth_quiet_is_yaml(self, workspace: Workspace) -> None:
        result = DescriptorService(workspace).synth()
        assert render_quiet(result) == result.data["yaml"].rstrip("\n")

    def test_outputs_quiet(self, workspace: Workspace) -> None:
        result = DescriptorService(workspace).outputs()
        lines = render_quiet(result).splitlines()
        assert lines[0] == f"AppId={result.data['app_id']}"
        assert "ProdDomainUrl=https://trakkyfood.it" in lines

    def test_outputs_table(self, workspace: Workspace) -> None:
        output = render_result(DescriptorService(workspace).outputs(), verbose=True)
        assert "MainDomainUrl" in output
        assert "https://dev-landing-page.trakkyfood.it" in output
        assert "Description" in output

    def test_buildspec(self, workspace: Workspace) -> None:
        output = render_result(DescriptorService(workspace).buildspec())
        assert "baseDirectory: dist" in output
        assert "trakkyfood-landing-page/prod" in output


class TestDeploymentRenderers:
    def test_apply(self) -> None:
        result = ServiceResult(
            ok=True,
            op="apply",
            data={
                "app": "site",
                "app_id": "d0123456789abc",
                "app_action": "created",
                "branches": [{"name": "main", "action": "created"}],
                "removed_branches": ["old"],
                "removed_domains": ["www.trakkyfood.it"],
                "domains": [
                    {
                        "hostname": "trakkyfood.it",
                        "branch": "main",
                        "action": "created",
                        "certificate_status": "pending",
                    }
                ],
                "outputs": {"AppId": "d0123456789abc"},
            },
        )
        output = render_result(result)
        assert "removed_branches: old" in output
        assert "removed_domains: www.trakkyfood.it" in output
        assert "trakkyfood.it" in output
        assert "pending" in output

    def test_reconcile_transitions(self) -> None:
        result = ServiceResult(
            ok=True,
            op="reconcile",
            data={
                "certificates": [{"hostname": "trakkyfood.it", "status": "validated"}],
                "transitions": [
                    {"hostname": "trakkyfood.it", "from": "pending", "to": "validated"}
                ],
                "all_validated": True,
            },
        )
        output = render_result(result)
        assert "all_validated: yes" in output
        assert "trakkyfood.it: pending -> validated" in output

    def test_unknown_op_generic(self) -> None:
        result = ServiceResult(ok=True, op="set_certificate", data={"hostname": "a.it"})
        assert "hostname: a.it" in render_result(result)


class TestSiteRenderers:
    def test_faq_prints_html(self) -> None:
        result = ServiceResult(ok=True, op="faq", data={"html": "<section></section>\n"})
        assert render_result(result) == "<section></section>"
        assert render_quiet(result) == "<section></section>"

    def test_faq_written_to_file(self) -> None:
        result = ServiceResult(
            ok=True, op="faq", data={"title": "FAQ", "count": 4, "output_file": "faq.html"}
        )
        output = render_result(result)
        assert "output_file: faq.html" in output
        assert render_quiet(result) == "OK: faq"
