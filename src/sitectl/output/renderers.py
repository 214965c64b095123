"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO). The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from sitectl.output.console import (
    create_console,
    get_output,
    style_for_certificate,
    style_for_stage,
)

if TYPE_CHECKING:
    from rich.console import Console

    from sitectl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    Artifact-producing ops print the bare artifact so it can be piped:
    YAML for ``synth``/``buildspec``, HTML for ``faq``, ``name=value``
    lines for ``outputs``.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {msg}"

    d = result.data
    if result.op in ("synth", "buildspec"):
        return str(d.get("yaml", "")).rstrip("\n")
    if result.op == "faq" and "output_file" not in d:
        return str(d.get("html", "")).rstrip("\n")
    if result.op == "outputs":
        return "\n".join(f"{o['name']}={o['value']}" for o in d.get("items", []))
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    console.print(Text("OK", style="site.ok"), Text(f"  {result.op}", style="site.op"), end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="site.key")
    if key == "id" or key.endswith("_id"):
        v = Text(str(value), style="site.id")
    elif key == "url" or str(value).startswith("https://"):
        v = Text(str(value), style="site.url")
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _cert(status: str) -> Text:
    return Text(status, style=style_for_certificate(status))


def _stage(stage: str) -> Text:
    return Text(stage.lower(), style=style_for_stage(stage))


def _table(*columns: str) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    for col in columns:
        table.add_column(col)
    return table


def _render_yaml(console: Console, text: str) -> None:
    console.print()
    console.print(Text(text.rstrip("\n")))


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="site.error")
    op = Text(f"  {result.op}", style="site.op")
    code = Text(f" [{err.code}]" if err else "", style="dim")
    console.print(label, op, code, Text(f": {msg}"), sep="")

    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            console.print(Text(f"    {k}: {v}"))


# ── Descriptor renderers ──────────────────────────────────────────────


def _render_synth(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Summarize the synthesized descriptor; full YAML with ``-v``."""
    _status_line(console, result)
    d = result.data
    document = d.get("document", {})
    _field(console, "app", d.get("app", ""))
    _field(console, "app_id", d.get("app_id", ""))
    app = document.get("app", {})
    if app:
        _field(console, "repository", app.get("repository", {}).get("url", ""))
        _field(console, "default_domain", app.get("defaultDomain", ""))

    branches = document.get("branches", [])
    if branches:
        console.print()
        table = _table("Branch", "Stage", "Indexing", "Auto build", "Cache")
        for b in branches:
            table.add_row(
                Text(b["branchName"], style="site.branch"),
                _stage(b["stage"]),
                b["indexing"],
                "yes" if b["enableAutoBuild"] else "no",
                b["cacheNamespace"],
            )
        console.print(table)

    domains = document.get("domains", [])
    if domains:
        console.print()
        table = _table("Hostname", "Branch", "Zone")
        for dom in domains:
            table.add_row(dom["hostname"], dom["branchName"], dom["zone"])
        console.print(table)

    if verbose and d.get("yaml"):
        _render_yaml(console, d["yaml"])


def _render_buildspec(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    for branch, namespace in result.data.get("cache_namespaces", {}).items():
        _field(console, f"cache[{branch}]", namespace)
    _render_yaml(console, result.data.get("yaml", ""))


def _render_outputs(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    table = _table("Output", "Value", *(["Description"] if verbose else []))
    for item in result.data.get("items", []):
        row = [Text(item["name"], style="site.key"), Text(item["value"], style="site.url")]
        if verbose:
            row.append(Text(item.get("description", "")))
        table.add_row(*row)
    console.print(table)


# ── Deployment renderers ──────────────────────────────────────────────


def _render_apply(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    d = result.data
    for key in ("app", "app_id", "app_action"):
        if key in d:
            _field(console, key, d[key])
    removed = d.get("removed_branches", [])
    if removed:
        _field(console, "removed_branches", ", ".join(removed))
    removed_domains = d.get("removed_domains", [])
    if removed_domains:
        _field(console, "removed_domains", ", ".join(removed_domains))

    branches = d.get("branches", [])
    if branches:
        console.print()
        table = _table("Branch", "Action")
        for b in branches:
            table.add_row(Text(b["name"], style="site.branch"), b["action"])
        console.print(table)

    domains = d.get("domains", [])
    if domains:
        console.print()
        table = _table("Hostname", "Branch", "Action", "Certificate")
        for dom in domains:
            table.add_row(
                dom["hostname"], dom["branch"], dom["action"], _cert(dom["certificate_status"])
            )
        console.print(table)

    if verbose:
        for name, value in d.get("outputs", {}).items():
            _field(console, name, value)


def _render_status(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    d = result.data
    _field(console, "app", d.get("app", ""))
    _field(console, "app_id", d.get("app_id", ""))
    if d.get("platform"):
        _field(console, "platform", d["platform"])

    branches = d.get("branches", [])
    if branches:
        console.print()
        table = _table("Branch", "Stage", "Indexing", "Auto build")
        for b in branches:
            table.add_row(
                Text(b["name"], style="site.branch"),
                _stage(b["stage"]),
                b["indexing"],
                "yes" if b["auto_build"] else "no",
            )
        console.print(table)

    domains = d.get("domains", [])
    if domains:
        console.print()
        table = _table("Hostname", "Branch", "Certificate")
        for dom in domains:
            table.add_row(dom["hostname"], dom["branch"], _cert(dom["certificate_status"]))
        console.print(table)


def _render_reconcile(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    d = result.data
    _field(console, "all_validated", "yes" if d.get("all_validated") else "no")

    certificates = d.get("certificates", [])
    if certificates:
        console.print()
        table = _table("Hostname", "Certificate")
        for c in certificates:
            table.add_row(c["hostname"], _cert(c["status"]))
        console.print(table)

    for t in d.get("transitions", []):
        console.print(
            Text(f"  {t['hostname']}: "),
            _cert(t["from"]),
            Text(" -> "),
            _cert(t["to"]),
            sep="",
        )


# ── Site renderers ────────────────────────────────────────────────────


def _render_faq(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Print the rendered HTML, or a summary when it was written to a file."""
    d = result.data
    if "output_file" not in d:
        console.print(Text(str(d.get("html", "")).rstrip("\n")))
        return
    _status_line(console, result)
    for key in ("title", "count", "output_file"):
        if key in d:
            _field(console, key, d[key])
    if verbose:
        for question in d.get("questions", []):
            console.print(Text(f"    {question}"))


def _render_init(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    d = result.data
    for key in ("config_file", "name", "repository", "zone"):
        if key in d:
            _field(console, key, d[key])
    for domain in d.get("domains", []):
        _field(console, "domain", domain)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    # Descriptor
    "synth": _render_synth,
    "buildspec": _render_buildspec,
    "outputs": _render_outputs,
    # Deployment
    "apply": _render_apply,
    "status": _render_status,
    "reconcile": _render_reconcile,
    "set_certificate": _render_generic,
    # Site
    "faq": _render_faq,
    # Init
    "init_project": _render_init,
}
