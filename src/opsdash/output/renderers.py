"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.

Dangling references arrive as ``None`` in ``data["refs"]`` and are shown
as "Unknown Client" or "Unknown" here, never earlier.
"""

from __future__ import annotations

import json as _json
from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from opsdash.output.console import create_console, get_output, style_for_status

if TYPE_CHECKING:
    from rich.console import Console

    from opsdash.services.result import ServiceResult

UNKNOWN_CLIENT = "Unknown Client"
UNKNOWN = "Unknown"

_KIND_TITLES: dict[str, str] = {
    "client": "Clients",
    "project": "Projects",
    "team_member": "Team",
    "intern": "Interns",
    "contract": "Contracts",
}


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
    """Render minimal output for ``--quiet`` mode."""
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    items = result.data.get("items")
    if isinstance(items, list):
        return "\n".join(str(item["id"]) for item in items if isinstance(item, dict))
    if result.op == "search":
        found = result.data.get("results", {})
        return "\n".join(item["id"] for kind_items in found.values() for item in kind_items)
    if "id" in result.data and result.data["id"] is not None:
        return str(result.data["id"])
    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def format_money(value: Any) -> str:
    """``50000`` → ``$50,000``; fractional amounts keep cents."""
    amount = float(value or 0)
    if amount.is_integer():
        return f"${amount:,.0f}"
    return f"${amount:,.2f}"


def _or_unknown(value: Any, fallback: str = UNKNOWN) -> Text:
    if value is None:
        return Text(fallback, style="ops.unknown")
    return Text(str(value))


def _status_text(status: Any) -> Text:
    return Text(str(status), style=style_for_status(str(status)))


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    label = Text("OK", style="ops.ok")
    op = Text(f"  {result.op}", style="ops.op")
    console.print(label, op, end="")
    console.print()


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented key-value field."""
    k = Text(f"  {key}: ", style="ops.key")
    if isinstance(value, Text):
        v = value
    elif key == "id" or key.endswith("_id"):
        v = Text(str(value), style="ops.id")
    elif key in ("title", "name"):
        v = Text(str(value), style="ops.title")
    elif isinstance(value, (dict, list)):
        v = Text(_json.dumps(value, separators=(",", ":")))
    else:
        v = Text(str(value))
    console.print(k, v, end="")
    console.print()


def _render_meta(console: Console, result: ServiceResult) -> None:
    """Print meta block including telemetry span tree (verbose only)."""
    if not result.meta:
        return

    console.print()
    console.print(Text("  meta:", style="dim"))
    for k, v in result.meta.items():
        if k == "telemetry":
            _render_telemetry_tree(console, v, indent=4)
        else:
            console.print(f"    {k}: {v}")


def _render_telemetry_tree(
    console: Console,
    span_data: dict[str, Any],
    indent: int = 4,
) -> None:
    """Render a hierarchical span tree with color-coded timing."""
    prefix = " " * indent
    name = span_data.get("name", "?")
    duration = span_data.get("duration_ms", 0.0)

    if duration > 1000:
        style = "bold red"
    elif duration > 100:
        style = "yellow"
    else:
        style = "dim"

    line = f"{prefix}[{style}]{duration:>8.2f}ms[/{style}]  {name}"
    annotations = span_data.get("annotations") or {}
    if annotations:
        line += "  (" + ", ".join(f"{k}={v}" for k, v in annotations.items()) + ")"
    console.print(line)

    for child in span_data.get("children", []):
        _render_telemetry_tree(console, child, indent=indent + 4)


# ── Tables ────────────────────────────────────────────────────────────


def _entity_table(kind: str, items: list[dict[str, Any]], refs: dict[str, Any]) -> Table:
    """Build the section table for *kind*."""
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("ID", style="ops.id", no_wrap=True)

    if kind == "client":
        for col in ("Name", "Company", "Email", "Phone"):
            table.add_column(col)
        for c in items:
            table.add_row(c["id"], c["name"], c["company"], c["email"], c["phone"])
    elif kind == "project":
        for col in ("Name", "Client", "Status", "Start", "End"):
            table.add_column(col)
        for p in items:
            ref = refs.get(p["id"], {})
            table.add_row(
                p["id"],
                p["name"],
                _or_unknown(ref.get("client"), UNKNOWN_CLIENT),
                _status_text(p["status"]),
                p["start_date"],
                p["end_date"],
            )
    elif kind == "team_member":
        for col in ("Name", "Position", "Department", "Email"):
            table.add_column(col)
        for m in items:
            table.add_row(m["id"], m["name"], m["position"], m["department"], m["email"])
    elif kind == "intern":
        for col in ("Name", "University", "Department", "Status", "Start", "End"):
            table.add_column(col)
        for i in items:
            table.add_row(
                i["id"],
                i["name"],
                i["university"],
                i["department"],
                _status_text(i["status"]),
                i["start_date"],
                i["end_date"],
            )
    elif kind == "contract":
        for col in ("Title", "Client", "Project"):
            table.add_column(col)
        table.add_column("Value", justify="right")
        table.add_column("Milestones", justify="right")
        for c in items:
            ref = refs.get(c["id"], {})
            done = sum(1 for m in c["milestones"] if m["is_completed"])
            table.add_row(
                c["id"],
                c["title"],
                _or_unknown(ref.get("client"), UNKNOWN_CLIENT),
                _or_unknown(ref.get("project")),
                Text(format_money(c["total_value"]), style="ops.money"),
                f"{done}/{len(c['milestones'])}",
            )
    return table


def _milestone_table(milestones: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Title", style="ops.title")
    table.add_column("Due")
    table.add_column("Amount", justify="right", style="ops.money")
    table.add_column("Done")
    for i, m in enumerate(milestones):
        table.add_row(
            str(m.get("index", i)),
            m["title"],
            m["due_date"],
            format_money(m["amount"]),
            "yes" if m["is_completed"] else "",
        )
    return table


# ── Error renderer ────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    label = Text("ERROR", style="ops.error")
    op = Text(f"  {result.op}", style="ops.op")
    sep = Text(" — ")
    console.print(label, op, sep, msg)

    if err and err.detail.get("errors"):
        for line in err.detail["errors"]:
            console.print(f"  - {line}")
    if verbose and err and err.detail:
        console.print(Text("  detail:", style="dim"))
        for k, v in err.detail.items():
            if k != "errors":
                console.print(f"    {k}: {v}")


# ── Mutation renderers ────────────────────────────────────────────────


def _render_upsert(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    d = result.data
    entity = d.get("entity", {})
    _field(console, "kind", d["kind"])
    _field(console, "id", d["id"])
    _field(console, "outcome", d["outcome"])
    label = entity.get("title") or entity.get("name")
    if label:
        _field(console, "title" if "title" in entity else "name", label)
    if "total_value" in entity:
        _field(console, "total_value", format_money(entity["total_value"]))
    if verbose:
        _render_meta(console, result)


def _render_remove(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    d = result.data
    _field(console, "kind", d["kind"])
    _field(console, "id", d["id"])
    _field(console, "removed", d["removed"])
    if verbose:
        _render_meta(console, result)


def _render_draft(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    d = result.data
    _field(console, "kind", d["kind"])
    _field(console, "id", d["id"] or "(new)")
    if d.get("action"):
        _field(console, "action", d["action"])
    if d.get("missing"):
        _field(console, "missing", ", ".join(d["missing"]))
    if "total_value" in d:
        _field(console, "total_value", format_money(d["total_value"]))
        if d.get("milestones"):
            console.print(_milestone_table(d["milestones"]))
    if verbose:
        _render_meta(console, result)


# ── Read renderers ────────────────────────────────────────────────────


def _render_single(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render one record as a panel, references resolved."""
    d = result.data
    kind = d["kind"]
    refs = d.get("refs", {})
    skip = {"id", "kind", "refs", "progress", "milestones", "team_member_ids"}

    body = Text()
    for key, value in d.items():
        if key in skip or value in (None, [], ""):
            continue
        if key in ("client_id", "project_id"):
            ref_key = key.removesuffix("_id")
            fallback = UNKNOWN_CLIENT if ref_key == "client" else UNKNOWN
            body.append(f"{ref_key}: ", style="ops.key")
            body.append_text(_or_unknown(refs.get(ref_key), fallback))
            body.append(f" ({value})\n", style="dim")
            continue
        if key == "total_value":
            value = format_money(value)
        elif isinstance(value, list):
            value = ", ".join(str(v) for v in value)
        body.append(f"{key}: ", style="ops.key")
        body.append(f"{value}\n", style=style_for_status(str(value)) if key == "status" else "")

    if kind == "project":
        names = refs.get("team_members", [])
        team = ", ".join(n if n is not None else UNKNOWN for n in names) or "-"
        body.append("team: ", style="ops.key")
        body.append(f"{team}\n")
    if "progress" in d:
        p = d["progress"]
        body.append("progress: ", style="ops.key")
        body.append(f"{p['completed']}/{p['total']} milestones ({p['percent']}%)\n")

    label = d.get("title") or d.get("name") or d["id"]
    body.rstrip()
    console.print(Panel(body, title=f"{d['id']} — {label}", expand=False))
    if d.get("milestones"):
        console.print(_milestone_table(d["milestones"]))
    if verbose:
        _render_meta(console, result)


def _render_list(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    kind = d["kind"]
    items = d.get("items", [])
    if d.get("search_query"):
        console.print(Text(f"Search results for '{d['search_query']}'", style="dim"))
    if items:
        console.print(_entity_table(kind, items, d.get("refs", {})))
    else:
        console.print(Text(f"No {_KIND_TITLES.get(kind, kind).lower()} found", style="dim"))
    console.print(f"\n{d['count']} of {d['total']} {_KIND_TITLES.get(kind, kind).lower()}")
    if verbose:
        _render_meta(console, result)


def _render_search(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    query = d["query"]
    if not query.strip():
        console.print(Text("Search cleared", style="dim"))
        return
    if d.get("no_results"):
        console.print(Text(f"No results found for '{query}'", style="ops.warning"))
    else:
        for kind, items in d["results"].items():
            if not items:
                continue
            console.print(Text(f"{_KIND_TITLES[kind]} ({len(items)})", style="ops.title"))
            for item in items:
                label = item.get("name") or item.get("title")
                console.print(Text(f"  {item['id']}", style="ops.id"), label)
    view = d.get("view", {})
    if view:
        if view["previous"] != view["current"]:
            console.print(f"\nview: {view['previous']} → {view['current']}")
        else:
            console.print(f"\nview: {view['current']}")
    if verbose:
        _render_meta(console, result)


def _render_stats(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    table = Table(show_header=False, pad_edge=False, expand=False, box=None)
    table.add_column(style="ops.key")
    table.add_column(justify="right")
    table.add_row("Total clients", str(d["total_clients"]))
    table.add_row("Active projects", str(d["active_projects"]))
    table.add_row("Team members", str(d["team_members"]))
    table.add_row("Interns", str(d["interns"]))
    table.add_row("Contracts", str(d["contracts"]))
    table.add_row("Contracted value", format_money(d["total_contract_value"]))
    table.add_row("Completed milestones", format_money(d["completed_milestone_value"]))
    title = d.get("workspace") or "Dashboard"
    console.print(Panel(table, title=title, expand=False))

    by_status = "  ".join(f"{k}: {v}" for k, v in d["projects_by_status"].items())
    console.print(Text("Projects  ", style="ops.key"), by_status)
    by_status = "  ".join(f"{k}: {v}" for k, v in d["interns_by_status"].items())
    console.print(Text("Interns   ", style="ops.key"), by_status)
    if verbose:
        _render_meta(console, result)


def _render_overview(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _render_stats(result, console, verbose=False)
    d = result.data

    console.print(Text("\nRecent Projects", style="ops.title"))
    for p in d["recent_projects"]:
        client = p["client"] if p["client"] is not None else UNKNOWN_CLIENT
        console.print(
            f"  {p['name']}  ", Text(client, style="dim"), "  ", _status_text(p["status"])
        )

    console.print(Text("\nLatest Contracts", style="ops.title"))
    for c in d["latest_contracts"]:
        client = c["client"] if c["client"] is not None else UNKNOWN_CLIENT
        progress = c["progress"]
        console.print(
            f"  {c['title']}  ",
            Text(client, style="dim"),
            "  ",
            Text(format_money(c["total_value"]), style="ops.money"),
            f"  {progress['completed']}/{progress['total']} milestones",
        )

    console.print(Text("\nUpcoming Deadlines", style="ops.title"))
    for p in d["upcoming_deadlines"]:
        console.print(f"  {p['end_date']}  {p['name']}")
    if verbose:
        _render_meta(console, result)


def _render_calendar(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    events = d["events"]
    heading = f"Events on {d['date']}" if d.get("date") else "All events"
    console.print(Text(heading, style="ops.title"))
    if not events:
        console.print(Text("No events scheduled", style="dim"))
    else:
        table = Table(show_header=True, pad_edge=False, expand=False)
        table.add_column("Date", no_wrap=True)
        table.add_column("Type")
        table.add_column("Title", style="ops.title")
        table.add_column("Description", style="dim")
        for e in events:
            table.add_row(e["date"], e["type"], e["title"], e["description"])
        console.print(table)
    if verbose:
        _render_meta(console, result)


def _render_navigate(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    _status_line(console, result)
    d = result.data
    _field(console, "view", f"{d['previous']} → {d['current']}")
    if verbose:
        _render_meta(console, result)


def _render_view(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    d = result.data
    _field(console, "view", d["current"])
    for t in d.get("history", []):
        console.print(Text(f"    {t['previous']} → {t['current']} ({t['reason']})", style="dim"))


def _render_run(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a scripted session: one row per step, then the final state."""
    d = result.data
    table = Table(show_header=True, pad_edge=False, expand=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Op", style="ops.op")
    table.add_column("Result")
    table.add_column("Summary")
    for step in d["steps"]:
        status = Text("ok", style="ops.ok") if step["ok"] else Text("error", style="ops.error")
        table.add_row(str(step["index"]), step["op"], status, step["summary"])
    console.print(table)

    console.print()
    _field(console, "view", d["view"])
    if d.get("search_query"):
        _field(console, "search", d["search_query"])
    _field(console, "clock_ms", d["clock_ms"])
    for note in d.get("notifications", []):
        console.print(Text("  ✓ ", style="ops.ok"), Text(note["title"], style="ops.title"))
        console.print(f"    {note['description']}")
    if verbose:
        _render_meta(console, result)


# ── Generic fallback ──────────────────────────────────────────────────


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        _field(console, key, value)
    if verbose:
        _render_meta(console, result)


# ── Dispatch table ────────────────────────────────────────────────────

_Renderer = Callable[..., None]

_OP_RENDERERS: dict[str, _Renderer] = {
    # Mutations
    "upsert": _render_upsert,
    "remove": _render_remove,
    "draft": _render_draft,
    "milestone": _render_draft,
    # Reads
    "get": _render_single,
    "list": _render_list,
    "search": _render_search,
    "stats": _render_stats,
    "overview": _render_overview,
    "calendar": _render_calendar,
    # View
    "navigate": _render_navigate,
    "view": _render_view,
    # Scripted session
    "run": _render_run,
}
