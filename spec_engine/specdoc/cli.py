"""Command-line interface: ``specdoc change|spec list|show|validate`` and ``specdoc validate``."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, NoReturn, Optional

import typer

from specdoc.engine import show_change, show_spec, validate_change, validate_spec
from specdoc.exceptions import WorkspaceError
from specdoc.parser import DocumentKind
from specdoc.report import ValidationReport, to_json, to_text
from specdoc.workspace import Workspace

logger = logging.getLogger(__name__)

app = typer.Typer(help="Inspect and validate OpenSpec specs and changes.")
change_app = typer.Typer(help="Work with change proposals.")
spec_app = typer.Typer(help="Work with specs.")
app.add_typer(change_app, name="change")
app.add_typer(spec_app, name="spec")

_state: dict[str, Any] = {"root": Path(".")}


@app.callback()
def main(
    root: Path = typer.Option(
        Path("."),
        "--root",
        envvar="SPECDOC_ROOT",
        help="Project root containing the openspec/ directory.",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    log_level = logging.DEBUG if verbose or os.environ.get("SPECDOC_DEV_MODE") else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    _state["root"] = root


def _workspace() -> Workspace:
    return Workspace(_state["root"])


def _fail(message: str) -> NoReturn:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(code=1)


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2))


def _require_id(item_id: Optional[str], kind: str, available: list[str]) -> str:
    if item_id:
        return item_id
    listing = ", ".join(available) if available else "none"
    _fail(f"No {kind} specified. Available IDs: {listing}")


def _emit_report(
    report: ValidationReport,
    subject_id: str,
    kind: DocumentKind,
    as_json: bool,
    tool: str,
) -> None:
    if as_json:
        _echo_json(to_json(report))
    else:
        typer.echo(to_text(report, subject_id, kind, tool), err=not report.valid)
    if not report.valid:
        raise typer.Exit(code=1)


def _validate_change_id(ws: Workspace, change_id: str, strict: Optional[bool]) -> ValidationReport:
    logger.debug("Validating change %s", change_id)
    options = ws.settings.validation_options(strict)
    return validate_change(ws.read_change(change_id), options, ws.change_spec_deltas(change_id))


def _validate_spec_id(ws: Workspace, spec_id: str, strict: Optional[bool]) -> ValidationReport:
    logger.debug("Validating spec %s", spec_id)
    options = ws.settings.validation_options(strict)
    return validate_spec(ws.read_spec(spec_id), options)


# -- change ------------------------------------------------------------------


@change_app.command("list")
def change_list(as_json: bool = typer.Option(False, "--json")) -> None:
    """List active changes."""
    try:
        ids = _workspace().list_changes()
    except WorkspaceError as e:
        _fail(str(e))
    if as_json:
        _echo_json(ids)
    elif not ids:
        typer.echo("No active changes found.")
    else:
        for change_id in ids:
            typer.echo(change_id)


@change_app.command("show")
def change_show(
    change_id: Optional[str] = typer.Argument(None),
    as_json: bool = typer.Option(False, "--json"),
    deltas_only: bool = typer.Option(False, "--deltas-only"),
    requirements_only: bool = typer.Option(
        False, "--requirements-only", hidden=True, help="Deprecated alias of --deltas-only."
    ),
) -> None:
    """Show a change and its deltas."""
    ws = _workspace()
    try:
        change_id = _require_id(change_id, "change", ws.list_changes())
        text = ws.read_change(change_id)
        spec_deltas = ws.change_spec_deltas(change_id)
    except WorkspaceError as e:
        _fail(str(e))
    if requirements_only:
        typer.echo("Warning: --requirements-only is deprecated; use --deltas-only", err=True)
    if as_json:
        _echo_json(show_change(change_id, text, spec_deltas, deltas_only or requirements_only))
        return
    typer.echo(text)


@change_app.command("validate")
def change_validate(
    change_id: Optional[str] = typer.Argument(None),
    strict: Optional[bool] = typer.Option(None, "--strict/--no-strict"),
    as_json: bool = typer.Option(False, "--json"),
) -> None:
    """Validate a change proposal."""
    ws = _workspace()
    try:
        change_id = _require_id(change_id, "change", ws.list_changes())
        report = _validate_change_id(ws, change_id, strict)
    except WorkspaceError as e:
        _fail(str(e))
    _emit_report(report, change_id, DocumentKind.change_proposal, as_json, ws.settings.tool_name)


# -- spec --------------------------------------------------------------------


@spec_app.command("list")
def spec_list(as_json: bool = typer.Option(False, "--json")) -> None:
    """List specs."""
    try:
        ids = _workspace().list_specs()
    except WorkspaceError as e:
        _fail(str(e))
    if as_json:
        _echo_json(ids)
    elif not ids:
        typer.echo("No specs found.")
    else:
        for spec_id in ids:
            typer.echo(spec_id)


@spec_app.command("show")
def spec_show(
    spec_id: Optional[str] = typer.Argument(None),
    as_json: bool = typer.Option(False, "--json"),
) -> None:
    """Show a spec and its requirements."""
    ws = _workspace()
    try:
        spec_id = _require_id(spec_id, "spec", ws.list_specs())
        text = ws.read_spec(spec_id)
    except WorkspaceError as e:
        _fail(str(e))
    if as_json:
        _echo_json(show_spec(spec_id, text))
        return
    typer.echo(text)


@spec_app.command("validate")
def spec_validate(
    spec_id: Optional[str] = typer.Argument(None),
    strict: Optional[bool] = typer.Option(None, "--strict/--no-strict"),
    as_json: bool = typer.Option(False, "--json"),
) -> None:
    """Validate a spec."""
    if not spec_id:
        _fail("Missing required argument <spec-id>")
    ws = _workspace()
    try:
        report = _validate_spec_id(ws, spec_id, strict)
    except WorkspaceError as e:
        _fail(str(e))
    _emit_report(report, spec_id, DocumentKind.spec, as_json, ws.settings.tool_name)


# -- bulk --------------------------------------------------------------------


@app.command("validate")
def validate_all(
    item_id: Optional[str] = typer.Argument(None, help="Change or spec id; omit to validate everything."),
    strict: Optional[bool] = typer.Option(None, "--strict/--no-strict"),
    as_json: bool = typer.Option(False, "--json"),
) -> None:
    """Validate one item, or every change and spec in the workspace."""
    ws = _workspace()
    try:
        changes = ws.list_changes()
        specs = ws.list_specs()
    except WorkspaceError as e:
        _fail(str(e))

    if item_id is not None:
        if item_id in changes:
            report = _validate_change_id(ws, item_id, strict)
            _emit_report(report, item_id, DocumentKind.change_proposal, as_json, ws.settings.tool_name)
        elif item_id in specs:
            report = _validate_spec_id(ws, item_id, strict)
            _emit_report(report, item_id, DocumentKind.spec, as_json, ws.settings.tool_name)
        else:
            _fail(f"Unknown item '{item_id}'. Available IDs: {', '.join(changes + specs) or 'none'}")
        return

    results: list[tuple[str, DocumentKind, ValidationReport]] = []
    for change_id in changes:
        results.append((change_id, DocumentKind.change_proposal, _validate_change_id(ws, change_id, strict)))
    for spec_id in specs:
        results.append((spec_id, DocumentKind.spec, _validate_spec_id(ws, spec_id, strict)))

    failed = sum(1 for _, _, r in results if not r.valid)
    if as_json:
        _echo_json(
            {
                "items": [
                    {"id": item, "type": kind.value, **to_json(report)}
                    for item, kind, report in results
                ],
                "summary": {"total": len(results), "passed": len(results) - failed, "failed": failed},
            }
        )
    else:
        for item, kind, report in results:
            typer.echo(to_text(report, item, kind, ws.settings.tool_name), err=not report.valid)
        typer.echo(f"Totals: {len(results) - failed} passed, {failed} failed ({len(results)} items)")
    if failed:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
