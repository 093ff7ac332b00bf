#!/usr/bin/env python3
"""
mocked CLI: synthesize mock types from interface declarations.

Usage:
    mocked generate [OPTIONS] DECLARATIONS
    mocked inspect [--json] DECLARATIONS
    mocked tiers
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any

import typer
from tabulate import tabulate

from ..core.models import SynthesizedType
from ..domain.errors import DeclarationLoadError
from ..domain.expansion import ExpansionResult, MockExpander
from ..domain.visibility import VisibilityTier, member_visibility
from ..infra.io.config import ConfigError, MockedConfig
from ..infra.io.declaration_loader import load_declarations
from ..infra.io.diagnostics import ConsoleDiagnosticSink, DiagnosticLog
from ..infra.io.log_output.console import Colors, log, log_verbose, set_verbose
from ..infra.io.log_output.debug_log import configure_debug_logging
from ..infra.render.swift import SwiftRenderer
from ..infra.tools.env import load_user_env

# Bootstrap state: tracks whether bootstrap() has been called
_bootstrapped = False


def bootstrap() -> None:
    """Initialize environment.

    Loads ~/.config/mocked/.env so MOCKED_* variables are visible to
    MockedConfig.from_env(). Idempotent.
    """
    global _bootstrapped

    if _bootstrapped:
        return

    load_user_env()
    _bootstrapped = True


app = typer.Typer(
    name="mocked",
    help="Synthesize override-driven mocks from interface declarations",
    add_completion=False,
)


def _load_config() -> MockedConfig:
    try:
        return MockedConfig.from_env()
    except ConfigError as e:
        log("✗", str(e), Colors.RED)
        raise typer.Exit(2) from e


def _expand_file(
    declarations: Path, config: MockedConfig, collector: DiagnosticLog
) -> list[ExpansionResult]:
    """Load a declaration file and expand every annotated interface.

    Raises:
        typer.Exit: If the file cannot be loaded.
    """
    try:
        nodes = load_declarations(declarations)
    except DeclarationLoadError as e:
        log("✗", str(e), Colors.RED)
        raise typer.Exit(2) from e

    log_verbose("◦", f"Loaded {len(nodes)} declaration(s) from {declarations}")
    expander = MockExpander(
        reporter=ConsoleDiagnosticSink(collector=collector),
        options=config.synthesis_options(),
        directive_name=config.directive_name,
    )
    results = expander.expand_source(nodes)
    if not results:
        log("○", f"No @{config.directive_name} declarations found", Colors.GRAY)
    return results


@app.command()
def generate(
    declarations: Annotated[
        Path,
        typer.Argument(help="YAML or JSON file with parsed declarations"),
    ],
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write generated Swift here instead of stdout",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show progress details"),
    ] = False,
    debug_log: Annotated[
        Path | None,
        typer.Option(
            "--debug-log",
            help="Write DEBUG traces of the synthesis passes to this file",
        ),
    ] = None,
) -> None:
    """Render a mock for every @Mocked interface in DECLARATIONS.

    Exits with status 1 when any declaration produced a diagnostic; mocks
    for the other declarations are still written.
    """
    set_verbose(verbose)
    if debug_log is not None and configure_debug_logging(debug_log) is None:
        log("⚠", f"Debug log disabled or not writable: {debug_log}", Colors.YELLOW)

    config = _load_config()
    collector = DiagnosticLog()
    results = _expand_file(declarations, config, collector)

    renderer = SwiftRenderer()
    mocks = [mock for result in results for mock in result.artifacts]
    source = "\n".join(renderer.render(mock) for mock in mocks)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(source, encoding="utf-8")
        log("✓", f"Wrote {len(mocks)} mock(s) to {output}", Colors.GREEN)
    elif source:
        typer.echo(source, nl=False)

    for mock in mocks:
        log_verbose("◦", f"{mock.name}: {len(mock.override_slots)} override slot(s)")

    if collector.has_errors():
        log("✗", f"{len(collector)} diagnostic(s) reported", Colors.RED)
        raise typer.Exit(1)


def _summary(mock: SynthesizedType) -> dict[str, Any]:
    return {
        "name": mock.name,
        "interface": mock.interface_name,
        "kind": "class" if mock.is_reference else "struct",
        "visibility": mock.visibility.value,
        "generics": [g.declaration for g in mock.generic_parameters],
        "fields": [
            {"name": f.name, "type": f.type, "mutable": f.mutable}
            for f in mock.fields
        ],
        "slots": [
            {
                "slot_id": i.slot.slot_id,
                "method": i.method.display_signature,
                "signature": i.slot.signature,
            }
            for i in mock.methods
        ],
    }


def _slot_table(mock: SynthesizedType) -> str:
    summary = _summary(mock)
    title = f"{summary['name']} ({summary['kind']}, {summary['visibility']})"
    if summary["generics"]:
        title += f" <{', '.join(summary['generics'])}>"

    rows = [
        ["var" if f["mutable"] else "let", f["name"], f["type"]]
        for f in summary["fields"]
    ]
    rows.extend(["slot", s["slot_id"], s["signature"]] for s in summary["slots"])
    if not rows:
        return title
    return f"{title}\n{tabulate(rows, headers=['member', 'name', 'type'], tablefmt='simple')}"


@app.command()
def inspect(
    declarations: Annotated[
        Path,
        typer.Argument(help="YAML or JSON file with parsed declarations"),
    ],
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Show the fields and override slots each @Mocked interface would get."""
    config = _load_config()
    collector = DiagnosticLog()
    results = _expand_file(declarations, config, collector)
    mocks = [mock for result in results for mock in result.artifacts]

    if json_output:
        typer.echo(json.dumps([_summary(mock) for mock in mocks], indent=2))
    else:
        typer.echo("\n\n".join(_slot_table(mock) for mock in mocks))

    if collector.has_errors():
        raise typer.Exit(1)


@app.command()
def tiers() -> None:
    """List the visibility tokens accepted by the directive."""
    rows = [
        [tier.value, f".{tier.value}", member_visibility(tier).value]
        for tier in VisibilityTier
    ]
    typer.echo(tabulate(rows, headers=["token", "member form", "members"], tablefmt="simple"))
