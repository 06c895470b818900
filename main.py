#!/usr/bin/env python3
"""Contract Repro CLI - verify that contract builds are bit-for-bit reproducible.

Usage:
    # Clone soroban-examples, build and optimize every catalogued contract
    python main.py build

    # Build from a local checkout, pinned to one toolchain
    python main.py build --project ../soroban-examples --toolchain 1.77.0

    # Reproduce previously built artifacts in dependency order
    python main.py repro --wasm ./repro-test/wasm-output --project ../soroban-examples
"""

import sys
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from catalog import load_contract_list, load_dependency_table
from config import settings
from errors import ReproError, StageFailedError
from models import RunSummary
from orchestrator import ReproManager
from pipeline import get_toolchain_selector
from runners import SubprocessRunner


console = Console()


def _banner() -> None:
    console.print(Panel.fit(
        "[bold blue]Contract Repro[/bold blue]\n"
        "[dim]Reproducible build verification[/dim]",
        border_style="blue"
    ))


def _make_manager(
    ctx: click.Context,
    toolchain: Optional[str] = None,
    pairs: Optional[str] = None,
) -> ReproManager:
    runner = SubprocessRunner(
        timeout_seconds=settings.process_timeout_seconds,
        console=console,
    )
    return ReproManager(
        base_dir=ctx.obj["work_dir"],
        runner=runner,
        toolchain=get_toolchain_selector(version=toolchain),
        dependency_table=load_dependency_table(Path(pairs) if pairs else None),
        fail_fast=ctx.obj["fail_fast"],
        console=console,
    )


def _report_error(error: ReproError) -> None:
    """Print a fatal error with whatever context it carries."""
    console.print(f"\n[red]Error:[/red] {escape(str(error))}")
    if isinstance(error, StageFailedError):
        console.print(f"  [dim]Stage:[/dim] {error.stage}")
        if error.contract:
            console.print(f"  [dim]Contract:[/dim] {escape(error.contract)}")
        if error.exit_status is not None:
            console.print(f"  [dim]Exit status:[/dim] {error.exit_status}")


def _report_summary(summary: RunSummary) -> None:
    table = Table(title=f"{summary.mode.value} summary")
    table.add_column("Stage")
    table.add_column("Target")
    table.add_column("Status")
    table.add_column("Exit", justify="right")

    for outcome in summary.outcomes:
        status = "[green]✓ ok[/green]" if outcome.ok else "[red]✗ failed[/red]"
        exit_status = "" if outcome.exit_status is None else str(outcome.exit_status)
        table.add_row(outcome.stage.value, escape(outcome.target), status, exit_status)

    console.print()
    console.print(table)
    if summary.succeeded:
        console.print("[green]All stages succeeded[/green]")
    else:
        console.print(f"[red]{len(summary.failures)} stage(s) failed[/red]")


@click.group()
@click.option(
    "--work-dir", "-w",
    type=click.Path(file_okay=False),
    default=None,
    help=f"Base directory for ./{settings.work_dir_name} (default: current directory)"
)
@click.option(
    "--keep-going", "-k",
    is_flag=True,
    help="Record failures and continue with the next contract or artifact"
)
@click.pass_context
def main(ctx: click.Context, work_dir: Optional[str], keep_going: bool):
    """Contract Repro: build smart-contract packages and verify they reproduce."""
    ctx.ensure_object(dict)
    ctx.obj["work_dir"] = Path(work_dir) if work_dir else None
    ctx.obj["fail_fast"] = False if keep_going else settings.fail_fast


@main.command()
@click.option(
    "--project", "-p",
    type=click.Path(file_okay=False),
    default=None,
    help="Local source tree (default: clone soroban-examples)"
)
@click.option(
    "--toolchain", "-t",
    default=None,
    help="Pin every build to this toolchain version (default: random pick)"
)
@click.option(
    "--contract", "-c", "contracts",
    multiple=True,
    help="Only build these catalog entries (repeatable)"
)
@click.option(
    "--list", "list_only",
    is_flag=True,
    help="List the catalogued contracts and exit"
)
@click.pass_context
def build(
    ctx: click.Context,
    project: Optional[str],
    toolchain: Optional[str],
    contracts: Tuple[str, ...],
    list_only: bool,
):
    """Build and optimize every catalogued contract package."""
    try:
        if list_only:
            for name in load_contract_list():
                click.echo(name)
            return

        _banner()
        manager = _make_manager(ctx, toolchain=toolchain)
        summary = manager.run_build(
            project=Path(project) if project else None,
            contracts=list(contracts) or None,
        )
    except ReproError as e:
        _report_error(e)
        sys.exit(1)

    _report_summary(summary)
    if not summary.succeeded:
        sys.exit(1)


@main.command()
@click.option(
    "--wasm", "wasm_dir",
    required=True,
    type=click.Path(),
    help="Directory holding the artifacts to reproduce"
)
@click.option(
    "--project", "-p",
    type=click.Path(file_okay=False),
    default=None,
    help="Local source tree (default: clone soroban-examples)"
)
@click.option(
    "--pairs",
    type=click.Path(dir_okay=False),
    default=None,
    help="Extra dependency pairs TOML merged with the built-in table"
)
@click.option(
    "--dry-order",
    is_flag=True,
    help="Print the reproduction order and exit"
)
@click.pass_context
def repro(
    ctx: click.Context,
    wasm_dir: str,
    project: Optional[str],
    pairs: Optional[str],
    dry_order: bool,
):
    """Reproduce built artifacts against the source, dependencies first."""
    try:
        manager = _make_manager(ctx, pairs=pairs)
        if dry_order:
            for path in manager.resolve_order(Path(wasm_dir)):
                click.echo(str(path))
            return

        _banner()
        summary = manager.run_repro(
            Path(wasm_dir),
            project=Path(project) if project else None,
        )
    except ReproError as e:
        _report_error(e)
        sys.exit(1)

    _report_summary(summary)
    if not summary.succeeded:
        sys.exit(1)


if __name__ == "__main__":
    main()
