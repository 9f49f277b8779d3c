"""CLI entry point for c3mro.

Invoked as::

    c3mro [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m c3mro.cli.main

Commands
--------
linearize   Print the method resolution order of one class
show        Print the method resolution order of every class
validate    Check a hierarchy file for structural and ordering problems
resolve     Show which class provides an operation
chain       Show the cooperative call sequence of an operation
fmt         Rewrite a hierarchy file in canonical form
version     Show version information
"""
from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

if TYPE_CHECKING:
    from c3mro.hierarchy.nodes import Hierarchy
    from c3mro.linearizer.linearizer import Linearizer

console = Console()
err_console = Console(stderr=True)

_UNSET = object()


def _load_or_exit(path: str, root: str | None, no_root: bool) -> "Hierarchy":
    """Load a hierarchy file, exiting on error."""
    from c3mro.hierarchy import HierarchyLoadError, load_file

    override: object = _UNSET
    if no_root:
        override = None
    elif root is not None:
        override = root

    try:
        if override is _UNSET:
            return load_file(path)
        return load_file(path, root=override)  # type: ignore[arg-type]
    except HierarchyLoadError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        sys.exit(1)


def _linearizer_or_exit(hierarchy: "Hierarchy", path: str) -> "Linearizer":
    """Create a linearizer, printing structural errors and exiting on failure."""
    from c3mro.hierarchy import InvalidHierarchyError
    from c3mro.linearizer import Linearizer

    try:
        return Linearizer(hierarchy)
    except InvalidHierarchyError as exc:
        err_console.print(f"[red]Invalid hierarchy[/red] in {escape(path)}:")
        for diagnostic in exc.diagnostics:
            err_console.print(f"  {escape(str(diagnostic))}")
        sys.exit(1)


def _join(names: tuple[str, ...] | list[str]) -> str:
    return escape(", ".join(names))


def _severity_color(severity_name: str) -> str:
    """Map a DiagnosticSeverity name to a Rich color string."""
    colors = {
        "ERROR": "red",
        "WARNING": "yellow",
        "INFORMATION": "blue",
        "HINT": "dim",
    }
    return colors.get(severity_name, "white")


root_option = click.option(
    "--root", default=None, help="Universal root class (overrides the file's 'root')"
)
no_root_option = click.option(
    "--no-root", is_flag=True, default=False, help="Ignore the file's 'root'"
)


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="c3mro")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """C3 linearization toolkit: method resolution orders, validation, dispatch."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=err_console, show_path=False)],
        )


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from c3mro import __version__

    table = Table(show_header=False, box=None)
    table.add_row("[bold]c3mro[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("Platform", sys.platform)
    console.print(table)


# ---------------------------------------------------------------------------
# linearize command
# ---------------------------------------------------------------------------


@cli.command(name="linearize")
@click.argument("file", type=click.Path(exists=False))
@click.argument("class_name", metavar="CLASS")
@root_option
@no_root_option
@click.option("--trace", is_flag=True, default=False, help="Show every merge step")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    help="Output format",
)
def linearize_command(
    file: str,
    class_name: str,
    root: str | None,
    no_root: bool,
    trace: bool,
    output_format: str,
) -> None:
    """Print the method resolution order of CLASS.

    FILE is the path to a YAML or JSON hierarchy description.
    """
    from c3mro.hierarchy import UnknownClassError
    from c3mro.linearizer import InconsistentHierarchyError

    hierarchy = _load_or_exit(file, root, no_root)
    linearizer = _linearizer_or_exit(hierarchy, file)

    try:
        if trace:
            merge_trace = linearizer.explain(class_name)
            order = merge_trace.result
        else:
            merge_trace = None
            order = linearizer.linearize(class_name)
    except UnknownClassError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        sys.exit(1)
    except InconsistentHierarchyError as exc:
        err_console.print(f"[red]Inconsistent hierarchy:[/red] {escape(str(exc))}")
        sys.exit(1)

    if output_format == "json":
        payload: dict[str, object] = {"class": class_name, "mro": list(order)}
        if merge_trace is not None:
            payload["steps"] = [
                {"heads": list(s.heads), "selected": s.selected, "blocked": list(s.blocked)}
                for s in merge_trace.steps
            ]
        click.echo(json.dumps(payload, indent=2))
        return

    if merge_trace is not None:
        console.print(f"[bold]Merge inputs for {escape(class_name)}:[/bold]")
        for seq in merge_trace.inputs:
            console.print(f"  {_join(seq)}")
        table = Table(title=f"C3 merge: {escape(class_name)}", show_lines=False)
        table.add_column("Step", justify="right")
        table.add_column("Heads")
        table.add_column("Selected", style="green")
        table.add_column("Blocked", style="yellow")
        for index, step in enumerate(merge_trace.steps, start=1):
            table.add_row(
                str(index), _join(step.heads), escape(step.selected), _join(step.blocked)
            )
        console.print(table)

    console.print(_join(tuple(order)))


# ---------------------------------------------------------------------------
# show command
# ---------------------------------------------------------------------------


@cli.command(name="show")
@click.argument("file", type=click.Path(exists=False))
@root_option
@no_root_option
def show_command(file: str, root: str | None, no_root: bool) -> None:
    """Print the method resolution order of every class in FILE."""
    from c3mro.linearizer import InconsistentHierarchyError

    hierarchy = _load_or_exit(file, root, no_root)
    linearizer = _linearizer_or_exit(hierarchy, file)

    table = Table(title=f"Resolution orders: {escape(file)}", show_lines=True)
    table.add_column("Class", style="bold")
    table.add_column("MRO")

    failures = 0
    for name in hierarchy.names:
        try:
            table.add_row(escape(name), _join(tuple(linearizer.linearize(name))))
        except InconsistentHierarchyError as exc:
            failures += 1
            table.add_row(escape(name), f"[red]inconsistent[/red]: {escape(exc.describe_conflicts())}")

    console.print(table)
    if failures:
        sys.exit(1)


# ---------------------------------------------------------------------------
# validate command
# ---------------------------------------------------------------------------


@cli.command(name="validate")
@click.argument("file", type=click.Path(exists=False))
@root_option
@no_root_option
@click.option("--strict", is_flag=True, default=False, help="Treat warnings as errors")
def validate_command(file: str, root: str | None, no_root: bool, strict: bool) -> None:
    """Check a hierarchy file for structural and ordering problems.

    FILE is the path to a YAML or JSON hierarchy description.
    """
    from c3mro.validator import Validator

    hierarchy = _load_or_exit(file, root, no_root)
    diagnostics = Validator(strict=strict).validate(hierarchy)

    if not diagnostics:
        console.print(f"[green]OK[/green] {escape(file)}: no issues found")
        sys.exit(0)

    errors = [d for d in diagnostics if d.is_error]
    warnings = [d for d in diagnostics if not d.is_error]

    table = Table(title=f"Validation: {escape(file)}", show_lines=True)
    table.add_column("Severity", style="bold", min_width=10)
    table.add_column("Code", min_width=8)
    table.add_column("Class", min_width=8)
    table.add_column("Message")

    for d in diagnostics:
        color = _severity_color(d.severity.name)
        table.add_row(
            f"[{color}]{d.severity.name}[/{color}]",
            d.code,
            escape(d.subject or "-"),
            escape(d.message) + (f"\n[dim]hint: {escape(d.suggestion)}[/dim]" if d.suggestion else ""),
        )

    console.print(table)
    console.print(
        f"\n[bold]Summary:[/bold] {len(errors)} error(s), {len(warnings)} warning(s)"
    )

    if errors:
        sys.exit(1)


# ---------------------------------------------------------------------------
# resolve command
# ---------------------------------------------------------------------------


@cli.command(name="resolve")
@click.argument("file", type=click.Path(exists=False))
@click.argument("class_name", metavar="CLASS")
@click.argument("operation")
@root_option
@no_root_option
def resolve_command(
    file: str, class_name: str, operation: str, root: str | None, no_root: bool
) -> None:
    """Show which class provides OPERATION for instances of CLASS."""
    from c3mro.dispatch import DispatchTable
    from c3mro.hierarchy import UnknownClassError
    from c3mro.linearizer import InconsistentHierarchyError

    hierarchy = _load_or_exit(file, root, no_root)
    linearizer = _linearizer_or_exit(hierarchy, file)
    table = DispatchTable.from_hierarchy(hierarchy, lambda owner, op: None, linearizer)

    try:
        providers = table.providers(class_name, operation)
    except UnknownClassError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        sys.exit(1)
    except InconsistentHierarchyError as exc:
        err_console.print(f"[red]Inconsistent hierarchy:[/red] {escape(str(exc))}")
        sys.exit(1)

    if not providers:
        err_console.print(
            f"[red]Error:[/red] no class in the resolution order of "
            f"'{escape(class_name)}' defines '{escape(operation)}'"
        )
        sys.exit(1)

    console.print(
        f"{escape(class_name)}.{escape(operation)} resolves to [bold]{escape(providers[0])}[/bold]"
    )
    console.print(f"[dim]providers in order:[/dim] {_join(providers)}")


# ---------------------------------------------------------------------------
# chain command
# ---------------------------------------------------------------------------


@cli.command(name="chain")
@click.argument("file", type=click.Path(exists=False))
@click.argument("class_name", metavar="CLASS")
@click.argument("operation")
@root_option
@no_root_option
def chain_command(
    file: str, class_name: str, operation: str, root: str | None, no_root: bool
) -> None:
    """Show the classes reached when OPERATION is invoked on CLASS.

    Classes whose operation is declared 'chain' hand over to the next
    class in the resolution order; 'stop' ends the chain.
    """
    from c3mro.dispatch import OperationNotFoundError, simulate
    from c3mro.hierarchy import UnknownClassError
    from c3mro.linearizer import InconsistentHierarchyError

    hierarchy = _load_or_exit(file, root, no_root)
    linearizer = _linearizer_or_exit(hierarchy, file)

    try:
        calls = simulate(hierarchy, class_name, operation, linearizer)
        order = linearizer.linearize(class_name)
    except (UnknownClassError, OperationNotFoundError) as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        sys.exit(1)
    except InconsistentHierarchyError as exc:
        err_console.print(f"[red]Inconsistent hierarchy:[/red] {escape(str(exc))}")
        sys.exit(1)

    console.print(f"[bold]Calls:[/bold] {_join(calls)}")
    skipped = [
        name
        for name in order
        if name not in calls and hierarchy.get(name) is not None
        and hierarchy[name].defines(operation)
    ]
    if skipped:
        console.print(f"[yellow]Not reached:[/yellow] {_join(skipped)}")


# ---------------------------------------------------------------------------
# fmt command
# ---------------------------------------------------------------------------


@cli.command(name="fmt")
@click.argument("file", type=click.Path(exists=False))
@click.option("--check", is_flag=True, default=False, help="Check if file is already formatted")
@click.option("--in-place", is_flag=True, default=False, help="Rewrite the file in place")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["yaml", "json"], case_sensitive=False),
    default="yaml",
    help="Output format",
)
def fmt_command(file: str, check: bool, in_place: bool, output_format: str) -> None:
    """Rewrite a hierarchy file in canonical form.

    Without --check or --in-place, prints the formatted output to stdout.
    """
    from c3mro.hierarchy import HierarchySerializer

    hierarchy = _load_or_exit(file, None, False)
    serializer = HierarchySerializer()
    if output_format == "json":
        formatted = serializer.to_json(hierarchy)
    else:
        formatted = serializer.to_yaml(hierarchy)

    if check:
        if formatted == Path(file).read_text(encoding="utf-8"):
            console.print(f"[green]OK[/green] {escape(file)}: already formatted")
            sys.exit(0)
        console.print(f"[yellow]NEEDS FORMATTING[/yellow] {escape(file)}")
        sys.exit(1)
    elif in_place:
        Path(file).write_text(formatted, encoding="utf-8")
        console.print(f"[green]Formatted[/green] {escape(file)}")
    else:
        syntax = Syntax(formatted, output_format, line_numbers=True)
        console.print(syntax)


if __name__ == "__main__":
    cli()
