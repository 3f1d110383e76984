"""Command-line interface for dashvars."""

import json
from pathlib import Path
from typing import NoReturn

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from structlog.contextvars import bound_contextvars

from . import __version__
from .config import DashvarsConfig, OutputFormat, load_config
from .core.loader import VariableLoader
from .dependency import (
    VariableGraph,
    build_variable_dependencies,
    build_variable_order,
    extract_references,
)
from .models.variables import VariableDeclaration
from .observability import ReportGenerator, configure_logging
from .utils.exceptions import DashvarsError

app = typer.Typer(
    name="dashvars",
    help="dashvars - Dashboard variable dependency resolution and build order",
    add_completion=False,
)

console = Console()

CONFIG_OPTION = typer.Option(None, "--config", "-c", help="Configuration file")
LOG_LEVEL_OPTION = typer.Option(
    None,
    "--log-level",
    help="Log verbosity: DEBUG, INFO, WARNING, ERROR",
)
JSON_LOGS_OPTION = typer.Option(False, "--json-logs", help="Emit logs as JSON on stderr")
FORMAT_OPTION = typer.Option(None, "--format", "-f", help="Output format: table or json")


def _setup(config_file: Path | None, log_level: str | None, json_logs: bool) -> DashvarsConfig:
    """Load configuration and configure logging for a command."""
    try:
        config = load_config(config_file)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]ERROR: Invalid configuration:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e

    configure_logging(
        level=log_level or config.logging.level,
        json_logs=json_logs or config.logging.format == "json",
        log_file=config.logging.file,
    )
    return config


def _load_variables(
    file: Path, strict: bool = True
) -> tuple[VariableLoader, list[VariableDeclaration]]:
    loader = VariableLoader(file)
    try:
        variables = loader.load(strict=strict)
    except DashvarsError as e:
        console.print(f"[red]ERROR: Could not load variables:[/red] {escape(str(e))}")
        raise typer.Exit(code=1) from e
    return loader, variables


def _fail(error: DashvarsError) -> NoReturn:
    console.print(f"[bold red]ERROR:[/bold red] {escape(str(error))}")
    raise typer.Exit(code=1) from error


@app.command()
def order(
    file: Path = typer.Argument(..., help="Dashboard or variable file", exists=True),
    output_format: OutputFormat | None = FORMAT_OPTION,
    report: Path | None = typer.Option(None, "--report", help="Write a JSON report to this path"),
    config_file: Path | None = CONFIG_OPTION,
    log_level: str | None = LOG_LEVEL_OPTION,
    json_logs: bool = JSON_LOGS_OPTION,
) -> None:
    """
    Print the stages in which variables can be evaluated.

    Variables in the same stage are independent and can run concurrently.

    Examples:
        dashvars order dashboard.yaml
        dashvars order dashboard.yaml --format json
        dashvars order dashboard.yaml --report out/order.json
    """
    config = _setup(config_file, log_level, json_logs)
    fmt = output_format or config.output.format

    with bound_contextvars(source=str(file)):
        _, variables = _load_variables(file)
        try:
            dependencies = build_variable_dependencies(variables)
            variable_graph = VariableGraph([variable.name for variable in variables], dependencies)
            groups = variable_graph.build_order()
        except DashvarsError as e:
            _fail(e)

        if report:
            generator = ReportGenerator()
            generator.write_json_report(
                generator.generate_report(str(file), variables, groups, dependencies), report
            )

    if fmt == OutputFormat.JSON:
        typer.echo(json.dumps({"stages": [group.to_dict() for group in groups]}, indent=2))
        return

    table = Table(title=f"Build order ({len(groups)} stages)")
    table.add_column("Stage", justify="right", style="cyan")
    table.add_column("Variables", style="green")
    if config.output.show_dependencies:
        table.add_column("Depends on", style="dim")

    for index, group in enumerate(groups):
        row = [str(index), ", ".join(group.variables)]
        if config.output.show_dependencies:
            upstream = sorted({dep for name in group for dep in dependencies.get(name, [])})
            row.append(", ".join(upstream) or "-")
        table.add_row(*row)

    console.print(table)

    if report:
        console.print(f"[green]OK:[/green] Report written to {report}")


@app.command()
def deps(
    file: Path = typer.Argument(..., help="Dashboard or variable file", exists=True),
    output_format: OutputFormat | None = FORMAT_OPTION,
    config_file: Path | None = CONFIG_OPTION,
    log_level: str | None = LOG_LEVEL_OPTION,
    json_logs: bool = JSON_LOGS_OPTION,
) -> None:
    """
    Show which variables each computed variable depends on.

    Examples:
        dashvars deps dashboard.yaml
        dashvars deps dashboard.yaml --format json
    """
    config = _setup(config_file, log_level, json_logs)

    with bound_contextvars(source=str(file)):
        _, variables = _load_variables(file)
        try:
            dependencies = build_variable_dependencies(variables)
        except DashvarsError as e:
            _fail(e)

    if (output_format or config.output.format) == OutputFormat.JSON:
        typer.echo(json.dumps(dependencies, indent=2))
        return

    table = Table(title="Variable dependencies")
    table.add_column("Variable", style="cyan")
    table.add_column("Kind")
    table.add_column("Depends on", style="green")

    for variable in variables:
        referenced = dependencies.get(variable.name, [])
        table.add_row(variable.name, variable.kind.value, ", ".join(referenced) or "-")

    console.print(table)


@app.command()
def refs(
    file: Path = typer.Argument(..., help="Dashboard or variable file", exists=True),
    config_file: Path | None = CONFIG_OPTION,
    log_level: str | None = LOG_LEVEL_OPTION,
    json_logs: bool = JSON_LOGS_OPTION,
) -> None:
    """
    List the raw references found in each computed variable.

    No validation is performed: references to undeclared names are shown
    and flagged instead of failing.

    Examples:
        dashvars refs dashboard.yaml
    """
    _setup(config_file, log_level, json_logs)

    with bound_contextvars(source=str(file)):
        _, variables = _load_variables(file)

    declared = {variable.name for variable in variables}

    table = Table(title="References")
    table.add_column("Variable", style="cyan")
    table.add_column("References")

    for variable in variables:
        if not variable.is_computed:
            continue
        found = sorted(extract_references(variable.spec))
        cells = [name if name in declared else f"[red]{name} (undefined)[/red]" for name in found]
        table.add_row(variable.name, ", ".join(cells) or "-")

    console.print(table)


@app.command()
def graph(
    file: Path = typer.Argument(..., help="Dashboard or variable file", exists=True),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write DOT to file instead of stdout"
    ),
    config_file: Path | None = CONFIG_OPTION,
    log_level: str | None = LOG_LEVEL_OPTION,
    json_logs: bool = JSON_LOGS_OPTION,
) -> None:
    """
    Output the variable dependency graph in Graphviz DOT format.

    Examples:
        dashvars graph dashboard.yaml | dot -Tpng -o vars.png
        dashvars graph dashboard.yaml -o vars.dot
    """
    _setup(config_file, log_level, json_logs)

    with bound_contextvars(source=str(file)):
        _, variables = _load_variables(file)
        try:
            dependencies = build_variable_dependencies(variables)
            variable_graph = VariableGraph([variable.name for variable in variables], dependencies)
        except DashvarsError as e:
            _fail(e)

    dot = variable_graph.to_dot()
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(dot + "\n", encoding="utf-8")
        console.print(f"[green]OK:[/green] Graph written to {output}")
    else:
        typer.echo(dot)


@app.command()
def validate(
    file: Path = typer.Argument(..., help="Dashboard or variable file", exists=True),
    config_file: Path | None = CONFIG_OPTION,
    log_level: str | None = LOG_LEVEL_OPTION,
    json_logs: bool = JSON_LOGS_OPTION,
) -> None:
    """
    Check that every variable is well formed, every reference is declared
    and the references contain no cycle.

    Examples:
        dashvars validate dashboard.yaml
    """
    _setup(config_file, log_level, json_logs)
    console.print(f"\n[bold blue]Validating variables:[/bold blue] {file}\n")

    with bound_contextvars(source=str(file)):
        loader, variables = _load_variables(file, strict=False)

        if loader.errors:
            console.print(
                f"[yellow]WARNING: Found {len(loader.errors)} invalid variables:[/yellow]\n"
            )
            console.print(escape(loader.get_error_summary()))
            raise typer.Exit(code=1)

        try:
            groups = build_variable_order(variables)
        except DashvarsError as e:
            _fail(e)

    console.print(
        f"[green]Validation successful![/green] "
        f"{len(variables)} variables in {len(groups)} stages"
    )


@app.command()
def version() -> None:
    """Show version information."""
    console.print(
        Panel.fit(
            "[bold]dashvars[/bold]\n\n"
            f"Version: [cyan]{__version__}[/cyan]\n\n"
            "[bold]Features:[/bold]\n"
            "- Variable reference extraction ($var, ${var}, ${var:fmt})\n"
            "- Undefined reference and cycle detection\n"
            "- Stage-ordered build plans for concurrent evaluation\n"
            "- DOT graph export and JSON reports",
            title="About",
            border_style="blue",
        )
    )
