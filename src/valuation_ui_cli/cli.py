"""
Valuation CLI Application

Typer-based command-line interface for the DCF valuation workstation.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from valuation_engine.engine import ValuationEngine
from valuation_engine.errors import ComputationError
from valuation_engine.logging_config import setup_logging
from valuation_engine.models import AssumptionSet, Severity
from valuation_engine.validation import validate_assumptions
from valuation_io.readers import InputFileError, read_input_file
from valuation_io.writers import (
    assumptions_to_yaml,
    export_assumptions_yaml,
    export_csv,
    export_json,
    export_xlsx,
)
from valuation_ui_cli.charts import save_charts
from valuation_ui_cli.display import display_all, display_warnings


app = typer.Typer(
    name="dcf-workstation",
    help="Three-statement projection and DCF valuation workstation",
    add_completion=False,
)

console = Console()

EXPORT_FORMATS = ("json", "xlsx", "csv")

# Errors the commands report as a red message and exit code 1
USER_ERRORS = (InputFileError, ValidationError, ComputationError, typer.BadParameter)


@app.callback()
def main(
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    ),
) -> None:
    """Three-statement projection and DCF valuation workstation."""
    setup_logging(log_level)


def _resolve_input_file(input_file: Optional[Path], input_option: Optional[Path]) -> Path:
    """Resolve input file from positional arg or --input option."""
    resolved = input_option or input_file
    if resolved is None:
        raise typer.BadParameter("Missing input file. Provide a positional INPUT_FILE or --input.")
    if not resolved.exists():
        raise typer.BadParameter(f"Input file not found: {resolved}")
    if not resolved.is_file():
        raise typer.BadParameter(f"Input path is not a file: {resolved}")
    return resolved


def _report_error(error: Exception, prefix: str = "Error") -> None:
    if isinstance(error, ValidationError):
        console.print(f"[red]{prefix}: invalid assumptions[/red]")
        for err in error.errors():
            loc = ".".join(str(part) for part in err["loc"]) or "(root)"
            console.print(f"[red]  {loc}: {err['msg']}[/red]")
        return
    field = getattr(error, "field", None)
    suffix = f" (field: {field})" if field else ""
    console.print(f"[red]{prefix}: {error}{suffix}[/red]")


@app.command()
def run(
    input_file: Optional[Path] = typer.Argument(
        None,
        help="Path to input file (YAML or JSON)",
    ),
    input_option: Optional[Path] = typer.Option(
        None,
        "--input",
        "-i",
        help="Path to input file (YAML or JSON)",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output", "-o",
        help="Output Excel file path",
    ),
    csv_dir: Optional[Path] = typer.Option(
        None,
        "--csv-dir",
        help="Directory to export CSV files",
    ),
    json_path: Optional[Path] = typer.Option(
        None,
        "--json",
        help="Output JSON file path",
    ),
    charts_dir: Optional[Path] = typer.Option(
        None,
        "--charts-dir",
        help="Directory to save chart files",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet", "-q",
        help="Suppress table output",
    ),
) -> None:
    """
    Run the projection and valuation on an input file.

    Reads a YAML or JSON assumption file, computes every schedule and the
    DCF valuation, and displays results as rich tables. Optionally exports
    to Excel/CSV/JSON and saves charts.
    """
    try:
        input_file = _resolve_input_file(input_file, input_option)
        console.print(f"[dim]Reading input file: {input_file}[/dim]")
        parsed = read_input_file(input_file)

        console.print("[dim]Running valuation engine...[/dim]")
        bundle = ValuationEngine(parsed.assumptions).run()

        if not quiet:
            display_all(bundle, parsed.metadata)

        if output:
            console.print(f"\n[dim]Exporting to Excel: {output}[/dim]")
            export_xlsx(bundle, output, metadata=parsed.metadata)
            console.print(f"[green]✓ Exported to {output}[/green]")

        if csv_dir:
            console.print(f"\n[dim]Exporting CSVs to: {csv_dir}[/dim]")
            files = export_csv(bundle, csv_dir, metadata=parsed.metadata)
            console.print(f"[green]✓ Exported {len(files)} CSV files[/green]")

        if json_path:
            export_json(bundle, json_path, metadata=parsed.metadata)
            console.print(f"[green]✓ Exported to {json_path}[/green]")

        if charts_dir:
            console.print(f"\n[dim]Saving charts to: {charts_dir}[/dim]")
            files = save_charts(bundle, charts_dir)
            console.print(f"[green]✓ Saved {len(files)} chart files[/green]")

    except USER_ERRORS as e:
        _report_error(e)
        raise typer.Exit(code=1)


@app.command()
def validate(
    input_file: Optional[Path] = typer.Argument(
        None,
        help="Path to input file (YAML or JSON)",
    ),
    input_option: Optional[Path] = typer.Option(
        None,
        "--input",
        "-i",
        help="Path to input file (YAML or JSON)",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Also fail when a high-severity warning is raised",
    ),
) -> None:
    """
    Validate an input file without running the valuation.

    Hard constraint violations fail; advisory warnings are listed.
    """
    try:
        input_file = _resolve_input_file(input_file, input_option)
        console.print(f"[dim]Validating: {input_file}[/dim]")
        parsed = read_input_file(input_file)
    except USER_ERRORS as e:
        _report_error(e, prefix="Validation failed")
        raise typer.Exit(code=1)

    a = parsed.assumptions
    warnings = validate_assumptions(a)

    console.print("[green]✓ Input file is valid[/green]")
    console.print(f"\n  Projection years: {a.projection_years}")
    console.print(f"  WACC: {a.wacc}%  Terminal growth: {a.terminal_growth_rate}%")
    console.print(f"  Warnings: {len(warnings)}")
    display_warnings(warnings)

    if strict and any(w.severity == Severity.HIGH for w in warnings):
        console.print("[red]Validation failed: high-severity warnings present[/red]")
        raise typer.Exit(code=1)


@app.command()
def export(
    input_file: Optional[Path] = typer.Argument(
        None,
        help="Path to input file (YAML or JSON)",
    ),
    input_option: Optional[Path] = typer.Option(
        None,
        "--input",
        "-i",
        help="Path to input file (YAML or JSON)",
    ),
    output: Path = typer.Option(
        ...,
        "--output", "-o",
        help="Output file path (a directory for csv)",
    ),
    export_format: str = typer.Option(
        "json",
        "--format",
        help="Export format: json, xlsx or csv",
    ),
) -> None:
    """
    Run the valuation and export results without displaying tables.
    """
    try:
        input_file = _resolve_input_file(input_file, input_option)
        export_format = export_format.lower()
        if export_format not in EXPORT_FORMATS:
            raise typer.BadParameter(
                f"Unsupported format '{export_format}'. Choose one of: {', '.join(EXPORT_FORMATS)}"
            )

        parsed = read_input_file(input_file)
        bundle = ValuationEngine(parsed.assumptions).run()

        if export_format == "json":
            export_json(bundle, output, metadata=parsed.metadata)
        elif export_format == "xlsx":
            export_xlsx(bundle, output, metadata=parsed.metadata)
        else:
            files = export_csv(bundle, output, metadata=parsed.metadata)
            console.print(f"[dim]{len(files)} CSV files[/dim]")
        console.print(f"[green]✓ Exported to {output}[/green]")

    except USER_ERRORS as e:
        _report_error(e)
        raise typer.Exit(code=1)


@app.command()
def defaults(
    output: Optional[Path] = typer.Option(
        None,
        "--output", "-o",
        help="Write the reference assumptions to this YAML file",
    ),
) -> None:
    """
    Print or save the reference assumption set as YAML.
    """
    assumptions = AssumptionSet()
    if output is None:
        typer.echo(assumptions_to_yaml(assumptions), nl=False)
        return

    export_assumptions_yaml(assumptions, output)
    console.print(f"[green]✓ Wrote default assumptions to {output}[/green]")


if __name__ == "__main__":
    app()
