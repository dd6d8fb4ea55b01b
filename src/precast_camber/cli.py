"""Command-line interface for the precast camber calculator.

Usage::

    camber run <input_yaml> [--json] [--tables PATH] [-v]
    camber template
    camber validate <input_yaml> [--tables PATH]
"""

from __future__ import annotations

import json
from pathlib import Path

import click

from .codes.pci import PCIHandbook
from .config import load_strand_library
from .core.camber_engine import CamberEngine
from .input_parser import InputError, generate_template, parse_input
from .logging_utils import configure_logging
from .models.inputs import CamberInputs
from .models.outputs import CamberResults
from .utils.measurements import format_inches_fraction, format_span_display
from .utils.tables import ConfigurationError


# ---------------------------------------------------------------------------
# Top-level group
# ---------------------------------------------------------------------------

@click.group()
@click.version_option(package_name="precast-camber")
def main():
    """Precast camber calculator - PCI Design Handbook method."""


def _build_engine(tables: str | None) -> CamberEngine:
    try:
        return CamberEngine(PCIHandbook.from_tables(tables), load_strand_library(tables))
    except ConfigurationError as exc:
        click.secho(f"Configuration error: {exc}", fg="red", err=True)
        raise SystemExit(2) from exc


def _read_inputs(input_path: Path) -> CamberInputs:
    try:
        return parse_input(input_path)
    except InputError as exc:
        click.secho(f"Error parsing input: {exc}", fg="red", err=True)
        raise SystemExit(1) from exc


_tables_option = click.option(
    "--tables",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Engine tables YAML (defaults to the packaged PCI tables).",
)


# ---------------------------------------------------------------------------
# run
# ---------------------------------------------------------------------------

@main.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON.")
@_tables_option
@click.option("-v", "--verbose", is_flag=True, help="Log intermediate quantities.")
def run(input_file: str, as_json: bool, tables: str | None, verbose: bool) -> None:
    """Calculate camber for INPUT_FILE."""
    configure_logging(verbose)
    engine = _build_engine(tables)
    inputs = _read_inputs(Path(input_file))

    outcome = engine.calculate(inputs)
    if not outcome.is_valid:
        click.secho(f"Found {len(outcome.errors)} issue(s):", fg="yellow", err=True)
        for i, err in enumerate(outcome.errors, 1):
            click.echo(f"  {i}. {err}", err=True)
        raise SystemExit(1)

    results = outcome.results
    if as_json:
        click.echo(json.dumps(results.to_record(), indent=2))
        return

    _print_results(inputs, results)


def _print_results(inputs: CamberInputs, results: CamberResults) -> None:
    """Human-readable summary table."""
    header = inputs.mark_number or inputs.project_name or "Member"
    click.echo(f"\n{header} - {inputs.member_type.label}, span {format_span_display(inputs.span)}")
    click.echo(f"{results.code_name}")
    click.echo("-" * 60)

    rows = [
        ("Eci (release)", results.release_modulus_of_elasticity, "psi", "{:,.0f}"),
        ("Ec (28-day)", results.modulus_of_elasticity, "psi", "{:,.0f}"),
        ("Prestress force P", results.prestress_force, "kips", "{:.2f}"),
        ("Eccentricity e", results.eccentricity, "in", "{:.3f}"),
        ("Initial camber", results.initial_camber, "in", "{:.3f}"),
        ("Dead load deflection", results.dead_load_deflection, "in", "{:.3f}"),
        ("Net initial camber", results.net_initial_camber, "in", "{:.3f}"),
        ("Live load deflection", results.live_load_deflection, "in", "{:.3f}"),
        ("Erection camber", results.erection_camber, "in", "{:.3f}"),
        ("Final camber", results.final_camber, "in", "{:.3f}"),
        ("Long-term deflection", results.long_term_deflection, "in", "{:.3f}"),
    ]
    for label, value, unit, fmt in rows:
        shown = "-" if value is None else fmt.format(value)
        line = f"  {label:<24}{shown:>14} {unit}"
        if unit == "in" and value is not None:
            # nearest 1/16"
            line += f"  ({format_inches_fraction(value)})"
        click.echo(line)

    click.echo("-" * 60)
    click.secho(
        f"  {'Recommended camber':<24}{results.recommended_camber:>14.3f} in"
        f"  ({format_inches_fraction(results.recommended_camber)})",
        fg="green", bold=True,
    )


# ---------------------------------------------------------------------------
# template
# ---------------------------------------------------------------------------

@main.command()
def template() -> None:
    """Print a sample input YAML to stdout."""
    click.echo(generate_template())


# ---------------------------------------------------------------------------
# validate
# ---------------------------------------------------------------------------

@main.command()
@click.argument("input_file", type=click.Path(exists=True, dir_okay=False))
@_tables_option
def validate(input_file: str, tables: str | None) -> None:
    """Validate an input YAML file without running the calculation."""
    input_path = Path(input_file)
    click.echo(f"Validating: {input_path}")

    engine = _build_engine(tables)
    inputs = _read_inputs(input_path)

    errors = engine.validate(inputs)
    if errors:
        click.secho(f"\nFound {len(errors)} issue(s):\n", fg="yellow")
        for i, err in enumerate(errors, 1):
            click.echo(f"  {i}. {err}")
        raise SystemExit(1)

    click.secho("Input is valid.", fg="green")


if __name__ == "__main__":
    main()
