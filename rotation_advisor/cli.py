"""
Rotation advisor — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Load and validate inputs (history CSV, family and species catalogues).
  4. Run the engine.
  5. Report result to stdout.

Install and run::

    pip install -e .
    rotation-advisor --help
    rotation-advisor validate-config
    rotation-advisor show-catalogue
    rotation-advisor advise --history plot_a.csv --plot A --year 2026
    rotation-advisor advise --history plot_a.csv --plot A --species Tomate --json
"""

from __future__ import annotations

import json
import os
from datetime import date
from pathlib import Path
from typing import Optional

import typer

app = typer.Typer(
    name="rotation-advisor",
    help="Crop-rotation advisor — soil estimate, blocked families and planting recommendations.",
    add_completion=False,
)


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from pydantic import ValidationError

    from rotation_advisor.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except (ValidationError, ValueError) as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from rotation_advisor.utils.logging import configure_logging
    configure_logging(config.logging, debug=config.debug)


def _data_path(cli_value: Optional[str], config_value: str) -> Path:
    """CLI paths are relative to the cwd; config paths to the project root."""
    from rotation_advisor.config import resolve_data_path

    if cli_value:
        return Path(cli_value)
    return resolve_data_path(config_value)


def _load_catalogue_or_exit(catalogue_path: Path):
    from rotation_advisor.ingestion.catalogue import load_family_catalogue

    try:
        return load_family_catalogue(catalogue_path)
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"[ERROR] Catalogue load failed:\n{exc}", err=True)
        raise typer.Exit(code=1)


def _load_species_or_exit(species_path: Path):
    from rotation_advisor.ingestion.catalogue import load_species_catalogue

    try:
        return load_species_catalogue(species_path)
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"[ERROR] Species catalogue load failed:\n{exc}", err=True)
        raise typer.Exit(code=1)


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file (default: config/default.toml).",
    ),
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)
    rot = config.rotation

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Catalogue file:     {config.data.catalogue_file}")
    typer.echo(f"  Species file:       {config.data.species_file}")
    typer.echo(f"  Soil lookback:      {rot.soil_lookback_years} years")
    typer.echo(f"  Fallback interval:  {rot.default_interval_years} years")
    typer.echo(f"  Nitrogen fixer:     {rot.nitrogen_fixer_family}")
    typer.echo(f"  Heavy feeders:      {', '.join(rot.heavy_feeder_families)}")
    typer.echo(f"  Log level:          {config.logging.level}")
    typer.echo(f"  Debug mode:         {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str, ensure_ascii=False))

    typer.echo("")
    typer.echo("[OK] Config valid.")


@app.command("show-catalogue")
def show_catalogue(
    catalogue_file: Optional[str] = typer.Option(
        None,
        "--catalogue",
        help="Family catalogue JSON. Defaults to config.data.catalogue_file.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Print the botanical family catalogue with rotation intervals."""
    from rotation_advisor.reporting.formatters import format_catalogue_table

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    families = _load_catalogue_or_exit(
        _data_path(catalogue_file, config.data.catalogue_file)
    )
    typer.echo(format_catalogue_table(families))


@app.command("advise")
def advise(
    history_file: str = typer.Option(
        ...,
        "--history",
        help="Planting history CSV (columns: year, species_id, family_id, nitrogen_need, ...).",
    ),
    plot_id: str = typer.Option(
        ...,
        "--plot",
        help="Plot identifier, echoed in the report.",
    ),
    target_year: Optional[int] = typer.Option(
        None,
        "--year",
        help="Season to plan. Defaults to the current year.",
    ),
    catalogue_file: Optional[str] = typer.Option(
        None,
        "--catalogue",
        help="Family catalogue JSON. Defaults to config.data.catalogue_file.",
    ),
    species_file: Optional[str] = typer.Option(
        None,
        "--species-catalogue",
        help="Species catalogue JSON used to fill in families and needs. "
             "Defaults to config.data.species_file.",
    ),
    species_id: Optional[str] = typer.Option(
        None,
        "--species",
        help="Candidate species to classify (safe / warning / blocked).",
    ),
    species_family: Optional[str] = typer.Option(
        None,
        "--species-family",
        help="Botanical family of --species (looked up in the species catalogue if omitted).",
    ),
    species_n: Optional[int] = typer.Option(
        None,
        "--species-n",
        help="Nitrogen need of --species on the 0-5 scale (looked up if omitted).",
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the advice as JSON instead of a table.",
    ),
    output: Optional[str] = typer.Option(
        None,
        "--output",
        "-o",
        help="Also write the advice to this file (.json or .csv). Bare filenames go under config.data.output_dir.",
    ),
    config_path: Optional[str] = typer.Option(
        None,
        "--config",
        help="Path to TOML config file.",
    ),
) -> None:
    """Compute rotation advice for one plot and target year.

    \b
    Steps:
      1. Load the planting history CSV, the family catalogue and the species
         catalogue; fill missing families and needs from the latter.
      2. Estimate soil N/P/K from the last 3 seasons.
      3. List families still inside their rotation interval.
      4. Rank the remaining families.
      5. Optionally classify --species.
    """
    from pydantic import ValidationError

    from rotation_advisor.config import resolve_data_path
    from rotation_advisor.ingestion.history_csv import parse_history_csv
    from rotation_advisor.ingestion.species_lookup import enrich_plantings, resolve_candidate
    from rotation_advisor.models.planting import RotationRequest
    from rotation_advisor.reporting.export import (
        EXPORT_CSV_FIELDS,
        advice_to_dict,
        export_to_csv,
        export_to_json,
        flatten_advice_for_export,
    )
    from rotation_advisor.reporting.formatters import format_rotation_advice
    from rotation_advisor.rotation.advisor import calculate_rotation_advice

    config = _load_config_or_exit(config_path)
    _configure_logging(config)

    try:
        history = parse_history_csv(Path(history_file))
    except (FileNotFoundError, ValueError) as exc:
        typer.echo(f"[ERROR] History CSV parse failed:\n{exc}", err=True)
        raise typer.Exit(code=1)

    families = _load_catalogue_or_exit(
        _data_path(catalogue_file, config.data.catalogue_file)
    )
    species = _load_species_or_exit(
        _data_path(species_file, config.data.species_file)
    )
    history = enrich_plantings(history, species)

    try:
        candidate = None
        if species_id:
            candidate = resolve_candidate(
                species_id,
                species,
                family_id=species_family,
                nitrogen_need=species_n,
            )
        elif species_family or species_n is not None:
            typer.echo(
                "[ERROR] --species-family / --species-n require --species.", err=True
            )
            raise typer.Exit(code=1)

        request = RotationRequest(
            plot_id=plot_id,
            target_year=target_year if target_year is not None else date.today().year,
            planting_history=history,
            family_catalogue=families,
            candidate_species=candidate,
        )
    except ValidationError as exc:
        typer.echo(f"[ERROR] Invalid input: {exc}", err=True)
        raise typer.Exit(code=1)

    advice = calculate_rotation_advice(request, config.rotation)
    payload = advice_to_dict(advice)

    if as_json:
        typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        typer.echo(format_rotation_advice(advice))

    if output:
        out_path = Path(output)
        if not os.path.dirname(output):
            out_path = resolve_data_path(config.data.output_dir) / out_path
        if out_path.suffix.lower() == ".csv":
            export_to_csv(flatten_advice_for_export(advice), out_path, EXPORT_CSV_FIELDS)
        else:
            export_to_json(payload, out_path)
        typer.echo(f"Advice written to: {out_path}", err=as_json)


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
