from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer

from dwc.archive import build_manifest, create_archive
from dwc.errors import ChecklistError
from dwc.pipeline import ChecklistTables, build_checklist
from dwc.settings import ChecklistSettings
from engines import get_parser
from engines.cached import dump_parser_results
from engines.protocols import NameParser
from io_utils.logs import setup_logging
from io_utils.read import compute_sha256, read_checklist
from io_utils.write import write_checklist, write_manifest
from qc.report import QualityReport

logger = logging.getLogger(__name__)


def select_parser(settings: ChecklistSettings, parsed_names: Optional[Path]) -> NameParser:
    """Use stored parser results when given, the GBIF parser otherwise."""
    if parsed_names is not None:
        return get_parser("file", path=parsed_names)
    return get_parser("gbif", batch_size=settings.parser.batch_size)


def build_cli(
    input: Path,
    output: Path,
    config: Optional[Path] = None,
    parsed_names: Optional[Path] = None,
) -> ChecklistTables:
    """Read the checklist, run the transform and write tables plus manifest."""
    setup_logging(output)
    settings = ChecklistSettings.load(config)
    records = read_checklist(input)
    parser = select_parser(settings, parsed_names)

    report = QualityReport()
    tables = build_checklist(records, parser, settings, report)
    write_checklist(output, tables)

    manifest = build_manifest(
        dataset={
            "short_name": settings.dataset.short_name,
            "name": settings.dataset.name,
            "id": settings.dataset.id,
        }
    )
    manifest["input"] = {"path": str(input), "sha256": compute_sha256(input), "records": len(records)}
    manifest["counts"] = tables.counts()
    manifest["quality"] = report.to_dict()
    write_manifest(output, manifest)
    logger.info("Checklist written to %s with %d quality warnings", output, len(report))
    return tables


app = typer.Typer(help="Rust fungi checklist to Darwin Core transformer")


@app.command()
def build(
    input: Path = typer.Option(
        ...,
        "--input",
        "-i",
        exists=True,
        file_okay=True,
        dir_okay=False,
        help="Tab-separated source checklist",
    ),
    output: Path = typer.Option(
        ...,
        "--output",
        "-o",
        file_okay=False,
        dir_okay=True,
        help="Output directory",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        exists=True,
        dir_okay=False,
        file_okay=True,
        help="Optional config file",
    ),
    parsed_names: Optional[Path] = typer.Option(
        None,
        "--parsed-names",
        "-p",
        exists=True,
        dir_okay=False,
        file_okay=True,
        help="Stored name parser results (see parse-names) instead of calling GBIF",
    ),
) -> None:
    """Build taxon, distribution and resource relationship tables."""
    try:
        tables = build_cli(input, output, config, parsed_names)
    except (ChecklistError, ValueError) as e:
        typer.echo(f"❌ Build failed: {e}", err=True)
        raise typer.Exit(1)

    counts = tables.counts()
    typer.echo(f"✅ Checklist written to: {output}")
    typer.echo(
        f"📊 {counts['taxon']} taxa, {counts['distribution']} distributions, "
        f"{counts['resourcerelationship']} relationships"
    )
    if tables.report.warnings:
        typer.echo(f"⚠️  {len(tables.report)} data quality warnings, see manifest.json")


@app.command("parse-names")
def parse_names_command(
    input: Path = typer.Option(
        ...,
        "--input",
        "-i",
        exists=True,
        file_okay=True,
        dir_okay=False,
        help="Tab-separated source checklist",
    ),
    output: Path = typer.Option(
        ...,
        "--output",
        "-o",
        dir_okay=False,
        help="JSON file receiving the GBIF parser results",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        exists=True,
        dir_okay=False,
        file_okay=True,
        help="Optional config file",
    ),
) -> None:
    """Store GBIF name parser results for every parasite and host name."""
    from dwc.hosts import extract_and_union

    settings = ChecklistSettings.load(config)
    try:
        records = read_checklist(input)
        taxa, _ = extract_and_union(records)
    except ChecklistError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(1)

    names = list(dict.fromkeys(taxon.scientificName for taxon in taxa))
    results = get_parser("gbif", batch_size=settings.parser.batch_size)(names)
    dump_parser_results(output, results)
    typer.echo(f"✅ Stored {len(results)} parsed names in {output}")


@app.command()
def export(
    output: Path = typer.Option(
        ...,
        "--output",
        "-o",
        exists=True,
        file_okay=False,
        dir_okay=True,
        help="Directory containing the checklist CSV files",
    ),
    version: str = typer.Option(
        "1.0.0",
        "--version",
        "-v",
        help="Semantic version for the export bundle",
    ),
    compress: bool = typer.Option(
        True,
        "--compress/--no-compress",
        help="Create compressed ZIP archive",
    ),
    include_checksums: bool = typer.Option(
        True,
        "--checksums/--no-checksums",
        help="Include file checksums in manifest",
    ),
) -> None:
    """Create a Darwin Core Archive from a built checklist."""
    try:
        archive_path = create_archive(
            output,
            compress=compress,
            version=version,
            include_checksums=include_checksums,
        )
    except (FileNotFoundError, ValueError) as e:
        typer.echo(f"❌ Export failed: {e}", err=True)
        raise typer.Exit(1)

    if compress:
        typer.echo(f"✅ Export bundle created: {archive_path}")
        typer.echo(f"🏷️  Version: {version}")
    else:
        typer.echo(f"📄 Meta.xml created: {archive_path}")


if __name__ == "__main__":
    app()
