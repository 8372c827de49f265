"""Command-line interface for slotsnap.

Provides CLI commands for exporting and displaying storage layouts.
"""

import importlib.metadata
import sys
from pathlib import Path

import click

__all__ = ["cli"]

try:
    __version__ = importlib.metadata.version("slotsnap")
except importlib.metadata.PackageNotFoundError:
    __version__ = "0.1.0"  # Fallback for development


@click.group()
@click.version_option(version=__version__, prog_name="slotsnap")
def cli() -> None:
    """Consolidated storage layout reports for upgradeable Solidity projects.

    Use 'slotsnap COMMAND --help' for command-specific help.
    """


@cli.command()
@click.argument(
    "project_root",
    type=click.Path(exists=True, file_okay=False),
    default=".",
)
@click.option(
    "--artifacts",
    "artifacts_dir",
    type=click.Path(),
    default=None,
    help="Hardhat artifacts directory (default: PROJECT_ROOT/artifacts)",
)
@click.option(
    "--output-dir",
    "-o",
    type=click.Path(),
    default="storage_layout",
    help="Output directory inside the project (default: storage_layout)",
)
@click.option(
    "--library-prefix",
    type=str,
    default="@openzeppelin/contracts-upgradeable",
    help="Source prefix of the shared upgradeable library",
)
@click.option(
    "--suppress",
    "suppressed",
    type=str,
    multiple=True,
    help="Source prefix whose contracts are never reported (repeatable, "
    "default: @openzeppelin)",
)
@click.option(
    "--include-empty-rows",
    is_flag=True,
    help="Report contracts that have no state variables left after filtering",
)
@click.option(
    "--workers",
    type=click.IntRange(min=1),
    default=1,
    help="Worker threads for processing build-info files (default: 1)",
)
@click.option(
    "--no-table",
    is_flag=True,
    help="Do not print the table after exporting",
)
@click.option(
    "--audit-log",
    is_flag=True,
    help="Write structured events to OUTPUT_DIR/events.jsonl",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
def export(
    project_root: str,
    artifacts_dir: str | None,
    output_dir: str,
    library_prefix: str,
    suppressed: tuple[str, ...],
    include_empty_rows: bool,
    workers: int,
    no_table: bool,
    audit_log: bool,
    verbose: bool,
) -> None:
    """Export the consolidated storage layout of PROJECT_ROOT.

    Reads the Hardhat build-info files and contract artifacts, removes every
    storage slot owned by the shared upgradeable library and writes
    OUTPUT_DIR/output.json.

    Examples
    --------
        slotsnap export
        slotsnap export path/to/project -o layouts --no-table
        slotsnap export --library-prefix @acme/upgradeable --suppress @acme
    """
    from slotsnap.audit import AuditLogger, generate_run_id
    from slotsnap.engine import ExportConfig, prepare_output_dir, run_export
    from slotsnap.errors import ConfigurationError
    from slotsnap.extract import DEFAULT_SUPPRESSED_PREFIXES
    from slotsnap.report import echo_table

    try:
        config = ExportConfig(
            project_root=Path(project_root),
            artifacts_dir=Path(artifacts_dir) if artifacts_dir else None,
            output_dir=Path(output_dir),
            library_prefix=library_prefix,
            suppressed_prefixes=suppressed or DEFAULT_SUPPRESSED_PREFIXES,
            include_empty_rows=include_empty_rows,
            max_workers=workers,
        )
    except ValueError as e:
        click.secho(f"✗ Error: {e}", fg="red", err=True)
        sys.exit(1)

    if verbose:
        click.echo("Exporting storage layout...", err=True)
        click.echo(f"  Project: {config.project_root}", err=True)
        click.echo(f"  Artifacts: {config.artifacts_path}", err=True)
        click.echo(f"  Output: {config.output_path}", err=True)
        click.echo(f"  Library prefix: {config.library_prefix}", err=True)
        click.echo(f"  Suppressed: {', '.join(config.suppressed_prefixes) or '-'}", err=True)

    logger = None
    if audit_log:
        try:
            prepare_output_dir(config)
        except ConfigurationError as e:
            click.secho(f"✗ Export failed: {e}", fg="red", err=True)
            sys.exit(1)
        logger = AuditLogger(
            run_id=generate_run_id(),
            log_path=config.output_path / "events.jsonl",
        )

    try:
        result = run_export(config=config, logger=logger)
    finally:
        if logger:
            logger.close()

    if not result.success:
        click.secho(f"✗ Export failed: {result.error_message}", fg="red", err=True)
        sys.exit(1)

    if verbose:
        click.echo("\nResults:", err=True)
        click.echo(f"  Build-info files: {result.units_processed}", err=True)
        click.echo(f"  Contracts catalogued: {result.contracts_catalogued}", err=True)
        click.echo(f"  Rows: {result.rows}", err=True)
        click.echo(f"  State variables: {result.variables}", err=True)

    if not no_table and result.table is not None:
        echo_table(result.table)

    click.secho(
        f"✓ Wrote {result.rows} contracts ({result.variables} state variables) "
        f"to {result.output_file}",
        fg="green",
    )


@cli.command()
@click.argument("output_json", type=click.Path(exists=True, dir_okay=False))
def show(output_json: str) -> None:
    """Display a previously exported OUTPUT_JSON as a table.

    Examples
    --------
        slotsnap show storage_layout/output.json
    """
    from slotsnap.report import echo_table, read_output_json

    try:
        table = read_output_json(Path(output_json))
    except (ValueError, KeyError, TypeError) as e:
        click.secho(f"✗ Error: cannot read {output_json}: {e}", fg="red", err=True)
        sys.exit(1)

    echo_table(table)


if __name__ == "__main__":
    cli()
