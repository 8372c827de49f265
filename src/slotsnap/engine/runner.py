"""End-to-end storage layout export runner.

Wraps the pure consolidation core with its collaborators:

    Stage 1: Discover - read build-info files and contract artifacts
    Stage 2: Consolidate - catalog, exclusion pass, extraction pass
    Stage 3: Write - output.json

The output directory is checked before any stage runs. Nothing is written
unless consolidation succeeded for every unit.
"""

import time
from contextlib import AbstractContextManager, nullcontext
from pathlib import Path

from slotsnap.artifacts import discover_contract_identities, load_compilation_units
from slotsnap.audit.logger import AuditLogger
from slotsnap.engine.config import ExportConfig, ExportResult
from slotsnap.errors import ConfigurationError
from slotsnap.extract import assemble_units, build_catalog
from slotsnap.models import CompilationUnit, ConsolidatedTable, ContractIdentity
from slotsnap.report import write_output_json
from slotsnap.utils import sha256_of_file


def prepare_output_dir(config: ExportConfig) -> Path:
    """Check that the output directory lies in the project and create it.

    Parameters
    ----------
    config : ExportConfig
        Export configuration.

    Returns
    -------
    Path
        Resolved output directory.

    Raises
    ------
    ConfigurationError
        If the output directory resolves outside the project root.
    """
    root = config.project_root.resolve()
    output_dir = config.output_path
    if not output_dir.is_relative_to(root):
        raise ConfigurationError(
            f"output directory should be inside the project directory: {output_dir}"
        )
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir


def _stage(logger: AuditLogger | None, name: str) -> AbstractContextManager[dict[str, int]]:
    if logger is None:
        return nullcontext({})
    return logger.stage(name)


def _stage1_discover(
    config: ExportConfig,
    logger: AuditLogger | None,
) -> tuple[list[CompilationUnit], list[ContractIdentity]]:
    """Stage 1: Read compilation units and contract identities."""
    with _stage(logger, "stage1_discover") as counters:
        artifacts_dir = config.artifacts_path
        units = load_compilation_units(artifacts_dir)
        identities = discover_contract_identities(artifacts_dir)
        counters.update(units=len(units), contracts=len(identities))
    return units, identities


def _stage2_consolidate(
    units: list[CompilationUnit],
    identities: list[ContractIdentity],
    config: ExportConfig,
    logger: AuditLogger | None,
) -> tuple[ConsolidatedTable, int]:
    """Stage 2: Build the catalog and run both passes over every unit."""
    with _stage(logger, "stage2_consolidate") as counters:
        catalog = build_catalog(identities)
        extractions = assemble_units(
            units,
            catalog,
            config.namespace,
            max_workers=config.max_workers,
            include_empty_rows=config.include_empty_rows,
        )
        table = ConsolidatedTable(rows=tuple(row for ext in extractions for row in ext.rows))

        if logger:
            for ext in extractions:
                logger.unit_processed(
                    unit=ext.origin,
                    excluded_slots=len(ext.exclusion_set),
                    rows=len(ext.rows),
                    variables=sum(len(row.state_variables) for row in ext.rows),
                )
        counters.update(rows=len(table), variables=table.variable_count)
    return table, len(catalog)


def _stage3_write(
    table: ConsolidatedTable,
    output_dir: Path,
    logger: AuditLogger | None,
) -> Path:
    """Stage 3: Write output.json."""
    with _stage(logger, "stage3_write"):
        output_path = write_output_json(table, output_dir)
        if logger:
            logger.artifact_written(
                path=str(output_path),
                sha256=sha256_of_file(output_path),
                bytes_written=output_path.stat().st_size,
                record_count=len(table),
            )
    return output_path


def run_export(
    config: ExportConfig | None = None,
    logger: AuditLogger | None = None,
) -> ExportResult:
    """Run a complete storage layout export.

    Parameters
    ----------
    config : ExportConfig | None, optional
        Export configuration. If None, uses defaults (current directory).
    logger : AuditLogger | None, optional
        Audit logger for tracking. If None, no logging.

    Returns
    -------
    ExportResult
        Export results. On failure ``success`` is False, ``error_message``
        describes the first error and no output file was written.

    Examples
    --------
        >>> from pathlib import Path
        >>> from slotsnap.engine import ExportConfig, run_export
        >>> result = run_export(ExportConfig(project_root=Path("my-project")))
        >>> if result.success:
        ...     print(result.output_file)
    """
    if config is None:
        config = ExportConfig()

    start = time.perf_counter()
    if logger:
        logger.run_started(parameters=config.to_dict())

    units_processed = 0
    contracts_catalogued = 0

    try:
        output_dir = prepare_output_dir(config)
        units, identities = _stage1_discover(config, logger)
        units_processed = len(units)

        table, contracts_catalogued = _stage2_consolidate(units, identities, config, logger)

        output_path = _stage3_write(table, output_dir, logger)

    except Exception as e:
        if logger:
            logger.error(e)
            logger.run_finished(status="failed", duration_seconds=time.perf_counter() - start)
        return ExportResult(
            success=False,
            units_processed=units_processed,
            contracts_catalogued=contracts_catalogued,
            error_message=f"{type(e).__name__}: {e}",
        )

    if logger:
        logger.run_finished(status="success", duration_seconds=time.perf_counter() - start)

    return ExportResult(
        success=True,
        units_processed=units_processed,
        contracts_catalogued=contracts_catalogued,
        rows=len(table),
        variables=table.variable_count,
        output_file=str(output_path),
        table=table,
    )
