"""Public API for storage layout consolidation.

This module provides the main public API for slotsnap, enabling:
- Consolidating in-memory build-info documents into a table
- Running a complete export against a Hardhat project
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

from slotsnap.errors import SlotsnapError
from slotsnap.extract import (
    DEFAULT_LIBRARY_PREFIX,
    DEFAULT_SUPPRESSED_PREFIXES,
    LibraryNamespace,
    assemble_table,
    build_catalog,
)
from slotsnap.models import CompilationUnit, ConsolidatedTable, ContractIdentity

if TYPE_CHECKING:
    from slotsnap.audit import AuditLogger
    from slotsnap.engine.config import ExportResult

__all__ = [
    "ExportError",
    "consolidate",
    "export_storage_layout",
]


class ExportError(SlotsnapError):
    """Raised when an export did not produce a table."""

    def __init__(
        self,
        message: str,
        result: ExportResult | None = None,
    ) -> None:
        """Initialize export error.

        Parameters
        ----------
        message : str
            Error message.
        result : ExportResult | None, optional
            Result of the failed export.
        """
        super().__init__(message)
        self.result = result


def _as_identity(item: ContractIdentity | Mapping[str, Any]) -> ContractIdentity:
    if isinstance(item, ContractIdentity):
        return item
    return ContractIdentity.from_dict(item)


def consolidate(
    build_infos: Iterable[tuple[str, Mapping[str, Any]]],
    identities: Iterable[ContractIdentity | Mapping[str, Any]],
    *,
    library_prefix: str = DEFAULT_LIBRARY_PREFIX,
    suppressed_prefixes: Iterable[str] = DEFAULT_SUPPRESSED_PREFIXES,
    include_empty_rows: bool = False,
    max_workers: int = 1,
) -> ConsolidatedTable:
    """Consolidate already-loaded build-info documents.

    Parameters
    ----------
    build_infos : Iterable[tuple[str, Mapping[str, Any]]]
        ``(origin, document)`` pairs in output order.
    identities : Iterable[ContractIdentity | Mapping[str, Any]]
        Every contract of the project, as identities or as dicts with
        ``sourceName``/``contractName`` keys.
    library_prefix : str, optional
        Source prefix of the shared upgradeable library.
    suppressed_prefixes : Iterable[str], optional
        Further source prefixes that are never reported.
    include_empty_rows : bool, optional
        Report contracts with no retained variables, by default False.
    max_workers : int, optional
        Worker threads for per-unit processing, by default 1.

    Returns
    -------
    ConsolidatedTable
        The consolidated table.

    Raises
    ------
    ResolutionFailure
        If a reported variable's type has no descriptor.
    LayoutDecodeError
        If a document or layout is malformed.

    Examples
    --------
        >>> from slotsnap import consolidate
        >>> table = consolidate(
        ...     [("build-info/a.json", build_info)],
        ...     [{"sourceName": "contracts/Foo.sol", "contractName": "Foo"}],
        ... )
        >>> table.to_list()[0]["name"]
        'Foo'
    """
    units = [CompilationUnit.from_build_info(doc, origin=origin) for origin, doc in build_infos]
    namespace = LibraryNamespace(
        prefix=library_prefix,
        suppressed_prefixes=tuple(suppressed_prefixes),
    )
    catalog = build_catalog(_as_identity(item) for item in identities)
    return assemble_table(
        units,
        catalog,
        namespace,
        max_workers=max_workers,
        include_empty_rows=include_empty_rows,
    )


def export_storage_layout(
    project_root: str | Path = ".",
    *,
    artifacts_dir: str | Path | None = None,
    output_dir: str | Path = "storage_layout",
    library_prefix: str = DEFAULT_LIBRARY_PREFIX,
    suppressed_prefixes: Iterable[str] = DEFAULT_SUPPRESSED_PREFIXES,
    include_empty_rows: bool = False,
    max_workers: int = 1,
    logger: AuditLogger | None = None,
) -> ExportResult:
    """Export the consolidated storage layout of a Hardhat project.

    Reads ``artifacts/build-info`` and the contract artifacts, writes
    ``<output_dir>/output.json``.

    Parameters
    ----------
    project_root : str | Path, optional
        Root of the Hardhat project, by default the current directory.
    artifacts_dir : str | Path | None, optional
        Artifacts directory, by default ``<project_root>/artifacts``.
    output_dir : str | Path, optional
        Output directory inside the project, by default "storage_layout".
    library_prefix : str, optional
        Source prefix of the shared upgradeable library.
    suppressed_prefixes : Iterable[str], optional
        Further source prefixes that are never reported.
    include_empty_rows : bool, optional
        Report contracts with no retained variables, by default False.
    max_workers : int, optional
        Worker threads for per-unit processing, by default 1.
    logger : AuditLogger | None, optional
        Audit logger. If None, no events are written.

    Returns
    -------
    ExportResult
        Export statistics, output file path and the table.

    Raises
    ------
    ExportError
        If the export failed; nothing was written.

    Examples
    --------
        >>> from slotsnap import export_storage_layout
        >>> result = export_storage_layout("my-hardhat-project")
        >>> print(result.output_file)
    """
    from slotsnap.engine import ExportConfig, run_export

    config = ExportConfig(
        project_root=Path(project_root),
        artifacts_dir=Path(artifacts_dir) if artifacts_dir is not None else None,
        output_dir=Path(output_dir),
        library_prefix=library_prefix,
        suppressed_prefixes=tuple(suppressed_prefixes),
        include_empty_rows=include_empty_rows,
        max_workers=max_workers,
    )

    result = run_export(config=config, logger=logger)

    if not result.success:
        raise ExportError(f"Export failed: {result.error_message}", result=result)

    return result
