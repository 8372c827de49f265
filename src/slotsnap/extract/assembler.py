"""Assemble per-unit extractions into the consolidated table."""

from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

from slotsnap.extract.exclusion import build_exclusion_set
from slotsnap.extract.extractor import extract_rows
from slotsnap.extract.namespace import LibraryNamespace
from slotsnap.models import (
    CompilationUnit,
    ConsolidatedRow,
    ConsolidatedTable,
    ContractIdentity,
    ExclusionSet,
)

__all__ = ["UnitExtraction", "process_unit", "assemble_units", "assemble_table"]


@dataclass(frozen=True)
class UnitExtraction:
    """Result of both passes over one compilation unit.

    Attributes
    ----------
    origin : str
        Compilation unit identifier.
    exclusion_set : ExclusionSet
        Library slot identifiers found in the unit.
    rows : tuple[ConsolidatedRow, ...]
        Extracted rows in catalog order.
    """

    origin: str
    exclusion_set: ExclusionSet
    rows: tuple[ConsolidatedRow, ...]


def process_unit(
    unit: CompilationUnit,
    catalog: Sequence[ContractIdentity],
    namespace: LibraryNamespace,
    *,
    include_empty_rows: bool = False,
) -> UnitExtraction:
    """Run the exclusion pass, then the extraction pass, on one unit."""
    exclusion_set = build_exclusion_set(unit, catalog, namespace)
    rows = extract_rows(
        unit,
        catalog,
        exclusion_set,
        namespace,
        include_empty_rows=include_empty_rows,
    )
    return UnitExtraction(origin=unit.origin, exclusion_set=exclusion_set, rows=rows)


def assemble_units(
    units: Iterable[CompilationUnit],
    catalog: Iterable[ContractIdentity],
    namespace: LibraryNamespace | None = None,
    *,
    max_workers: int = 1,
    include_empty_rows: bool = False,
) -> tuple[UnitExtraction, ...]:
    """Process every unit and return the extractions in input order.

    Units share no state, so with ``max_workers > 1`` they are processed
    in a thread pool. Results are placed by the unit's input index, never
    by completion order.

    Parameters
    ----------
    units : Iterable[CompilationUnit]
        Compilation units, in output order.
    catalog : Iterable[ContractIdentity]
        Contract catalog, in processing order.
    namespace : LibraryNamespace | None, optional
        Shared-library namespace. If None, uses the OpenZeppelin default.
    max_workers : int, optional
        Number of worker threads, by default 1 (sequential).
    include_empty_rows : bool, optional
        Forwarded to :func:`extract_rows`.

    Returns
    -------
    tuple[UnitExtraction, ...]
        One extraction per unit.

    Raises
    ------
    ResolutionFailure
        From the first unit (in input order) that fails.
    """
    if max_workers < 1:
        raise ValueError(f"max_workers must be >= 1, got {max_workers}")

    unit_list = list(units)
    catalog_tuple = tuple(catalog)
    if namespace is None:
        namespace = LibraryNamespace()

    if max_workers == 1 or len(unit_list) < 2:
        return tuple(
            process_unit(unit, catalog_tuple, namespace, include_empty_rows=include_empty_rows)
            for unit in unit_list
        )

    results: list[UnitExtraction | None] = [None] * len(unit_list)
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            idx: executor.submit(
                process_unit,
                unit,
                catalog_tuple,
                namespace,
                include_empty_rows=include_empty_rows,
            )
            for idx, unit in enumerate(unit_list)
        }
        # Collected in input order so the first failing unit is the one reported
        for idx in range(len(unit_list)):
            results[idx] = futures[idx].result()

    return tuple(r for r in results if r is not None)


def assemble_table(
    units: Iterable[CompilationUnit],
    catalog: Iterable[ContractIdentity],
    namespace: LibraryNamespace | None = None,
    *,
    max_workers: int = 1,
    include_empty_rows: bool = False,
) -> ConsolidatedTable:
    """Build the consolidated table from all compilation units.

    Rows are concatenated in unit order, then catalog order. A contract
    compiled in several units yields one row per unit; rows are not merged.
    Any failure aborts the whole assembly.

    Examples
    --------
        >>> from slotsnap.extract import assemble_table, build_catalog
        >>> table = assemble_table(units, build_catalog(identities))
        >>> [row.contract_name for row in table]
        ['Foo']
    """
    extractions = assemble_units(
        units,
        catalog,
        namespace,
        max_workers=max_workers,
        include_empty_rows=include_empty_rows,
    )
    return ConsolidatedTable(rows=tuple(row for ext in extractions for row in ext.rows))
