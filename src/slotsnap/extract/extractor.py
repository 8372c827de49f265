"""Second pass: project-owned state variables of one compilation unit."""

from collections.abc import Iterable

from slotsnap.extract.namespace import LibraryNamespace
from slotsnap.extract.resolver import resolve_byte_width
from slotsnap.models import (
    CompilationUnit,
    ConsolidatedRow,
    ContractIdentity,
    ExclusionSet,
    ReportedVariable,
)

__all__ = ["extract_rows"]


def extract_rows(
    unit: CompilationUnit,
    catalog: Iterable[ContractIdentity],
    exclusion_set: ExclusionSet,
    namespace: LibraryNamespace,
    *,
    include_empty_rows: bool = False,
) -> tuple[ConsolidatedRow, ...]:
    """Extract the reportable state variables of ``unit``.

    Contracts from the suppressed namespace are skipped entirely. For every
    other contract with a layout in this unit, entries whose slot
    identifier is in ``exclusion_set`` are dropped; this removes storage
    inherited from the shared library.

    Parameters
    ----------
    unit : CompilationUnit
        Compilation unit to read.
    catalog : Iterable[ContractIdentity]
        Contract catalog, in processing order.
    exclusion_set : ExclusionSet
        Library slot identifiers of this same unit.
    namespace : LibraryNamespace
        Shared-library namespace.
    include_empty_rows : bool, optional
        Emit a row for contracts whose layout has no retained entries,
        by default False.

    Returns
    -------
    tuple[ConsolidatedRow, ...]
        One row per contract, in catalog order.

    Raises
    ------
    ResolutionFailure
        If a retained entry references an unknown type.
    """
    rows: list[ConsolidatedRow] = []
    for identity in catalog:
        if namespace.is_suppressed(identity.source_origin):
            continue
        layout = unit.layout_for(identity)
        if layout is None:
            continue

        variables = tuple(
            ReportedVariable(
                name=entry.label,
                slot=entry.slot,
                offset=entry.offset,
                type=entry.type_ref,
                source=identity.source_origin,
                number_of_bytes=resolve_byte_width(
                    layout,
                    entry.type_ref,
                    identity=identity,
                    unit_origin=unit.origin,
                ),
            )
            for entry in layout.entries
            if entry.ast_id not in exclusion_set
        )

        if variables or include_empty_rows:
            rows.append(
                ConsolidatedRow(contract_name=identity.declared_name, state_variables=variables)
            )

    return tuple(rows)
