"""First pass: slot identifiers owned by the shared library."""

from collections.abc import Iterable

from slotsnap.extract.namespace import LibraryNamespace
from slotsnap.models import CompilationUnit, ContractIdentity, ExclusionSet

__all__ = ["build_exclusion_set"]


def build_exclusion_set(
    unit: CompilationUnit,
    catalog: Iterable[ContractIdentity],
    namespace: LibraryNamespace,
) -> ExclusionSet:
    """Collect the slot identifiers of every library contract in ``unit``.

    The result is only meaningful for ``unit``: slot identifiers are
    assigned per compiler invocation and must never be reused for another
    unit.

    Parameters
    ----------
    unit : CompilationUnit
        Compilation unit to scan.
    catalog : Iterable[ContractIdentity]
        Contract catalog.
    namespace : LibraryNamespace
        Shared-library namespace.

    Returns
    -------
    ExclusionSet
        Slot identifiers declared by library contracts in this unit.
    """
    excluded: set[int] = set()
    for identity in catalog:
        if not namespace.is_library(identity.source_origin):
            continue
        layout = unit.layout_for(identity)
        if layout is None:
            continue
        excluded.update(layout.ast_ids)
    return frozenset(excluded)
