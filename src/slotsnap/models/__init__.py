"""Shared data types for slotsnap.

Build metadata types (decoded from compiler output) live in
slotsnap.models.layout; report types in slotsnap.models.report.
"""

from slotsnap.models.layout import (
    CompilationUnit,
    ContractIdentity,
    SlotEntry,
    StorageLayout,
    TypeDescriptor,
)
from slotsnap.models.report import (
    ConsolidatedRow,
    ConsolidatedTable,
    ExclusionSet,
    ReportedVariable,
)

__all__ = [
    # Build metadata
    "CompilationUnit",
    "ContractIdentity",
    "SlotEntry",
    "StorageLayout",
    "TypeDescriptor",
    # Report
    "ExclusionSet",
    "ReportedVariable",
    "ConsolidatedRow",
    "ConsolidatedTable",
]
