"""Consolidated storage layout reports for upgradeable Solidity projects.

This package provides:
- Data models (slotsnap.models) — build metadata and report types
- Artifacts (slotsnap.artifacts) — Hardhat build-info and artifact reading
- Extract (slotsnap.extract) — catalog, exclusion and extraction passes
- Report (slotsnap.report) — JSON output and terminal table
- Engine (slotsnap.engine) — export orchestration
- Audit (slotsnap.audit) — structured event logging
- CLI (slotsnap.cli) — command-line interface
- Public API (slotsnap.api) — high-level convenience functions
"""

__version__ = "0.1.0"
__license__ = "MIT"

from slotsnap.api import ExportError, consolidate, export_storage_layout
from slotsnap.errors import (
    ConfigurationError,
    LayoutDecodeError,
    ResolutionFailure,
    SlotsnapError,
)
from slotsnap.models import ConsolidatedTable, ContractIdentity

__all__ = [
    "__version__",
    "__license__",
    "ConsolidatedTable",
    "ContractIdentity",
    "consolidate",
    "export_storage_layout",
    "ConfigurationError",
    "ExportError",
    "LayoutDecodeError",
    "ResolutionFailure",
    "SlotsnapError",
]
