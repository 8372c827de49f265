"""Storage layout consolidation core.

Pure, synchronous functions that turn decoded compilation units and a
contract catalog into a consolidated table. Nothing in this package
touches the filesystem.

Main entry points:
- build_catalog: Deterministic contract processing order
- build_exclusion_set: Library slot identifiers of one unit
- extract_rows: Project-owned state variables of one unit
- assemble_table: Full consolidated table
"""

from slotsnap.extract.assembler import (
    UnitExtraction,
    assemble_table,
    assemble_units,
    process_unit,
)
from slotsnap.extract.catalog import build_catalog, locale_sort_key
from slotsnap.extract.exclusion import build_exclusion_set
from slotsnap.extract.extractor import extract_rows
from slotsnap.extract.namespace import (
    DEFAULT_LIBRARY_PREFIX,
    DEFAULT_SUPPRESSED_PREFIXES,
    LibraryNamespace,
)
from slotsnap.extract.resolver import resolve_byte_width

__all__ = [
    "DEFAULT_LIBRARY_PREFIX",
    "DEFAULT_SUPPRESSED_PREFIXES",
    "LibraryNamespace",
    "UnitExtraction",
    "assemble_table",
    "assemble_units",
    "build_catalog",
    "build_exclusion_set",
    "extract_rows",
    "locale_sort_key",
    "process_unit",
    "resolve_byte_width",
]
