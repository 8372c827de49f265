"""Reading compiler artifacts from a Hardhat project.

Main entry points:
- load_compilation_units: Decode every build-info file
- discover_contract_identities: Contract identities for the catalog
"""

from slotsnap.artifacts.discovery import (
    BUILD_INFO_DIRNAME,
    discover_contract_identities,
    find_artifact_paths,
    find_build_info_paths,
    load_build_info,
    load_compilation_units,
)

__all__ = [
    "BUILD_INFO_DIRNAME",
    "discover_contract_identities",
    "find_artifact_paths",
    "find_build_info_paths",
    "load_build_info",
    "load_compilation_units",
]
