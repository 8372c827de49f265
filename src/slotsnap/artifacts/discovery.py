"""Hardhat artifacts discovery.

Reads the two inputs of the consolidation core from a Hardhat artifacts
directory:

- ``build-info/*.json``: one compilation unit per file
- ``<sourceName>/<ContractName>.json``: one contract artifact per
  compiled contract, used to build the contract catalog
"""

import json
from pathlib import Path
from typing import Any

from slotsnap.errors import LayoutDecodeError
from slotsnap.models import CompilationUnit, ContractIdentity

__all__ = [
    "BUILD_INFO_DIRNAME",
    "find_build_info_paths",
    "find_artifact_paths",
    "load_build_info",
    "load_compilation_units",
    "discover_contract_identities",
]

BUILD_INFO_DIRNAME = "build-info"
ARTIFACT_FORMAT_PREFIX = "hh-sol-artifact"
_DEBUG_SUFFIX = ".dbg.json"


def _check_dir(artifacts_dir: Path) -> None:
    if not artifacts_dir.exists():
        raise FileNotFoundError(f"Artifacts directory not found: {artifacts_dir}")
    if not artifacts_dir.is_dir():
        raise NotADirectoryError(f"Artifacts path is not a directory: {artifacts_dir}")


def _read_json(path: Path) -> Any:
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise LayoutDecodeError(f"invalid JSON: {e}", origin=str(path)) from e


def find_build_info_paths(artifacts_dir: Path) -> list[Path]:
    """List build-info files, sorted by file name.

    Parameters
    ----------
    artifacts_dir : Path
        Hardhat artifacts directory.

    Returns
    -------
    list[Path]
        Build-info paths; empty if the project was never compiled.
    """
    _check_dir(artifacts_dir)
    build_info_dir = artifacts_dir / BUILD_INFO_DIRNAME
    if not build_info_dir.is_dir():
        return []
    return sorted(p for p in build_info_dir.glob("*.json") if p.is_file())


def find_artifact_paths(artifacts_dir: Path) -> list[Path]:
    """List contract artifact files, sorted by path.

    Build-info files and ``*.dbg.json`` debug files are excluded.
    """
    _check_dir(artifacts_dir)
    build_info_dir = artifacts_dir / BUILD_INFO_DIRNAME
    paths = []
    for path in artifacts_dir.rglob("*.json"):
        if not path.is_file() or path.name.endswith(_DEBUG_SUFFIX):
            continue
        if path.is_relative_to(build_info_dir):
            continue
        paths.append(path)
    return sorted(paths)


def load_build_info(path: Path, artifacts_dir: Path | None = None) -> CompilationUnit:
    """Decode one build-info file into a compilation unit.

    Parameters
    ----------
    path : Path
        Build-info file.
    artifacts_dir : Path | None, optional
        If given, the unit origin is the path relative to this directory.

    Returns
    -------
    CompilationUnit
        Decoded unit.

    Raises
    ------
    LayoutDecodeError
        If the file is not valid JSON or not a valid build info.
    """
    origin = path.as_posix()
    if artifacts_dir is not None and path.is_relative_to(artifacts_dir):
        origin = path.relative_to(artifacts_dir).as_posix()
    return CompilationUnit.from_build_info(_read_json(path), origin=origin)


def load_compilation_units(artifacts_dir: Path) -> list[CompilationUnit]:
    """Decode every build-info file of a project, in discovery order."""
    return [load_build_info(p, artifacts_dir) for p in find_build_info_paths(artifacts_dir)]


def discover_contract_identities(artifacts_dir: Path) -> list[ContractIdentity]:
    """Read the identity of every compiled contract from its artifact.

    JSON files that are not Hardhat contract artifacts are ignored.

    Parameters
    ----------
    artifacts_dir : Path
        Hardhat artifacts directory.

    Returns
    -------
    list[ContractIdentity]
        Identities in artifact path order, without duplicates.
    """
    identities: dict[ContractIdentity, None] = {}
    for path in find_artifact_paths(artifacts_dir):
        data = _read_json(path)
        if not isinstance(data, dict):
            continue
        if not str(data.get("_format", "")).startswith(ARTIFACT_FORMAT_PREFIX):
            continue
        try:
            identity = ContractIdentity.from_dict(data)
        except LayoutDecodeError as e:
            raise LayoutDecodeError(str(e), origin=str(path)) from e
        identities[identity] = None
    return list(identities)
