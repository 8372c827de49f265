"""Pytest configuration and fixtures for test suite."""

import json
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

# Add src directory to path for imports
SRC_PATH = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(SRC_PATH))

from slotsnap.models import CompilationUnit, ContractIdentity  # noqa: E402

_UINT256 = {"encoding": "inplace", "label": "uint256", "numberOfBytes": "32"}
_ADDRESS = {"encoding": "inplace", "label": "address", "numberOfBytes": "20"}
_BOOL = {"encoding": "inplace", "label": "bool", "numberOfBytes": "1"}

DEFAULT_TYPES: dict[str, dict[str, str]] = {
    "t_uint256": _UINT256,
    "t_address": _ADDRESS,
    "t_bool": _BOOL,
}


def slot(
    ast_id: int,
    label: str,
    slot_no: int = 0,
    offset: int = 0,
    type_ref: str = "t_uint256",
) -> dict[str, Any]:
    """Storage entry as emitted in ``storageLayout.storage``."""
    return {
        "astId": ast_id,
        "contract": "",
        "label": label,
        "offset": offset,
        "slot": str(slot_no),
        "type": type_ref,
    }


@pytest.fixture
def make_build_info() -> Callable[..., dict[str, Any]]:
    """Factory for build-info documents.

    ``contracts`` maps ``(source, name)`` to a list of storage entries, or
    to None for a contract compiled without a storage layout.
    """

    def _factory(
        contracts: dict[tuple[str, str], list[dict[str, Any]] | None],
        *,
        types: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        output: dict[str, dict[str, Any]] = {}
        for (source, name), entries in contracts.items():
            compiled: dict[str, Any] = {"abi": []}
            if entries is not None:
                compiled["storageLayout"] = {
                    "storage": entries,
                    "types": dict(DEFAULT_TYPES if types is None else types),
                }
            output.setdefault(source, {})[name] = compiled
        return {
            "_format": "hh-sol-build-info-1",
            "solcVersion": "0.8.20",
            "solcLongVersion": "0.8.20+commit.a1b79de6",
            "input": {"language": "Solidity", "sources": {}},
            "output": {"contracts": output, "sources": {}},
        }

    return _factory


@pytest.fixture
def make_unit(
    make_build_info: Callable[..., dict[str, Any]],
) -> Callable[..., CompilationUnit]:
    """Factory for decoded compilation units."""

    def _factory(
        contracts: dict[tuple[str, str], list[dict[str, Any]] | None],
        *,
        origin: str = "build-info/unit.json",
        types: dict[str, Any] | None = None,
    ) -> CompilationUnit:
        return CompilationUnit.from_build_info(
            make_build_info(contracts, types=types),
            origin=origin,
        )

    return _factory


@pytest.fixture
def write_project(tmp_path: Path) -> Callable[..., Path]:
    """Write a minimal Hardhat project tree and return its root.

    Creates ``artifacts/build-info/<id>.json`` for every build info and a
    contract artifact plus ``.dbg.json`` for every identity.
    """

    def _factory(
        build_infos: dict[str, dict[str, Any]],
        identities: list[ContractIdentity],
    ) -> Path:
        root = tmp_path / "project"
        artifacts = root / "artifacts"
        build_info_dir = artifacts / "build-info"
        build_info_dir.mkdir(parents=True, exist_ok=True)

        for build_id, doc in build_infos.items():
            (build_info_dir / f"{build_id}.json").write_text(json.dumps(doc), encoding="utf-8")

        for identity in identities:
            contract_dir = artifacts / identity.source_origin
            contract_dir.mkdir(parents=True, exist_ok=True)
            artifact = {
                "_format": "hh-sol-artifact-1",
                "contractName": identity.declared_name,
                "sourceName": identity.source_origin,
                "abi": [],
                "bytecode": "0x",
            }
            (contract_dir / f"{identity.declared_name}.json").write_text(
                json.dumps(artifact), encoding="utf-8"
            )
            (contract_dir / f"{identity.declared_name}.dbg.json").write_text(
                json.dumps({"_format": "hh-sol-dbg-1", "buildInfo": "../build-info/x.json"}),
                encoding="utf-8",
            )
        return root

    return _factory


@pytest.fixture
def make_slot() -> Callable[..., dict[str, Any]]:
    """Factory for ``storageLayout.storage`` entries."""
    return slot
