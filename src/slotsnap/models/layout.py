"""Typed entities decoded from compiler build metadata.

Build-info documents are loosely-typed JSON. Everything the consolidation
core touches is decoded here into immutable dataclasses, so that a missing
layout (``None``) and a malformed one (:class:`LayoutDecodeError`) stay
distinguishable.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from slotsnap.errors import LayoutDecodeError

__all__ = [
    "ContractIdentity",
    "TypeDescriptor",
    "SlotEntry",
    "StorageLayout",
    "CompilationUnit",
]


def _require(data: Mapping[str, Any], key: str, kind: type | tuple[type, ...], where: str) -> Any:
    """Fetch a required key and check its JSON type."""
    if key not in data:
        raise LayoutDecodeError(f"{where}: missing required field {key!r}")
    value = data[key]
    # bool is an int subclass; JSON true/false are never valid here
    if isinstance(value, bool) or not isinstance(value, kind):
        raise LayoutDecodeError(f"{where}: field {key!r} has unexpected value {value!r}")
    return value


@dataclass(frozen=True, order=True)
class ContractIdentity:
    """Declaration site of a contract.

    ``declared_name`` alone is not unique across a project; the same name
    can be declared in several source files.

    Attributes
    ----------
    source_origin : str
        Source unit name as given to the compiler (e.g. ``contracts/Foo.sol``).
    declared_name : str
        Contract name declared in that source.
    """

    source_origin: str
    declared_name: str

    @property
    def fully_qualified_name(self) -> str:
        """Return ``source:Name`` as used by Hardhat."""
        return f"{self.source_origin}:{self.declared_name}"

    @staticmethod
    def from_dict(data: Mapping[str, Any]) -> "ContractIdentity":
        """Create identity from a Hardhat artifact or catalog entry.

        Accepts both ``sourceName``/``contractName`` (artifact files) and
        ``sourceOrigin``/``declaredName`` keys.
        """
        source = data.get("sourceName", data.get("sourceOrigin"))
        name = data.get("contractName", data.get("declaredName"))
        if not isinstance(source, str) or not isinstance(name, str):
            raise LayoutDecodeError(f"Invalid contract identity: {dict(data)!r}")
        return ContractIdentity(source_origin=source, declared_name=name)


@dataclass(frozen=True)
class TypeDescriptor:
    """Compiler-emitted description of one storage type.

    Only the byte width is used by the report; ``label`` and ``encoding``
    are kept for diagnostics.
    """

    type_ref: str
    number_of_bytes: str
    label: str | None = None
    encoding: str | None = None

    @staticmethod
    def from_dict(type_ref: str, data: Any) -> "TypeDescriptor":
        """Decode one entry of ``storageLayout.types``."""
        where = f"type {type_ref!r}"
        if not isinstance(data, Mapping):
            raise LayoutDecodeError(f"{where}: expected an object, got {data!r}")
        number_of_bytes = _require(data, "numberOfBytes", (str, int), where)
        return TypeDescriptor(
            type_ref=type_ref,
            number_of_bytes=str(number_of_bytes),
            label=data.get("label"),
            encoding=data.get("encoding"),
        )


@dataclass(frozen=True)
class SlotEntry:
    """One state variable as listed in ``storageLayout.storage``.

    Attributes
    ----------
    ast_id : int
        Slot identifier. Unique only within its compilation unit.
    label : str
        Variable name.
    slot : str
        Decimal-encoded storage slot.
    offset : int
        Byte offset inside the slot.
    type_ref : str
        Key into the layout's type dictionary.
    contract : str | None
        Declaring contract as reported by the compiler (``source:Name``).
    """

    ast_id: int
    label: str
    slot: str
    offset: int
    type_ref: str
    contract: str | None = None

    @staticmethod
    def from_dict(data: Any, where: str = "storage entry") -> "SlotEntry":
        """Decode one entry of ``storageLayout.storage``."""
        if not isinstance(data, Mapping):
            raise LayoutDecodeError(f"{where}: expected an object, got {data!r}")
        slot = _require(data, "slot", (str, int), where)
        return SlotEntry(
            ast_id=_require(data, "astId", int, where),
            label=_require(data, "label", str, where),
            slot=str(slot),
            offset=_require(data, "offset", int, where),
            type_ref=_require(data, "type", str, where),
            contract=data.get("contract"),
        )


@dataclass(frozen=True)
class StorageLayout:
    """Storage layout of one contract within one compilation unit."""

    entries: tuple[SlotEntry, ...] = ()
    types: Mapping[str, TypeDescriptor] = field(default_factory=lambda: MappingProxyType({}))

    @property
    def ast_ids(self) -> frozenset[int]:
        """Slot identifiers declared in this layout."""
        return frozenset(entry.ast_id for entry in self.entries)

    @staticmethod
    def from_dict(data: Any, where: str = "storageLayout") -> "StorageLayout":
        """Decode a ``storageLayout`` object.

        ``types`` may be ``null`` in compiler output when the contract has
        no state variables.
        """
        if not isinstance(data, Mapping):
            raise LayoutDecodeError(f"{where}: expected an object, got {data!r}")
        raw_storage = data.get("storage", [])
        if not isinstance(raw_storage, list):
            raise LayoutDecodeError(f"{where}: 'storage' must be a list")
        raw_types = data.get("types") or {}
        if not isinstance(raw_types, Mapping):
            raise LayoutDecodeError(f"{where}: 'types' must be an object")

        entries = tuple(
            SlotEntry.from_dict(item, where=f"{where}.storage[{i}]")
            for i, item in enumerate(raw_storage)
        )
        types = {ref: TypeDescriptor.from_dict(ref, desc) for ref, desc in raw_types.items()}
        return StorageLayout(entries=entries, types=MappingProxyType(types))


@dataclass(frozen=True)
class CompilationUnit:
    """Full output of one compiler invocation.

    Attributes
    ----------
    origin : str
        Identifier of the unit, usually the build-info path relative to the
        artifacts directory.
    layouts : Mapping[ContractIdentity, StorageLayout | None]
        Storage layout of every compiled contract; ``None`` when the
        compiler emitted no ``storageLayout`` for it.
    solc_version : str | None
        Compiler version recorded in the build info.
    """

    origin: str
    layouts: Mapping[ContractIdentity, StorageLayout | None] = field(
        default_factory=lambda: MappingProxyType({})
    )
    solc_version: str | None = None

    def layout_for(self, identity: ContractIdentity) -> StorageLayout | None:
        """Return the layout of ``identity`` in this unit, or None if absent."""
        return self.layouts.get(identity)

    @property
    def identities(self) -> tuple[ContractIdentity, ...]:
        """Contracts compiled in this unit."""
        return tuple(self.layouts)

    @staticmethod
    def from_build_info(data: Any, origin: str) -> "CompilationUnit":
        """Decode a Hardhat build-info document.

        Parameters
        ----------
        data : Any
            Parsed JSON of ``artifacts/build-info/<id>.json``.
        origin : str
            Identifier recorded on the unit.

        Returns
        -------
        CompilationUnit
            Decoded unit.

        Raises
        ------
        LayoutDecodeError
            If the document or any present layout is malformed.
        """
        if not isinstance(data, Mapping):
            raise LayoutDecodeError("build info must be a JSON object", origin=origin)
        output = data.get("output", {})
        if not isinstance(output, Mapping):
            raise LayoutDecodeError("'output' must be an object", origin=origin)
        contracts = output.get("contracts", {})
        if not isinstance(contracts, Mapping):
            raise LayoutDecodeError("'output.contracts' must be an object", origin=origin)

        layouts: dict[ContractIdentity, StorageLayout | None] = {}
        for source_origin, by_name in contracts.items():
            if not isinstance(by_name, Mapping):
                raise LayoutDecodeError(
                    f"contracts of {source_origin!r} must be an object", origin=origin
                )
            for declared_name, compiled in by_name.items():
                identity = ContractIdentity(source_origin, declared_name)
                raw_layout = compiled.get("storageLayout") if isinstance(compiled, Mapping) else None
                if raw_layout is None:
                    layouts[identity] = None
                    continue
                try:
                    layouts[identity] = StorageLayout.from_dict(
                        raw_layout, where=identity.fully_qualified_name
                    )
                except LayoutDecodeError as e:
                    raise LayoutDecodeError(str(e), origin=origin) from e

        solc_version = data.get("solcLongVersion") or data.get("solcVersion")
        return CompilationUnit(
            origin=origin,
            layouts=MappingProxyType(layouts),
            solc_version=solc_version,
        )
