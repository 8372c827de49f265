"""Report-side models: the consolidated table and its rows."""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

__all__ = [
    "ExclusionSet",
    "ReportedVariable",
    "ConsolidatedRow",
    "ConsolidatedTable",
]

ExclusionSet = frozenset[int]
"""Slot identifiers (``astId``) owned by the shared library in one unit."""


@dataclass(frozen=True)
class ReportedVariable:
    """Display-ready projection of one retained storage slot.

    Attributes
    ----------
    name : str
        Variable label.
    slot : str
        Decimal-encoded storage slot.
    offset : int
        Byte offset inside the slot.
    type : str
        Compiler type reference (e.g. ``t_uint256``).
    source : str
        Source origin of the contract that lists the variable.
    number_of_bytes : str
        Resolved byte width, decimal-encoded.
    """

    name: str
    slot: str
    offset: int
    type: str
    source: str
    number_of_bytes: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to the output JSON shape (key order is significant)."""
        return {
            "name": self.name,
            "slot": self.slot,
            "offset": self.offset,
            "type": self.type,
            "source": self.source,
            "numberOfBytes": self.number_of_bytes,
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "ReportedVariable":
        """Create from the output JSON shape."""
        return ReportedVariable(
            name=data["name"],
            slot=data["slot"],
            offset=data["offset"],
            type=data["type"],
            source=data["source"],
            number_of_bytes=data["numberOfBytes"],
        )


@dataclass(frozen=True)
class ConsolidatedRow:
    """All reported state variables of one contract in one compilation unit."""

    contract_name: str
    state_variables: tuple[ReportedVariable, ...]

    def to_dict(self) -> dict[str, Any]:
        """Convert to the output JSON shape."""
        return {
            "name": self.contract_name,
            "stateVariables": [var.to_dict() for var in self.state_variables],
        }

    @staticmethod
    def from_dict(data: dict[str, Any]) -> "ConsolidatedRow":
        """Create from the output JSON shape."""
        return ConsolidatedRow(
            contract_name=data["name"],
            state_variables=tuple(
                ReportedVariable.from_dict(var) for var in data.get("stateVariables", [])
            ),
        )


@dataclass(frozen=True)
class ConsolidatedTable:
    """Ordered rows: unit-processing order, then catalog order."""

    rows: tuple[ConsolidatedRow, ...] = ()

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[ConsolidatedRow]:
        return iter(self.rows)

    @property
    def variable_count(self) -> int:
        """Total number of reported state variables."""
        return sum(len(row.state_variables) for row in self.rows)

    def to_list(self) -> list[dict[str, Any]]:
        """Convert to the output JSON array."""
        return [row.to_dict() for row in self.rows]

    @staticmethod
    def from_list(data: list[dict[str, Any]]) -> "ConsolidatedTable":
        """Create from the output JSON array."""
        return ConsolidatedTable(rows=tuple(ConsolidatedRow.from_dict(row) for row in data))
