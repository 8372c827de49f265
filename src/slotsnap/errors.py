"""Exception hierarchy for slotsnap.

Every failure raised by the consolidation core or by its collaborators
derives from :class:`SlotsnapError`, so callers can treat any of them as
"no table produced".
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from slotsnap.models import ContractIdentity

__all__ = [
    "SlotsnapError",
    "ResolutionFailure",
    "LayoutDecodeError",
    "ConfigurationError",
]


class SlotsnapError(Exception):
    """Base class for all slotsnap errors."""


class ResolutionFailure(SlotsnapError):
    """Raised when a state variable references an unknown type descriptor.

    Attributes
    ----------
    type_ref : str
        Type reference missing from the layout's type dictionary.
    identity : ContractIdentity
        Contract whose layout lists the offending variable.
    unit_origin : str | None
        Compilation unit the layout was read from.
    """

    def __init__(
        self,
        type_ref: str,
        identity: ContractIdentity,
        unit_origin: str | None = None,
    ) -> None:
        self.type_ref = type_ref
        self.identity = identity
        self.unit_origin = unit_origin
        where = f" in compilation unit {unit_origin}" if unit_origin else ""
        super().__init__(
            f"Type {type_ref!r} referenced by {identity.fully_qualified_name}"
            f"{where} has no descriptor in the storage layout"
        )


class LayoutDecodeError(SlotsnapError):
    """Raised when build metadata is present but malformed.

    A missing ``storageLayout`` is not an error; this exception covers
    layouts and documents that exist but do not match the expected shape.
    """

    def __init__(self, message: str, origin: str | None = None) -> None:
        super().__init__(f"{origin}: {message}" if origin else message)
        self.origin = origin


class ConfigurationError(SlotsnapError):
    """Raised when the export configuration is unusable."""
