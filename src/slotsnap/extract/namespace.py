"""Shared upgradeable-library namespace."""

from dataclasses import dataclass

__all__ = [
    "DEFAULT_LIBRARY_PREFIX",
    "DEFAULT_SUPPRESSED_PREFIXES",
    "LibraryNamespace",
]

DEFAULT_LIBRARY_PREFIX = "@openzeppelin/contracts-upgradeable"
DEFAULT_SUPPRESSED_PREFIXES: tuple[str, ...] = ("@openzeppelin",)


@dataclass(frozen=True)
class LibraryNamespace:
    """Source-origin prefixes of the shared library.

    Attributes
    ----------
    prefix : str
        Origins starting with this prefix are library contracts; their slot
        identifiers form each unit's exclusion set.
    suppressed_prefixes : tuple[str, ...]
        Additional origins whose contracts are never reported, even though
        their slots are not added to the exclusion set.
    """

    prefix: str = DEFAULT_LIBRARY_PREFIX
    suppressed_prefixes: tuple[str, ...] = DEFAULT_SUPPRESSED_PREFIXES

    def __post_init__(self) -> None:
        """Validate prefixes."""
        if not self.prefix:
            raise ValueError("library prefix must not be empty")
        if any(not p for p in self.suppressed_prefixes):
            raise ValueError("suppressed prefixes must not be empty strings")
        object.__setattr__(self, "suppressed_prefixes", tuple(self.suppressed_prefixes))

    def is_library(self, source_origin: str) -> bool:
        """Return True if the origin belongs to the shared library."""
        return source_origin.startswith(self.prefix)

    def is_suppressed(self, source_origin: str) -> bool:
        """Return True if contracts from this origin must not be reported."""
        return self.is_library(source_origin) or source_origin.startswith(
            self.suppressed_prefixes
        )
