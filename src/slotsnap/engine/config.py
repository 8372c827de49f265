"""Export configuration and result dataclasses."""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from slotsnap.extract.namespace import (
    DEFAULT_LIBRARY_PREFIX,
    DEFAULT_SUPPRESSED_PREFIXES,
    LibraryNamespace,
)
from slotsnap.models import ConsolidatedTable

DEFAULT_OUTPUT_DIR = Path("storage_layout")
DEFAULT_ARTIFACTS_DIRNAME = "artifacts"


@dataclass
class ExportConfig:
    """Configuration for a storage layout export.

    Relative ``artifacts_dir`` and ``output_dir`` paths are interpreted
    against ``project_root``.

    Attributes
    ----------
    project_root : Path
        Root of the Hardhat project.
    artifacts_dir : Path | None
        Hardhat artifacts directory. If None, ``<project_root>/artifacts``.
    output_dir : Path
        Directory receiving ``output.json`` (default: storage_layout).
        Must resolve inside ``project_root``.
    library_prefix : str
        Source prefix of the shared upgradeable library.
    suppressed_prefixes : tuple[str, ...]
        Further source prefixes that are never reported.
    include_empty_rows : bool
        Report contracts whose layout has no retained variables.
    max_workers : int
        Worker threads for per-unit processing (1 = sequential).
    """

    project_root: Path = Path(".")
    artifacts_dir: Path | None = None
    output_dir: Path = DEFAULT_OUTPUT_DIR
    library_prefix: str = DEFAULT_LIBRARY_PREFIX
    suppressed_prefixes: tuple[str, ...] = DEFAULT_SUPPRESSED_PREFIXES
    include_empty_rows: bool = False
    max_workers: int = 1

    def __post_init__(self) -> None:
        """Normalize paths and validate."""
        self.project_root = Path(self.project_root)
        self.output_dir = Path(self.output_dir)
        if self.artifacts_dir is None:
            self.artifacts_dir = Path(DEFAULT_ARTIFACTS_DIRNAME)
        self.artifacts_dir = Path(self.artifacts_dir)
        self.suppressed_prefixes = tuple(self.suppressed_prefixes)

        if not self.library_prefix:
            raise ValueError("library_prefix must not be empty")

        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")

    @property
    def artifacts_path(self) -> Path:
        """Absolute artifacts directory."""
        artifacts_dir = self.artifacts_dir or Path(DEFAULT_ARTIFACTS_DIRNAME)
        return (self.project_root / artifacts_dir).resolve()

    @property
    def output_path(self) -> Path:
        """Absolute output directory."""
        return (self.project_root / self.output_dir).resolve()

    @property
    def namespace(self) -> LibraryNamespace:
        """Shared-library namespace built from the prefixes."""
        return LibraryNamespace(
            prefix=self.library_prefix,
            suppressed_prefixes=self.suppressed_prefixes,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "project_root": str(self.project_root),
            "artifacts_dir": str(self.artifacts_dir),
            "output_dir": str(self.output_dir),
            "library_prefix": self.library_prefix,
            "suppressed_prefixes": list(self.suppressed_prefixes),
            "include_empty_rows": self.include_empty_rows,
            "max_workers": self.max_workers,
        }


@dataclass
class ExportResult:
    """Results from an export run.

    Attributes
    ----------
    success : bool
        Whether the export completed and ``output.json`` was written.
    units_processed : int
        Compilation units (build-info files) read.
    contracts_catalogued : int
        Contract identities in the catalog.
    rows : int
        Rows in the consolidated table.
    variables : int
        State variables across all rows.
    output_file : str | None
        Path of ``output.json`` if written.
    error_message : str | None
        Error message if failed.
    table : ConsolidatedTable | None
        The consolidated table on success.
    """

    success: bool
    units_processed: int = 0
    contracts_catalogued: int = 0
    rows: int = 0
    variables: int = 0
    output_file: str | None = None
    error_message: str | None = None
    table: ConsolidatedTable | None = field(default=None, repr=False)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary (without the table itself)."""
        return {
            "success": self.success,
            "units_processed": self.units_processed,
            "contracts_catalogued": self.contracts_catalogued,
            "rows": self.rows,
            "variables": self.variables,
            "output_file": self.output_file,
            "error_message": self.error_message,
        }
