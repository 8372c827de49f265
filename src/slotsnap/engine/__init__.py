"""Export orchestration engine.

This package provides the main entry point for running a complete
storage layout export, including configuration and result types.
"""

from slotsnap.engine.config import ExportConfig, ExportResult
from slotsnap.engine.runner import prepare_output_dir, run_export

__all__ = [
    "ExportConfig",
    "ExportResult",
    "prepare_output_dir",
    "run_export",
]
