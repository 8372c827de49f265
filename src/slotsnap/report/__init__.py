"""Output writer and terminal presenter for the consolidated table."""

from slotsnap.report.presenter import COLUMNS, echo_table, render_table
from slotsnap.report.writer import (
    OUTPUT_FILENAME,
    read_output_json,
    table_to_json,
    write_output_json,
)

__all__ = [
    "COLUMNS",
    "OUTPUT_FILENAME",
    "echo_table",
    "read_output_json",
    "render_table",
    "table_to_json",
    "write_output_json",
]
