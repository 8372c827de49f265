"""JSON output of the consolidated table."""

import json
from pathlib import Path

from slotsnap.models import ConsolidatedTable

__all__ = ["OUTPUT_FILENAME", "table_to_json", "write_output_json", "read_output_json"]

OUTPUT_FILENAME = "output.json"


def table_to_json(table: ConsolidatedTable) -> str:
    """Serialize the table as a 2-space indented JSON array.

    Keys keep their schema order (``name``, ``slot``, ``offset``, ...)
    rather than being sorted, so output is identical across runs.
    """
    return json.dumps(table.to_list(), indent=2, ensure_ascii=False)


def write_output_json(table: ConsolidatedTable, output_dir: Path) -> Path:
    """Write ``output.json`` into ``output_dir``.

    Parameters
    ----------
    table : ConsolidatedTable
        Table to write.
    output_dir : Path
        Existing output directory.

    Returns
    -------
    Path
        Path of the written file.
    """
    output_path = output_dir / OUTPUT_FILENAME
    with output_path.open("w", encoding="utf-8", newline="\n") as f:
        f.write(table_to_json(table))
    return output_path


def read_output_json(path: Path) -> ConsolidatedTable:
    """Load a table previously written by :func:`write_output_json`."""
    with path.open("r", encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array in {path}")
    return ConsolidatedTable.from_list(data)
