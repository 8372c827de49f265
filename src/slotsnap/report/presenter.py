"""Terminal rendering of the consolidated table."""

import click

from slotsnap.models import ConsolidatedTable

__all__ = ["COLUMNS", "render_table", "echo_table"]

COLUMNS = ("Contract", "State variable", "Slot", "Offset", "Type", "Source", "Bytes")


def _table_cells(table: ConsolidatedTable) -> list[list[tuple[str, ...]]]:
    """Cell text grouped by row."""
    return [
        [
            (
                row.contract_name,
                var.name,
                var.slot,
                str(var.offset),
                var.type,
                var.source,
                var.number_of_bytes,
            )
            for var in row.state_variables
        ]
        for row in table.rows
    ]


def render_table(table: ConsolidatedTable) -> str:
    """Render the table as fixed-width text.

    Each state variable is one line; contracts are separated by a rule.
    Contracts without reported variables get a single line with empty cells.

    Parameters
    ----------
    table : ConsolidatedTable
        Table to render.

    Returns
    -------
    str
        Rendered table without trailing newline.
    """
    if not table.rows:
        return "No state variables to report."

    groups = _table_cells(table)
    for group, row in zip(groups, table.rows, strict=True):
        if not group:
            group.append((row.contract_name,) + ("",) * (len(COLUMNS) - 1))

    widths = [len(title) for title in COLUMNS]
    for group in groups:
        for cells in group:
            widths = [max(w, len(c)) for w, c in zip(widths, cells, strict=True)]

    def fmt(cells: tuple[str, ...]) -> str:
        return "| " + " | ".join(c.ljust(w) for c, w in zip(cells, widths, strict=True)) + " |"

    rule = "+" + "+".join("-" * (w + 2) for w in widths) + "+"
    lines = [rule, fmt(COLUMNS), rule]
    for group in groups:
        lines.extend(fmt(cells) for cells in group)
        lines.append(rule)
    return "\n".join(lines)


def echo_table(table: ConsolidatedTable) -> None:
    """Print the rendered table to stdout."""
    click.echo(render_table(table))
