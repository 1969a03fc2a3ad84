"""Wide listing: names in a column-major grid sized to the terminal."""

from __future__ import annotations

import shutil

from ..ansi import pad_to_width
from ..file_model import FileInfo
from ..theme import paint
from .common import ResultsDisplayer, name_style
from .types import NodeSummary


def wide_label(entry: FileInfo) -> str:
    return f"[{entry.name}]" if entry.is_dir else entry.name


def column_layout(name_width: int, console_width: int) -> tuple[int, int]:
    """Return ``(columns, column_width)`` for names up to ``name_width`` cells."""
    if name_width + 1 > console_width:
        return 1, console_width
    columns = console_width // (name_width + 1)
    return columns, console_width // columns


def column_major_order(total: int, columns: int) -> list[list[int]]:
    """Rows of item indices laid out top-to-bottom, then left-to-right.

    The first ``total % columns`` columns carry one extra item.
    """
    if total <= 0 or columns <= 0:
        return []
    rows = -(-total // columns)
    extra = total % columns
    full_rows = rows - 1 if extra else rows
    grid: list[list[int]] = []
    for row in range(rows):
        cells: list[int] = []
        for col in range(columns):
            if row * columns + col >= total:
                break
            index = row + col * full_rows + min(col, extra)
            if index >= total:
                break
            cells.append(index)
        grid.append(cells)
    return grid


class WideDisplayer(ResultsDisplayer):
    def console_width(self) -> int:
        if self.width is not None:
            return max(1, self.width)
        return shutil.get_terminal_size((80, 24)).columns

    def render_matches(self, summary: NodeSummary) -> None:
        matches = summary.matches
        if not matches:
            return
        labels = [wide_label(entry) for entry in matches]
        columns, column_width = column_layout(summary.counters.largest_name_width, self.console_width())
        for row in column_major_order(len(matches), columns):
            parts: list[str] = []
            for index in row:
                text = paint(self.theme, name_style(self.theme, matches[index]), labels[index])
                parts.append(pad_to_width(text, column_width))
            self.line("".join(parts).rstrip(" "))


__all__ = ["WideDisplayer", "column_layout", "column_major_order", "wide_label"]
