"""Normal listing: one row per entry with date, attributes and size."""

from __future__ import annotations

from datetime import datetime

from ..file_model import FILE_ATTRIBUTE_MAP, FileAttribute, FileInfo, time_value
from ..theme import paint
from .common import ResultsDisplayer, format_number, name_style, size_column_width
from .types import NodeSummary

DIR_LABEL = "<DIR>"
UNKNOWN_TIMESTAMP = ("??/??/????", "??:?? ??")
# "MM/DD/YYYY  hh:mm AM " plus one column per attribute letter.
ENTRY_PREFIX_WIDTH = 21 + len(FILE_ATTRIBUTE_MAP)


def format_timestamp(timestamp_ns: int) -> tuple[str, str]:
    """Return ``(MM/DD/YYYY, hh:mm AM)`` in local time."""
    if timestamp_ns <= 0:
        return UNKNOWN_TIMESTAMP
    try:
        moment = datetime.fromtimestamp(timestamp_ns / 1_000_000_000)
    except (OverflowError, OSError, ValueError):
        return UNKNOWN_TIMESTAMP
    return moment.strftime("%m/%d/%Y"), moment.strftime("%I:%M %p")


def format_size_cell(entry: FileInfo, column_width: int) -> str:
    """Right-aligned size, or ``<DIR>`` centred in the same column."""
    width = max(column_width, len(DIR_LABEL))
    if not entry.is_dir:
        return f" {format_number(entry.size):>{width}} "
    left = (width - len(DIR_LABEL)) // 2
    right = width - len(DIR_LABEL) - left
    return f" {' ' * left}{DIR_LABEL}{' ' * right} "


class NormalDisplayer(ResultsDisplayer):
    def render_matches(self, summary: NodeSummary) -> None:
        column_width = size_column_width(summary.counters.largest_file_size)
        for entry in summary.matches:
            self.render_entry(entry, column_width)
            for stream in entry.streams:
                self.render_stream(entry, stream.name, stream.size, column_width)

    def render_entry(self, entry: FileInfo, column_width: int) -> None:
        theme = self.theme
        date_text, time_text = format_timestamp(time_value(entry, self.time_field))
        size_style = theme.dir_marker if entry.is_dir else theme.size
        self.line(
            paint(theme, theme.date, date_text)
            + "  "
            + paint(theme, theme.time, time_text)
            + " "
            + self._attribute_column(entry.attributes)
            + paint(theme, size_style, format_size_cell(entry, column_width))
            + paint(theme, name_style(theme, entry), entry.name)
        )

    def render_stream(self, entry: FileInfo, stream_name: str, size: int, column_width: int) -> None:
        theme = self.theme
        width = max(column_width, len(DIR_LABEL))
        self.line(
            " " * ENTRY_PREFIX_WIDTH
            + paint(theme, theme.size, f" {format_number(size):>{width}} ")
            + paint(theme, theme.stream, f"{entry.name}{stream_name}")
        )

    def _attribute_column(self, attributes: FileAttribute) -> str:
        theme = self.theme
        cells = []
        for flag, letter in FILE_ATTRIBUTE_MAP:
            if attributes & flag:
                cells.append(paint(theme, theme.attribute_set, letter))
            else:
                cells.append(paint(theme, theme.attribute_unset, "-"))
        return "".join(cells)


__all__ = ["NormalDisplayer", "format_size_cell", "format_timestamp"]
