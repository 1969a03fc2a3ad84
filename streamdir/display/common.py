"""Header, footer and summary rendering shared by the normal and wide formats."""

from __future__ import annotations

import sys
from collections.abc import Callable, Sequence
from pathlib import Path
from typing import TYPE_CHECKING, TextIO

from ..file_model import FileAttribute, FileInfo, TimeField
from ..theme import PLAIN_THEME, ListingTheme, paint
from ..volume import VolumeInfo
from .types import DirectoryLevel, NodeSummary

if TYPE_CHECKING:
    from ..lister.totals import ListingTotals

VolumeLookup = Callable[[Path], "VolumeInfo | None"]


def format_number(value: int) -> str:
    """Return ``value`` with comma thousands separators."""
    return f"{value:,}"


def size_column_width(largest: int) -> int:
    """Width of the widest formatted size in a directory."""
    return len(format_number(largest))


def plural(count: int, singular: str, many: str) -> str:
    return singular if count == 1 else many


def empty_directory_message(file_specs: Sequence[str]) -> str:
    if all(spec == "*" for spec in file_specs):
        return "Directory is empty."
    return f"No files matching '{', '.join(file_specs)}' found."


def name_style(theme: ListingTheme, entry: FileInfo) -> str:
    if entry.is_dir:
        return theme.dir_name
    if entry.attributes & FileAttribute.SYMLINK:
        return theme.symlink_name
    if entry.attributes & FileAttribute.EXECUTABLE:
        return theme.executable_name
    if entry.is_hidden:
        return theme.hidden_name
    return theme.file_name


class ResultsDisplayer:
    """Base displayer: writes headers, footers and summaries to ``stream``.

    Subclasses render the matches themselves in ``render_matches``. Output is
    flushed after every directory so a listing streams while the tree is
    still being scanned.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        *,
        theme: ListingTheme = PLAIN_THEME,
        recurse: bool = False,
        time_field: TimeField = TimeField.WRITTEN,
        volume_lookup: VolumeLookup = VolumeInfo.for_path,
        width: int | None = None,
    ) -> None:
        self.stream = stream if stream is not None else sys.stdout
        self.theme = theme
        self.recurse = recurse
        self.time_field = time_field
        self.volume_lookup = volume_lookup
        self.width = width

    def write(self, text: str) -> None:
        self.stream.write(text)

    def line(self, text: str = "") -> None:
        self.stream.write(f"{text}\n")

    def flush(self) -> None:
        self.stream.flush()

    def render_node(self, level: DirectoryLevel, summary: NodeSummary) -> None:
        if level.is_nested and summary.is_empty:
            return
        if level.shows_volume_header:
            self.render_volume_header(summary.path)
        self.render_path_header(summary.path)
        if summary.is_empty:
            self.line(empty_directory_message(summary.file_specs))
        else:
            self.render_matches(summary)
            self.render_directory_summary(summary)
            if level.shows_volume_footer:
                self.render_volume_footer(summary.path)
        self.line()
        self.line()
        self.flush()

    def render_matches(self, summary: NodeSummary) -> None:
        raise NotImplementedError

    def render_error(self, path: Path, detail: str) -> None:
        self.line(paint(self.theme, self.theme.error, f"  Error accessing directory: {detail}"))
        self.flush()

    def render_volume_header(self, path: Path) -> None:
        volume = self.volume_lookup(path)
        if volume is None:
            return
        theme = self.theme
        self.line(
            paint(theme, theme.header, " Volume at ")
            + paint(theme, theme.header_path, str(volume.mount_point))
        )
        self.line()

    def render_path_header(self, path: Path) -> None:
        theme = self.theme
        self.line(
            paint(theme, theme.header, " Directory of ")
            + paint(theme, theme.header_path, str(path))
        )
        self.line()

    def render_directory_summary(self, summary: NodeSummary) -> None:
        theme = self.theme
        counters = summary.counters

        def value(number: int) -> str:
            return paint(theme, theme.summary_value, format_number(number))

        def label(text: str) -> str:
            return paint(theme, theme.summary_label, text)

        text = (
            " "
            + value(counters.subdirectory_count)
            + label(plural(counters.subdirectory_count, " dir, ", " dirs, "))
            + value(counters.file_count)
            + label(plural(counters.file_count, " file using ", " files using "))
            + value(counters.bytes_used)
            + label(plural(counters.bytes_used, " byte", " bytes"))
        )
        if counters.stream_count > 0:
            text += (
                label(", ")
                + value(counters.stream_count)
                + label(plural(counters.stream_count, " stream using ", " streams using "))
                + value(counters.stream_bytes_used)
                + label(plural(counters.stream_bytes_used, " byte", " bytes"))
            )
        self.line()
        self.line(text)

    def render_volume_footer(self, path: Path) -> None:
        volume = self.volume_lookup(path)
        if volume is None:
            return
        theme = self.theme
        self.line(
            " "
            + paint(theme, theme.summary_value, format_number(volume.free_bytes))
            + paint(theme, theme.summary_label, plural(volume.free_bytes, " byte free on volume", " bytes free on volume"))
        )

    def render_summary(self, totals: ListingTotals, root: Path) -> None:
        theme = self.theme
        width = size_column_width(max(totals.file_count, totals.directory_count))

        def count(number: int) -> str:
            return paint(theme, theme.summary_value, f"    {format_number(number):>{width}}")

        def value(number: int) -> str:
            return paint(theme, theme.summary_value, format_number(number))

        def label(text: str) -> str:
            return paint(theme, theme.summary_label, text)

        self.line(label(" Total files listed:"))
        self.line()
        self.line(
            count(totals.file_count)
            + label(plural(totals.file_count, " file using ", " files using "))
            + value(totals.file_bytes)
            + label(plural(totals.file_bytes, " byte", " bytes"))
        )
        self.line(
            count(totals.directory_count)
            + label(plural(totals.directory_count, " subdirectory", " subdirectories"))
        )
        if totals.stream_count > 0:
            self.line(
                count(totals.stream_count)
                + label(plural(totals.stream_count, " stream using ", " streams using "))
                + value(totals.stream_bytes)
                + label(plural(totals.stream_bytes, " byte", " bytes"))
            )
        self.render_volume_footer(root)
        self.line()
        self.flush()


__all__ = [
    "ResultsDisplayer",
    "VolumeLookup",
    "empty_directory_message",
    "format_number",
    "name_style",
    "plural",
    "size_column_width",
]
