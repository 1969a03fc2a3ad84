"""Domain datatypes for enumerated directory entries and per-directory counters."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntFlag
from pathlib import Path


class FileAttribute(IntFlag):
    """Attribute bits observed for one entry."""

    NONE = 0
    READONLY = 0x01
    HIDDEN = 0x02
    DIRECTORY = 0x04
    EXECUTABLE = 0x08
    SYMLINK = 0x10
    SPECIAL = 0x20


# Column order for the normal listing, one letter per flag.
FILE_ATTRIBUTE_MAP: tuple[tuple[FileAttribute, str], ...] = (
    (FileAttribute.READONLY, "R"),
    (FileAttribute.HIDDEN, "H"),
    (FileAttribute.EXECUTABLE, "X"),
    (FileAttribute.SYMLINK, "L"),
    (FileAttribute.SPECIAL, "S"),
)

# Letters accepted by ``--attributes``.
ATTRIBUTE_FILTER_LETTERS: dict[str, FileAttribute] = {
    "d": FileAttribute.DIRECTORY,
    "h": FileAttribute.HIDDEN,
    "r": FileAttribute.READONLY,
    "x": FileAttribute.EXECUTABLE,
    "l": FileAttribute.SYMLINK,
    "s": FileAttribute.SPECIAL,
}


@dataclass(frozen=True)
class StreamInfo:
    """One named side stream of a file (an extended attribute on POSIX)."""

    name: str
    size: int


@dataclass(frozen=True)
class FileInfo:
    """One matched entry plus the stat metadata needed to sort and render it."""

    name: str
    path: Path
    attributes: FileAttribute = FileAttribute.NONE
    size: int = 0
    mtime_ns: int = 0
    ctime_ns: int = 0
    atime_ns: int = 0
    streams: tuple[StreamInfo, ...] = ()

    @property
    def is_dir(self) -> bool:
        return bool(self.attributes & FileAttribute.DIRECTORY)

    @property
    def is_hidden(self) -> bool:
        return bool(self.attributes & FileAttribute.HIDDEN)


@dataclass(frozen=True)
class AttributeFilter:
    """Required/excluded attribute masks applied to every candidate entry."""

    required: FileAttribute = FileAttribute.NONE
    excluded: FileAttribute = FileAttribute.NONE

    @classmethod
    def parse(cls, text: str) -> AttributeFilter:
        """Parse ``hr`` / ``h-d`` style attribute letters.

        A ``-`` excludes the letter that follows it. Raises ``ValueError`` for
        unknown letters or a dangling ``-``.
        """
        required = FileAttribute.NONE
        excluded = FileAttribute.NONE
        exclude_next = False
        for letter in text.strip().lower():
            if letter == "-":
                if exclude_next:
                    raise ValueError(f"invalid attribute spec: {text!r}")
                exclude_next = True
                continue
            flag = ATTRIBUTE_FILTER_LETTERS.get(letter)
            if flag is None:
                raise ValueError(f"unknown attribute {letter!r} in {text!r}")
            if exclude_next:
                excluded |= flag
            else:
                required |= flag
            exclude_next = False
        if exclude_next:
            raise ValueError(f"invalid attribute spec: {text!r}")
        return cls(required=required, excluded=excluded)

    def accepts(self, attributes: FileAttribute) -> bool:
        if (attributes & self.required) != self.required:
            return False
        return not (attributes & self.excluded)


@dataclass
class DirectoryCounters:
    """Counts and byte totals for the matches of one directory."""

    file_count: int = 0
    subdirectory_count: int = 0
    bytes_used: int = 0
    stream_count: int = 0
    stream_bytes_used: int = 0
    largest_file_size: int = 0
    largest_name_width: int = 0

    def record(self, entry: FileInfo, name_width: int) -> None:
        """Account for one match."""
        if entry.is_dir:
            self.subdirectory_count += 1
            # Wide listings bracket directory names.
            name_width += 2
        else:
            self.file_count += 1
            self.bytes_used += entry.size
            self.largest_file_size = max(self.largest_file_size, entry.size)
        for stream in entry.streams:
            self.stream_count += 1
            self.stream_bytes_used += stream.size
        self.largest_name_width = max(self.largest_name_width, name_width)


@dataclass(frozen=True)
class EnumerationResult:
    """What one directory scan produced.

    ``subdirectories`` are recursion candidates in filesystem enumeration
    order; they are independent of the file specs used for ``matches``.
    """

    matches: tuple[FileInfo, ...] = ()
    subdirectories: tuple[Path, ...] = ()
    counters: DirectoryCounters = field(default_factory=DirectoryCounters)


__all__ = [
    "FileAttribute",
    "FILE_ATTRIBUTE_MAP",
    "ATTRIBUTE_FILTER_LETTERS",
    "StreamInfo",
    "FileInfo",
    "AttributeFilter",
    "DirectoryCounters",
    "EnumerationResult",
]
