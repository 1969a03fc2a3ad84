"""Filesystem enumeration for one directory at a time.

``ScandirEnumerator`` is the production enumerator handed to the listing
engine. It matches entries against glob file specs, applies the attribute
filter, and reports subdirectories as recursion candidates.
"""

from __future__ import annotations

import fnmatch
import os
import stat
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from ..ansi import display_width
from ..errors import EnumerationError
from .streams import read_streams
from .types import (
    AttributeFilter,
    DirectoryCounters,
    EnumerationResult,
    FileAttribute,
    FileInfo,
)

_WINDOWS_HIDDEN_FLAG = 0x2
_EXEC_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


class Enumerator(Protocol):
    """Directory scanner contract consumed by the listing engine."""

    def enumerate(
        self,
        path: Path,
        file_specs: Sequence[str],
        attribute_filter: AttributeFilter,
    ) -> EnumerationResult: ...


def safe_stat(entry: os.DirEntry[str]) -> os.stat_result | None:
    """Stat ``entry`` through symlinks, falling back to the link itself."""
    try:
        return entry.stat()
    except OSError:
        pass
    try:
        return entry.stat(follow_symlinks=False)
    except OSError:
        return None


def attributes_for(name: str, st: os.stat_result | None, is_dir: bool, is_symlink: bool) -> FileAttribute:
    """Derive attribute flags from a name and its stat result."""
    attributes = FileAttribute.NONE
    if is_dir:
        attributes |= FileAttribute.DIRECTORY
    if is_symlink:
        attributes |= FileAttribute.SYMLINK
    if name.startswith("."):
        attributes |= FileAttribute.HIDDEN
    if st is None:
        return attributes

    if getattr(st, "st_file_attributes", 0) & _WINDOWS_HIDDEN_FLAG:
        attributes |= FileAttribute.HIDDEN
    mode = st.st_mode
    if not mode & stat.S_IWUSR:
        attributes |= FileAttribute.READONLY
    if not is_dir and stat.S_ISREG(mode) and mode & _EXEC_BITS:
        attributes |= FileAttribute.EXECUTABLE
    if stat.S_ISFIFO(mode) or stat.S_ISSOCK(mode) or stat.S_ISCHR(mode) or stat.S_ISBLK(mode):
        attributes |= FileAttribute.SPECIAL
    return attributes


def file_info_from_entry(entry: os.DirEntry[str], *, collect_streams: bool = False) -> FileInfo:
    """Build a ``FileInfo`` for one scandir entry."""
    try:
        is_symlink = entry.is_symlink()
    except OSError:
        is_symlink = False
    try:
        is_dir = entry.is_dir()
    except OSError:
        is_dir = False

    st = safe_stat(entry)
    attributes = attributes_for(entry.name, st, is_dir, is_symlink)
    path = Path(entry.path)

    size = 0
    mtime_ns = ctime_ns = atime_ns = 0
    if st is not None:
        if not is_dir:
            size = int(st.st_size)
        mtime_ns = int(st.st_mtime_ns)
        atime_ns = int(st.st_atime_ns)
        ctime_ns = int(getattr(st, "st_birthtime_ns", st.st_ctime_ns))

    streams = read_streams(path) if collect_streams and not is_dir else ()
    return FileInfo(
        name=entry.name,
        path=path,
        attributes=attributes,
        size=size,
        mtime_ns=mtime_ns,
        ctime_ns=ctime_ns,
        atime_ns=atime_ns,
        streams=streams,
    )


class ScandirEnumerator:
    """Enumerate one directory with ``os.scandir``.

    Matches are de-duplicated across file specs and kept in spec-then-scan
    order. Symlinked directories are listed but never offered for recursion,
    which keeps the discovery tree acyclic.
    """

    def __init__(self, *, collect_streams: bool = False) -> None:
        self.collect_streams = collect_streams

    def enumerate(
        self,
        path: Path,
        file_specs: Sequence[str],
        attribute_filter: AttributeFilter,
    ) -> EnumerationResult:
        try:
            with os.scandir(path) as scan:
                entries = list(scan)
        except OSError as exc:
            raise EnumerationError.from_os_error(path, exc) from exc

        counters = DirectoryCounters()
        matches: list[FileInfo] = []
        seen: set[str] = set()

        for spec in file_specs:
            for entry in entries:
                name = entry.name
                if name in seen or name in {".", ".."}:
                    continue
                if not fnmatch.fnmatch(name, spec):
                    continue
                seen.add(name)
                info = file_info_from_entry(entry, collect_streams=self.collect_streams)
                if not attribute_filter.accepts(info.attributes):
                    continue
                matches.append(info)
                counters.record(info, display_width(name))

        subdirectories: list[Path] = []
        for entry in entries:
            try:
                if entry.is_dir(follow_symlinks=False):
                    subdirectories.append(Path(entry.path))
            except OSError:
                continue

        return EnumerationResult(
            matches=tuple(matches),
            subdirectories=tuple(subdirectories),
            counters=counters,
        )


__all__ = [
    "Enumerator",
    "safe_stat",
    "attributes_for",
    "file_info_from_entry",
    "ScandirEnumerator",
]
