"""Types shared between the listing engine and the output formatters."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Protocol

from ..file_model import DirectoryCounters, FileInfo

if TYPE_CHECKING:
    from ..lister.totals import ListingTotals


class DirectoryLevel(Enum):
    """Where a rendered directory sits within the run."""

    INITIAL = "initial"
    SUBSEQUENT = "subsequent"
    RECURSIVE_INITIAL = "recursive-initial"
    RECURSIVE_SUBDIRECTORY = "recursive-subdirectory"

    @property
    def shows_volume_header(self) -> bool:
        return self in {DirectoryLevel.INITIAL, DirectoryLevel.RECURSIVE_INITIAL}

    @property
    def shows_volume_footer(self) -> bool:
        return self in {DirectoryLevel.INITIAL, DirectoryLevel.SUBSEQUENT}

    @property
    def is_nested(self) -> bool:
        return self is DirectoryLevel.RECURSIVE_SUBDIRECTORY


def root_level(*, first: bool, recurse: bool) -> DirectoryLevel:
    if recurse:
        return DirectoryLevel.RECURSIVE_INITIAL
    return DirectoryLevel.INITIAL if first else DirectoryLevel.SUBSEQUENT


@dataclass(frozen=True)
class NodeSummary:
    """Sorted matches and counters of one finished directory."""

    path: Path
    file_specs: tuple[str, ...]
    matches: tuple[FileInfo, ...]
    counters: DirectoryCounters

    @property
    def is_empty(self) -> bool:
        return not self.matches


class Displayer(Protocol):
    def render_node(self, level: DirectoryLevel, summary: NodeSummary) -> None: ...

    def render_error(self, path: Path, detail: str) -> None: ...

    def render_summary(self, totals: ListingTotals, root: Path) -> None: ...


__all__ = ["DirectoryLevel", "NodeSummary", "Displayer", "root_level"]
