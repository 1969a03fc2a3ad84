"""Sort keys and ordering for matched entries.

Directories always sort before files. The remaining order walks a tiebreak
chain of sort keys; only the primary key honours a descending direction.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from functools import cmp_to_key

from .types import FileInfo


class SortOrder(Enum):
    DEFAULT = "default"
    NAME = "name"
    EXTENSION = "extension"
    SIZE = "size"
    DATE = "date"


class SortDirection(Enum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


class TimeField(Enum):
    WRITTEN = "written"
    CREATION = "creation"
    ACCESS = "access"


SORT_ORDER_LETTERS: dict[str, SortOrder] = {
    "n": SortOrder.NAME,
    "e": SortOrder.EXTENSION,
    "s": SortOrder.SIZE,
    "d": SortOrder.DATE,
}

TIME_FIELD_LETTERS: dict[str, TimeField] = {
    "w": TimeField.WRITTEN,
    "c": TimeField.CREATION,
    "a": TimeField.ACCESS,
}

_TIEBREAKERS = (SortOrder.NAME, SortOrder.DATE, SortOrder.EXTENSION, SortOrder.SIZE)


@dataclass(frozen=True)
class SortSpec:
    """Requested ordering for one listing."""

    order: SortOrder = SortOrder.DEFAULT
    direction: SortDirection = SortDirection.ASCENDING
    time_field: TimeField = TimeField.WRITTEN

    @property
    def chain(self) -> tuple[SortOrder, ...]:
        """Primary key followed by the tiebreakers not already used."""
        primary = SortOrder.NAME if self.order is SortOrder.DEFAULT else self.order
        return (primary, *(key for key in _TIEBREAKERS if key is not primary))


def parse_sort_spec(text: str) -> tuple[SortOrder, SortDirection]:
    """Parse ``n``/``-s`` style sort arguments.

    Raises ``ValueError`` for empty or unknown letters.
    """
    value = text.strip().lower()
    direction = SortDirection.ASCENDING
    if value.startswith("-"):
        direction = SortDirection.DESCENDING
        value = value[1:]
    if len(value) != 1 or value not in SORT_ORDER_LETTERS:
        raise ValueError(f"invalid sort order: {text!r}")
    return SORT_ORDER_LETTERS[value], direction


def time_value(entry: FileInfo, field: TimeField) -> int:
    """Return the timestamp ``field`` selects for ``entry``."""
    if field is TimeField.CREATION:
        return entry.ctime_ns
    if field is TimeField.ACCESS:
        return entry.atime_ns
    return entry.mtime_ns


def extension_of(name: str) -> str:
    idx = name.rfind(".")
    return name[idx:] if idx > 0 else ""


def _cmp(lhs: object, rhs: object) -> int:
    return (lhs > rhs) - (lhs < rhs)  # type: ignore[operator]


def _key_comparator(key: SortOrder, spec: SortSpec) -> Callable[[FileInfo, FileInfo], int]:
    if key is SortOrder.DATE:
        return lambda a, b: _cmp(time_value(a, spec.time_field), time_value(b, spec.time_field))
    if key is SortOrder.EXTENSION:
        return lambda a, b: _cmp(extension_of(a.name).casefold(), extension_of(b.name).casefold())
    if key is SortOrder.SIZE:
        return lambda a, b: _cmp(a.size, b.size)
    return lambda a, b: _cmp(a.name.casefold(), b.name.casefold())


def compare_entries(lhs: FileInfo, rhs: FileInfo, spec: SortSpec) -> int:
    """Three-way compare two entries under ``spec``."""
    if lhs.is_dir != rhs.is_dir:
        return -1 if lhs.is_dir else 1

    for idx, key in enumerate(spec.chain):
        result = _key_comparator(key, spec)(lhs, rhs)
        if result == 0:
            continue
        if idx == 0 and spec.direction is SortDirection.DESCENDING:
            return -result
        return result
    # Case-only name differences still need a stable, deterministic order.
    return _cmp(lhs.name, rhs.name)


def sort_files(entries: Iterable[FileInfo], spec: SortSpec) -> list[FileInfo]:
    """Return ``entries`` ordered by ``spec``."""
    return sorted(entries, key=cmp_to_key(lambda a, b: compare_entries(a, b, spec)))


__all__ = [
    "SortOrder",
    "SortDirection",
    "TimeField",
    "SORT_ORDER_LETTERS",
    "TIME_FIELD_LETTERS",
    "SortSpec",
    "parse_sort_spec",
    "time_value",
    "extension_of",
    "compare_entries",
    "sort_files",
]
