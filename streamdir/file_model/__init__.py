"""Domain model for enumerated directory entries.

This package contains the non-engine collaborators of a listing:
- entry/counter datatypes and attribute flags
- the ``os.scandir`` enumerator and its protocol
- sort specs and the entry comparator
- extended-attribute stream lookup
"""

from __future__ import annotations

from .types import (
    ATTRIBUTE_FILTER_LETTERS,
    FILE_ATTRIBUTE_MAP,
    AttributeFilter,
    DirectoryCounters,
    EnumerationResult,
    FileAttribute,
    FileInfo,
    StreamInfo,
)
from .fs import Enumerator, ScandirEnumerator, attributes_for, file_info_from_entry, safe_stat
from .comparator import (
    SORT_ORDER_LETTERS,
    TIME_FIELD_LETTERS,
    SortDirection,
    SortOrder,
    SortSpec,
    TimeField,
    compare_entries,
    parse_sort_spec,
    sort_files,
    time_value,
)
from .streams import read_streams, streams_supported

__all__ = [
    "ATTRIBUTE_FILTER_LETTERS",
    "FILE_ATTRIBUTE_MAP",
    "AttributeFilter",
    "DirectoryCounters",
    "EnumerationResult",
    "FileAttribute",
    "FileInfo",
    "StreamInfo",
    "Enumerator",
    "ScandirEnumerator",
    "attributes_for",
    "file_info_from_entry",
    "safe_stat",
    "SORT_ORDER_LETTERS",
    "TIME_FIELD_LETTERS",
    "SortDirection",
    "SortOrder",
    "SortSpec",
    "TimeField",
    "compare_entries",
    "parse_sort_spec",
    "sort_files",
    "time_value",
    "read_streams",
    "streams_supported",
]
