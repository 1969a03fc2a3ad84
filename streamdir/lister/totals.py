"""Run-wide totals folded in by the consumer as each node is printed."""

from __future__ import annotations

from dataclasses import dataclass

from ..file_model import DirectoryCounters


@dataclass
class ListingTotals:
    file_count: int = 0
    directory_count: int = 0
    file_bytes: int = 0
    stream_count: int = 0
    stream_bytes: int = 0

    @classmethod
    def from_counters(cls, counters: DirectoryCounters) -> ListingTotals:
        return cls(
            file_count=counters.file_count,
            directory_count=counters.subdirectory_count,
            file_bytes=counters.bytes_used,
            stream_count=counters.stream_count,
            stream_bytes=counters.stream_bytes_used,
        )

    def add(self, other: ListingTotals) -> None:
        self.file_count += other.file_count
        self.directory_count += other.directory_count
        self.file_bytes += other.file_bytes
        self.stream_count += other.stream_count
        self.stream_bytes += other.stream_bytes

    def add_counters(self, counters: DirectoryCounters) -> None:
        self.add(ListingTotals.from_counters(counters))


__all__ = ["ListingTotals"]
