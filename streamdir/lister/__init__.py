"""Concurrent, order-preserving directory-tree listing engine."""

from __future__ import annotations

from .cancellation import CancellationToken
from .node import DirectoryNode, DirStatus
from .pool import NodeProcessor, WorkerPool, resolve_thread_count
from .totals import ListingTotals
from .walker import DirectoryLister, ListingOptions, start
from .work_queue import WorkQueue

__all__ = [
    "CancellationToken",
    "DirectoryNode",
    "DirStatus",
    "NodeProcessor",
    "WorkerPool",
    "resolve_thread_count",
    "ListingTotals",
    "DirectoryLister",
    "ListingOptions",
    "start",
    "WorkQueue",
]
