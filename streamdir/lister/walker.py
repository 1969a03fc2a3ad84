"""Streaming pre-order walk over a concurrently discovered directory tree.

The driver enqueues the root, starts the worker pool and then walks the tree
on the calling thread. Each node is rendered as soon as it is finished, in
discovery order, no matter which order the workers finish nodes in.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from ..display.types import DirectoryLevel, Displayer, NodeSummary, root_level
from ..errors import ListingFault
from ..file_model import AttributeFilter, Enumerator, SortSpec, sort_files
from .cancellation import CancellationToken
from .node import DirectoryNode, DirStatus
from .pool import NodeProcessor, WorkerPool
from .totals import ListingTotals
from .work_queue import WorkQueue

logger = logging.getLogger(__name__)

ReadyFn = Callable[[DirectoryNode], DirStatus]


@dataclass(frozen=True)
class ListingOptions:
    """Per-run switches that the engine itself honours."""

    recurse: bool = False
    attribute_filter: AttributeFilter = field(default_factory=AttributeFilter)
    sort_spec: SortSpec = field(default_factory=SortSpec)


class DirectoryLister:
    """Lists directory trees through one enumerator and one displayer."""

    def __init__(
        self,
        enumerator: Enumerator,
        displayer: Displayer,
        options: ListingOptions | None = None,
    ) -> None:
        self.enumerator = enumerator
        self.displayer = displayer
        self.options = options or ListingOptions()

    def list_directory(
        self,
        root_path: Path,
        file_specs: Sequence[str],
        thread_count: int,
        cancel_token: CancellationToken | None = None,
        *,
        first: bool = True,
    ) -> ListingTotals:
        """List ``root_path`` and return the totals of everything rendered.

        ``thread_count`` of 1 processes nodes inline on the calling thread.
        Cancelling ``cancel_token`` stops the walk early with partial totals.
        Raises ``PoolStartupError`` when workers cannot start and
        ``ListingFault`` when a node failed unexpectedly.
        """
        root_path = Path(root_path)
        stop = CancellationToken(parent=cancel_token)
        processor = NodeProcessor(
            enumerator=self.enumerator,
            attribute_filter=self.options.attribute_filter,
            recurse=self.options.recurse,
            stop=stop,
        )
        root = DirectoryNode(root_path, file_specs)
        level = root_level(first=first, recurse=self.options.recurse)
        totals = ListingTotals()
        try:
            if thread_count <= 1:
                self._walk(root, level, totals, stop, self._inline_ready(processor))
            else:
                self._walk_pooled(root, level, totals, processor, thread_count)
        finally:
            stop.detach()

        if self.options.recurse:
            self.displayer.render_summary(totals, root_path)
        return totals

    def _walk_pooled(
        self,
        root: DirectoryNode,
        level: DirectoryLevel,
        totals: ListingTotals,
        processor: NodeProcessor,
        thread_count: int,
    ) -> None:
        stop = processor.stop
        queue: WorkQueue[DirectoryNode] = WorkQueue()
        queue.push(root)
        pool = WorkerPool(queue, processor, thread_count)
        pool.start()
        try:
            self._walk(root, level, totals, stop, lambda node: node.wait_until_terminal(stop))
        finally:
            pool.shutdown()

        fault = pool.fault
        if fault is not None:
            raise fault from fault.cause

    @staticmethod
    def _inline_ready(processor: NodeProcessor) -> ReadyFn:
        def ready(node: DirectoryNode) -> DirStatus:
            try:
                return processor(node)
            except Exception as exc:
                logger.error("listing failed on %s", node.path, exc_info=exc)
                raise ListingFault(node.path, exc) from exc

        return ready

    def _walk(
        self,
        root: DirectoryNode,
        level: DirectoryLevel,
        totals: ListingTotals,
        stop: CancellationToken,
        ready: ReadyFn,
    ) -> None:
        # Explicit stack so tree depth is not bounded by the recursion limit.
        pending: list[tuple[DirectoryNode, DirectoryLevel]] = [(root, level)]
        while pending:
            node, node_level = pending.pop()
            if stop.cancelled:
                return
            status = ready(node)
            if status is DirStatus.CANCELLED or stop.cancelled:
                return

            if status is DirStatus.ERROR:
                self.displayer.render_error(node.path, node.error or str(node.path))
            else:
                summary = NodeSummary(
                    path=node.path,
                    file_specs=node.file_specs,
                    matches=tuple(sort_files(node.matches, self.options.sort_spec)),
                    counters=node.counters,
                )
                self.displayer.render_node(node_level, summary)
                totals.add_counters(node.counters)

            children = node.release()
            pending.extend(
                (child, DirectoryLevel.RECURSIVE_SUBDIRECTORY) for child in reversed(children)
            )


def start(
    root_path: Path,
    file_specs: Sequence[str],
    thread_count: int,
    cancel_token: CancellationToken | None = None,
    *,
    enumerator: Enumerator,
    displayer: Displayer,
    options: ListingOptions | None = None,
    first: bool = True,
) -> ListingTotals:
    """List one directory tree; see ``DirectoryLister.list_directory``."""
    lister = DirectoryLister(enumerator, displayer, options)
    return lister.list_directory(
        root_path,
        file_specs,
        thread_count,
        cancel_token,
        first=first,
    )


__all__ = ["ListingOptions", "DirectoryLister", "start"]
