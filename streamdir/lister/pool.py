"""Worker threads that enumerate queued directory nodes."""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Callable
from dataclasses import dataclass

from ..errors import EnumerationError, ListingFault, PoolStartupError
from ..file_model import AttributeFilter, Enumerator
from .cancellation import CancellationToken
from .node import DirectoryNode, DirStatus
from .work_queue import WorkQueue

logger = logging.getLogger(__name__)

ThreadFactory = Callable[..., threading.Thread]


def resolve_thread_count(cap: int | None = None, *, cpu_count: int | None = None) -> int:
    """Return the worker count for a run: CPUs available, limited by ``cap``."""
    available = cpu_count if cpu_count is not None else (os.cpu_count() or 1)
    if cap is not None:
        available = min(available, cap)
    return max(1, available)


def _discard(_node: DirectoryNode) -> None:
    return None


@dataclass(frozen=True)
class NodeProcessor:
    """Scan one node and publish its results.

    Shared by pool workers and the single-threaded walker so both modes build
    the same tree.
    """

    enumerator: Enumerator
    attribute_filter: AttributeFilter
    recurse: bool
    stop: CancellationToken

    def __call__(
        self,
        node: DirectoryNode,
        schedule: Callable[[DirectoryNode], None] = _discard,
    ) -> DirStatus:
        if self.stop.cancelled:
            node.cancel()
            return DirStatus.CANCELLED

        node.claim()
        try:
            result = self.enumerator.enumerate(node.path, node.file_specs, self.attribute_filter)
        except EnumerationError as exc:
            logger.debug("enumeration failed for %s: %s", node.path, exc.detail)
            node.fail(exc.detail)
            return DirStatus.ERROR

        if self.recurse:
            for subdirectory in result.subdirectories:
                if self.stop.cancelled:
                    break
                child = DirectoryNode(subdirectory, node.file_specs)
                node.add_child(child)
                schedule(child)

        node.complete(result.matches, result.counters)
        return DirStatus.DONE


class WorkerPool:
    """Fixed set of threads draining a ``WorkQueue`` of nodes.

    Children discovered while processing a node are pushed back onto the same
    queue. A worker that hits an unexpected exception records it as the pool's
    fault and cancels ``stop`` so the rest of the run winds down.
    """

    def __init__(
        self,
        queue: WorkQueue[DirectoryNode],
        processor: NodeProcessor,
        thread_count: int,
        *,
        thread_factory: ThreadFactory = threading.Thread,
    ) -> None:
        if thread_count < 1:
            raise ValueError("thread_count must be >= 1")
        self._queue = queue
        self._processor = processor
        self._stop = processor.stop
        self.thread_count = thread_count
        self._thread_factory = thread_factory
        self._threads: list[threading.Thread] = []
        self._lock = threading.Lock()
        self._fault: ListingFault | None = None

    @property
    def fault(self) -> ListingFault | None:
        with self._lock:
            return self._fault

    def start(self) -> None:
        logger.debug("starting %d worker threads", self.thread_count)
        for index in range(self.thread_count):
            worker = self._thread_factory(
                target=self._worker,
                name=f"streamdir-worker-{index}",
                daemon=True,
            )
            try:
                worker.start()
            except RuntimeError as exc:
                logger.error("could not start worker %d of %d: %s", index + 1, self.thread_count, exc)
                self.shutdown()
                raise PoolStartupError(
                    f"could not start worker {index + 1} of {self.thread_count}: {exc}"
                ) from exc
            self._threads.append(worker)

    def shutdown(self) -> None:
        """Stop scheduling, drop queued nodes and join every started worker."""
        self._stop.cancel()
        self._queue.mark_done()
        for worker in self._threads:
            worker.join()
        logger.debug("worker pool joined (%d threads)", len(self._threads))
        self._threads = []

    def _worker(self) -> None:
        while True:
            node = self._queue.pop()
            if node is None:
                return
            try:
                self._processor(node, self._queue.push)
            except Exception as exc:
                self._record_fault(node, exc)

    def _record_fault(self, node: DirectoryNode, exc: Exception) -> None:
        logger.error("worker failed on %s", node.path, exc_info=exc)
        with self._lock:
            if self._fault is None:
                self._fault = ListingFault(node.path, exc)
        if not node.status.is_terminal:
            node.cancel()
        self._stop.cancel()


__all__ = ["NodeProcessor", "WorkerPool", "resolve_thread_count"]
