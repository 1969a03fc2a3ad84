"""Tests for node processing and the worker pool."""

from __future__ import annotations

import threading
import unittest
from collections.abc import Sequence
from pathlib import Path

from streamdir.errors import REASON_ACCESS_DENIED, EnumerationError, ListingFault, PoolStartupError
from streamdir.file_model import AttributeFilter, DirectoryCounters, EnumerationResult, FileInfo
from streamdir.lister import (
    CancellationToken,
    DirectoryNode,
    DirStatus,
    NodeProcessor,
    WorkerPool,
    WorkQueue,
    resolve_thread_count,
)

ROOT = Path("/tree")


class _TreeEnumerator:
    """Serves a fixed in-memory tree keyed by path."""

    def __init__(self, tree: dict[Path, object]) -> None:
        self.tree = tree

    def enumerate(self, path: Path, file_specs: Sequence[str], attribute_filter: AttributeFilter) -> EnumerationResult:
        entry = self.tree[path]
        if isinstance(entry, BaseException):
            raise entry
        files, subdirs = entry
        counters = DirectoryCounters()
        matches = []
        for name, size in files:
            info = FileInfo(name=name, path=path / name, size=size)
            counters.record(info, len(name))
            matches.append(info)
        return EnumerationResult(
            matches=tuple(matches),
            subdirectories=tuple(path / name for name in subdirs),
            counters=counters,
        )


class _UnstartableThread(threading.Thread):
    def start(self) -> None:
        raise RuntimeError("can't start new thread")


class ResolveThreadCountTests(unittest.TestCase):
    def test_caps_at_cpu_count(self) -> None:
        self.assertEqual(resolve_thread_count(64, cpu_count=8), 8)
        self.assertEqual(resolve_thread_count(2, cpu_count=8), 2)
        self.assertEqual(resolve_thread_count(None, cpu_count=6), 6)

    def test_never_below_one(self) -> None:
        self.assertEqual(resolve_thread_count(None, cpu_count=0), 1)


class NodeProcessorTests(unittest.TestCase):
    def _processor(self, tree: dict[Path, object], *, recurse: bool = True, stop: CancellationToken | None = None) -> NodeProcessor:
        return NodeProcessor(
            enumerator=_TreeEnumerator(tree),
            attribute_filter=AttributeFilter(),
            recurse=recurse,
            stop=stop or CancellationToken(),
        )

    def test_completes_node_and_schedules_children_in_order(self) -> None:
        processor = self._processor({ROOT: ([("a.txt", 3)], ["b", "a"])})
        node = DirectoryNode(ROOT, ("*.txt",))
        scheduled: list[DirectoryNode] = []

        status = processor(node, scheduled.append)

        self.assertIs(status, DirStatus.DONE)
        self.assertEqual([child.path for child in node.children], [ROOT / "b", ROOT / "a"])
        self.assertEqual(scheduled, node.children)
        self.assertTrue(all(child.file_specs == ("*.txt",) for child in node.children))
        self.assertEqual(node.counters.bytes_used, 3)

    def test_non_recursive_run_adds_no_children(self) -> None:
        processor = self._processor({ROOT: ([], ["sub"])}, recurse=False)
        node = DirectoryNode(ROOT, ("*",))

        processor(node)

        self.assertEqual(node.children, [])

    def test_enumeration_error_becomes_node_error(self) -> None:
        error = EnumerationError(ROOT, "/tree: access denied", REASON_ACCESS_DENIED)
        processor = self._processor({ROOT: error})
        node = DirectoryNode(ROOT, ("*",))

        self.assertIs(processor(node), DirStatus.ERROR)
        self.assertEqual(node.error, "/tree: access denied")

    def test_cancelled_stop_skips_enumeration(self) -> None:
        stop = CancellationToken()
        stop.cancel()
        processor = self._processor({}, stop=stop)
        node = DirectoryNode(ROOT, ("*",))

        self.assertIs(processor(node), DirStatus.CANCELLED)
        self.assertIs(node.status, DirStatus.CANCELLED)


class WorkerPoolTests(unittest.TestCase):
    def test_workers_process_whole_tree(self) -> None:
        tree = {
            ROOT: ([("r.txt", 1)], ["a", "b"]),
            ROOT / "a": ([("a.txt", 2)], ["c"]),
            ROOT / "a" / "c": ([], []),
            ROOT / "b": ([("b.txt", 3)], []),
        }
        stop = CancellationToken()
        processor = NodeProcessor(_TreeEnumerator(tree), AttributeFilter(), True, stop)
        queue: WorkQueue[DirectoryNode] = WorkQueue()
        root = DirectoryNode(ROOT, ("*",))
        queue.push(root)
        pool = WorkerPool(queue, processor, 3)

        pool.start()
        try:
            pending = [root]
            finished: list[Path] = []
            while pending:
                node = pending.pop(0)
                self.assertIs(node.wait_until_terminal(stop), DirStatus.DONE)
                finished.append(node.path)
                pending.extend(node.children)
        finally:
            pool.shutdown()

        self.assertEqual(sorted(finished), sorted(tree))
        self.assertIsNone(pool.fault)

    def test_unexpected_exception_is_recorded_as_fault(self) -> None:
        stop = CancellationToken()
        processor = NodeProcessor(_TreeEnumerator({ROOT: RuntimeError("boom")}), AttributeFilter(), True, stop)
        queue: WorkQueue[DirectoryNode] = WorkQueue()
        root = DirectoryNode(ROOT, ("*",))
        queue.push(root)
        pool = WorkerPool(queue, processor, 2)

        pool.start()
        status = root.wait_until_terminal(stop)
        pool.shutdown()

        self.assertIs(status, DirStatus.CANCELLED)
        self.assertTrue(stop.cancelled)
        self.assertIsInstance(pool.fault, ListingFault)
        assert pool.fault is not None
        self.assertEqual(pool.fault.path, ROOT)
        self.assertIsInstance(pool.fault.cause, RuntimeError)

    def test_thread_start_failure_stops_started_workers(self) -> None:
        created: list[threading.Thread] = []

        def thread_factory(**kwargs) -> threading.Thread:
            cls = threading.Thread if len(created) < 2 else _UnstartableThread
            thread = cls(**kwargs)
            created.append(thread)
            return thread

        stop = CancellationToken()
        processor = NodeProcessor(_TreeEnumerator({}), AttributeFilter(), True, stop)
        queue: WorkQueue[DirectoryNode] = WorkQueue()
        pool = WorkerPool(queue, processor, 4, thread_factory=thread_factory)

        with self.assertRaises(PoolStartupError):
            pool.start()

        self.assertEqual(len(created), 3)
        self.assertFalse(created[0].is_alive())
        self.assertFalse(created[1].is_alive())
        self.assertTrue(stop.cancelled)
        self.assertTrue(queue.done)

    def test_rejects_zero_threads(self) -> None:
        processor = NodeProcessor(_TreeEnumerator({}), AttributeFilter(), True, CancellationToken())
        with self.assertRaises(ValueError):
            WorkerPool(WorkQueue(), processor, 0)


if __name__ == "__main__":
    unittest.main()
