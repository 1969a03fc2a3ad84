"""Tests for the blocking work queue used by the worker pool."""

from __future__ import annotations

import threading
import time
import unittest

from streamdir.lister import WorkQueue


class WorkQueueTests(unittest.TestCase):
    def test_pop_returns_items_in_push_order(self) -> None:
        queue: WorkQueue[int] = WorkQueue()
        for item in (1, 2, 3):
            queue.push(item)

        self.assertEqual([queue.pop(), queue.pop(), queue.pop()], [1, 2, 3])

    def test_pop_drains_remaining_items_after_mark_done(self) -> None:
        queue: WorkQueue[str] = WorkQueue()
        queue.push("a")
        queue.mark_done()

        self.assertEqual(queue.pop(), "a")
        self.assertIsNone(queue.pop())

    def test_push_after_mark_done_is_ignored(self) -> None:
        queue: WorkQueue[str] = WorkQueue()
        queue.mark_done()
        queue.push("late")

        self.assertTrue(queue.done)
        self.assertEqual(len(queue), 0)
        self.assertIsNone(queue.pop())

    def test_blocked_pop_wakes_on_push(self) -> None:
        queue: WorkQueue[str] = WorkQueue()
        received: list[str | None] = []
        popper = threading.Thread(target=lambda: received.append(queue.pop()))
        popper.start()

        time.sleep(0.05)
        queue.push("work")
        popper.join(timeout=2.0)

        self.assertFalse(popper.is_alive())
        self.assertEqual(received, ["work"])

    def test_mark_done_wakes_every_blocked_popper(self) -> None:
        queue: WorkQueue[int] = WorkQueue()
        results: list[int | None] = []
        lock = threading.Lock()

        def pop_one() -> None:
            item = queue.pop()
            with lock:
                results.append(item)

        poppers = [threading.Thread(target=pop_one) for _ in range(4)]
        for popper in poppers:
            popper.start()
        time.sleep(0.05)
        queue.mark_done()
        for popper in poppers:
            popper.join(timeout=2.0)

        self.assertTrue(all(not popper.is_alive() for popper in poppers))
        self.assertEqual(results, [None, None, None, None])

    def test_each_item_is_delivered_to_exactly_one_popper(self) -> None:
        queue: WorkQueue[int] = WorkQueue()
        seen: list[int] = []
        lock = threading.Lock()

        def drain() -> None:
            while True:
                item = queue.pop()
                if item is None:
                    return
                with lock:
                    seen.append(item)

        workers = [threading.Thread(target=drain) for _ in range(6)]
        for worker in workers:
            worker.start()
        for item in range(500):
            queue.push(item)
        queue.mark_done()
        for worker in workers:
            worker.join(timeout=5.0)

        self.assertEqual(sorted(seen), list(range(500)))


if __name__ == "__main__":
    unittest.main()
