"""Tests for run-wide listing totals."""

from __future__ import annotations

import unittest

from streamdir.file_model import DirectoryCounters
from streamdir.lister import ListingTotals


class ListingTotalsTests(unittest.TestCase):
    def test_add_counters_maps_directory_fields(self) -> None:
        totals = ListingTotals()
        totals.add_counters(
            DirectoryCounters(
                file_count=3,
                subdirectory_count=2,
                bytes_used=300,
                stream_count=1,
                stream_bytes_used=12,
                largest_file_size=200,
            )
        )

        self.assertEqual(
            totals,
            ListingTotals(file_count=3, directory_count=2, file_bytes=300, stream_count=1, stream_bytes=12),
        )

    def test_add_accumulates(self) -> None:
        totals = ListingTotals(file_count=1, file_bytes=10)
        totals.add(ListingTotals(file_count=2, directory_count=1, file_bytes=5))

        self.assertEqual(totals.file_count, 3)
        self.assertEqual(totals.directory_count, 1)
        self.assertEqual(totals.file_bytes, 15)


if __name__ == "__main__":
    unittest.main()
