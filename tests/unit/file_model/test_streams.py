"""Tests for extended-attribute stream lookup."""

from __future__ import annotations

import unittest
from pathlib import Path
from unittest import mock

from streamdir.file_model import StreamInfo, read_streams


class ReadStreamsTests(unittest.TestCase):
    def test_attributes_become_named_streams(self) -> None:
        values = {"user.tag": b"blue", "user.origin": b"https://example.invalid/x"}
        with (
            mock.patch("streamdir.file_model.streams.os.listxattr", create=True, return_value=list(values)),
            mock.patch(
                "streamdir.file_model.streams.os.getxattr",
                create=True,
                side_effect=lambda _path, name, follow_symlinks=True: values[name],
            ),
        ):
            streams = read_streams(Path("/x/file"))

        self.assertEqual(
            streams,
            (StreamInfo(":user.tag", 4), StreamInfo(":user.origin", 25)),
        )

    def test_unreadable_attribute_is_skipped(self) -> None:
        def getxattr(_path, name, follow_symlinks=True):
            if name == "user.secret":
                raise PermissionError(13, "denied")
            return b"ok"

        with (
            mock.patch("streamdir.file_model.streams.os.listxattr", create=True, return_value=["user.secret", "user.ok"]),
            mock.patch("streamdir.file_model.streams.os.getxattr", create=True, side_effect=getxattr),
        ):
            self.assertEqual(read_streams(Path("/x/file")), (StreamInfo(":user.ok", 2),))

    def test_listing_failure_reports_no_streams(self) -> None:
        with (
            mock.patch("streamdir.file_model.streams.os.listxattr", create=True, side_effect=OSError(95, "unsupported")),
            mock.patch("streamdir.file_model.streams.os.getxattr", create=True),
        ):
            self.assertEqual(read_streams(Path("/x/file")), ())

    def test_unsupported_platform_reports_no_streams(self) -> None:
        with mock.patch("streamdir.file_model.streams.streams_supported", return_value=False):
            self.assertEqual(read_streams(Path("/x/file")), ())


if __name__ == "__main__":
    unittest.main()
