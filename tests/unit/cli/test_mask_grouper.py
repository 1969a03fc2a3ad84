"""Tests for splitting masks into per-directory listings."""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from streamdir.mask_grouper import MaskGroup, group_masks_by_directory, is_pure_mask, split_mask


class SplitMaskTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name).resolve()
        (self.root / "src").mkdir()
        (self.root / "src" / "main.py").write_text("", encoding="utf-8")

    def test_pure_masks_have_no_separator(self) -> None:
        self.assertTrue(is_pure_mask("*.py"))
        self.assertFalse(is_pure_mask("src/*.py"))
        self.assertFalse(is_pure_mask("src\\*.py"))

    def test_pure_glob_applies_to_current_directory(self) -> None:
        self.assertEqual(split_mask("*.py", self.root), (self.root, "*.py"))

    def test_directory_mask_lists_everything_inside(self) -> None:
        self.assertEqual(split_mask("src", self.root), (self.root / "src", "*"))
        self.assertEqual(split_mask("src/", self.root), (self.root / "src", "*"))

    def test_directory_and_pattern_are_split(self) -> None:
        self.assertEqual(split_mask("src/*.py", self.root), (self.root / "src", "*.py"))
        self.assertEqual(
            split_mask(str(self.root / "src" / "main.py"), Path("/unused")),
            (self.root / "src", "main.py"),
        )

    def test_plain_name_that_is_not_a_directory_stays_a_spec(self) -> None:
        self.assertEqual(split_mask("README", self.root), (self.root, "README"))


class GroupMasksTests(unittest.TestCase):
    def test_no_masks_lists_current_directory(self) -> None:
        cwd = Path("/work")
        self.assertEqual(group_masks_by_directory([], cwd), [MaskGroup(cwd, ("*",))])

    def test_groups_keep_first_seen_order_and_drop_duplicate_specs(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            (root / "lib").mkdir()

            groups = group_masks_by_directory(
                ["*.py", "lib/*.c", "*.md", "*.py", "lib/*.h"],
                root,
            )

        self.assertEqual(
            groups,
            [
                MaskGroup(root, ("*.py", "*.md")),
                MaskGroup(root / "lib", ("*.c", "*.h")),
            ],
        )

    def test_symlinked_cwd_yields_one_group_for_pure_and_dot_masks(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp).resolve()
            real = root / "real"
            real.mkdir()
            link = root / "link"
            try:
                link.symlink_to(real, target_is_directory=True)
            except (OSError, NotImplementedError):
                self.skipTest("symlinks unavailable")

            groups = group_masks_by_directory(["*.py", "."], link)

        self.assertEqual(groups, [MaskGroup(real, ("*.py", "*"))])


if __name__ == "__main__":
    unittest.main()
