"""Group command-line masks into one listing per directory."""

from __future__ import annotations

import glob
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class MaskGroup:
    directory: Path
    file_specs: tuple[str, ...]


def is_pure_mask(mask: str) -> bool:
    """Whether ``mask`` is a bare file spec with no directory part."""
    return "/" not in mask and "\\" not in mask


def _resolve(candidate: Path, cwd: Path) -> Path:
    path = candidate if candidate.is_absolute() else cwd / candidate
    try:
        return path.resolve()
    except OSError:
        return path


def split_mask(mask: str, cwd: Path) -> tuple[Path, str]:
    """Split ``mask`` into ``(directory, file_spec)``.

    A mask naming a directory lists everything in it. Otherwise the last
    component is the spec and the rest is the directory.
    """
    if is_pure_mask(mask) and glob.has_magic(mask):
        return cwd, mask

    path = _resolve(Path(mask), cwd)
    if mask.endswith(("/", "\\")) or path.is_dir():
        return path, "*"
    if is_pure_mask(mask):
        return cwd, mask
    return path.parent, path.name or "*"


def group_masks_by_directory(masks: Iterable[str], cwd: Path) -> list[MaskGroup]:
    """Return one group per distinct directory, in first-seen order.

    ``cwd`` is resolved once so pure masks and directory masks naming the
    same directory land in one group.
    """
    cwd = _resolve(cwd, Path.cwd())
    order: list[Path] = []
    specs: dict[Path, list[str]] = {}
    for mask in masks:
        directory, spec = split_mask(mask, cwd)
        if directory not in specs:
            order.append(directory)
            specs[directory] = []
        if spec not in specs[directory]:
            specs[directory].append(spec)

    if not order:
        return [MaskGroup(cwd, ("*",))]
    return [MaskGroup(directory, tuple(specs[directory])) for directory in order]


__all__ = ["MaskGroup", "group_masks_by_directory", "is_pure_mask", "split_mask"]
