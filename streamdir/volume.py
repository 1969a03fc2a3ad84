"""Mount point and free-space lookup for listing headers and footers."""

from __future__ import annotations

import os
import shutil
from dataclasses import dataclass
from pathlib import Path


def find_mount_point(path: Path) -> Path:
    """Return the nearest ancestor of ``path`` that is a mount point."""
    current = Path(os.path.abspath(path))
    while not os.path.ismount(current):
        parent = current.parent
        if parent == current:
            break
        current = parent
    return current


@dataclass(frozen=True)
class VolumeInfo:
    mount_point: Path
    total_bytes: int
    free_bytes: int

    @classmethod
    def for_path(cls, path: Path) -> VolumeInfo | None:
        """Return volume figures for ``path``, or ``None`` when they cannot be read."""
        try:
            mount_point = find_mount_point(path)
            usage = shutil.disk_usage(path)
        except OSError:
            return None
        return cls(mount_point=mount_point, total_bytes=int(usage.total), free_bytes=int(usage.free))


__all__ = ["VolumeInfo", "find_mount_point"]
