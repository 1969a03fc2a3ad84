"""Extended-attribute lookup used to report per-file side streams."""

from __future__ import annotations

import os
from pathlib import Path

from .types import StreamInfo


def streams_supported() -> bool:
    """Return whether this platform exposes extended attributes."""
    return hasattr(os, "listxattr") and hasattr(os, "getxattr")


def read_streams(path: Path) -> tuple[StreamInfo, ...]:
    """Return ``path``'s extended attributes as named streams.

    Unsupported platforms and unreadable files report no streams.
    """
    if not streams_supported():
        return ()
    try:
        names = os.listxattr(path, follow_symlinks=False)
    except OSError:
        return ()

    streams: list[StreamInfo] = []
    for name in names:
        try:
            size = len(os.getxattr(path, name, follow_symlinks=False))
        except OSError:
            continue
        streams.append(StreamInfo(name=f":{name}", size=size))
    return tuple(streams)


__all__ = ["streams_supported", "read_streams"]
