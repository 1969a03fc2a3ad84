"""Public package surface for streamdir.

Exports ``main`` for programmatic CLI invocation and ``start`` for embedding
the listing engine. Most implementation lives in the ``lister``,
``file_model`` and ``display`` subpackages.
"""

from __future__ import annotations


def main(*args, **kwargs):
    """Lazily import CLI entrypoint to keep package imports lightweight."""
    from .cli import main as _main

    return _main(*args, **kwargs)


def start(*args, **kwargs):
    """Lazily import the engine entrypoint; see ``streamdir.lister.start``."""
    from .lister import start as _start

    return _start(*args, **kwargs)


__all__ = ["main", "start"]
