"""Bare listing: one name per line, no headers or summaries."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

from ..theme import paint
from .common import ResultsDisplayer, name_style
from .types import DirectoryLevel, NodeSummary

if TYPE_CHECKING:
    from ..lister.totals import ListingTotals


class BareDisplayer(ResultsDisplayer):
    """Names only; full paths when recursing so lines stay unambiguous.

    Errors go to stderr to keep stdout consumable by other tools.
    """

    def render_node(self, level: DirectoryLevel, summary: NodeSummary) -> None:
        self.render_matches(summary)
        self.flush()

    def render_matches(self, summary: NodeSummary) -> None:
        for entry in summary.matches:
            text = str(summary.path / entry.name) if self.recurse else entry.name
            self.line(paint(self.theme, name_style(self.theme, entry), text))

    def render_error(self, path: Path, detail: str) -> None:
        sys.stderr.write(f"Error accessing directory: {detail}\n")
        sys.stderr.flush()

    def render_summary(self, totals: ListingTotals, root: Path) -> None:
        return None


__all__ = ["BareDisplayer"]
