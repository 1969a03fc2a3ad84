"""Output formats for directory listings.

- ``normal``: dated rows with attributes and sizes
- ``wide``: column-major name grid
- ``bare``: names or paths only
"""

from __future__ import annotations

from typing import TextIO

from ..file_model import TimeField
from ..theme import PLAIN_THEME, ListingTheme
from ..volume import VolumeInfo
from .bare import BareDisplayer
from .common import ResultsDisplayer, VolumeLookup, format_number, size_column_width
from .normal import NormalDisplayer
from .types import DirectoryLevel, Displayer, NodeSummary, root_level
from .wide import WideDisplayer


def make_displayer(
    *,
    bare: bool = False,
    wide: bool = False,
    stream: TextIO | None = None,
    theme: ListingTheme = PLAIN_THEME,
    recurse: bool = False,
    time_field: TimeField = TimeField.WRITTEN,
    volume_lookup: VolumeLookup = VolumeInfo.for_path,
    width: int | None = None,
) -> ResultsDisplayer:
    """Build the displayer for the requested format; bare wins over wide."""
    if bare:
        cls: type[ResultsDisplayer] = BareDisplayer
    elif wide:
        cls = WideDisplayer
    else:
        cls = NormalDisplayer
    return cls(
        stream,
        theme=theme,
        recurse=recurse,
        time_field=time_field,
        volume_lookup=volume_lookup,
        width=width,
    )


__all__ = [
    "BareDisplayer",
    "DirectoryLevel",
    "Displayer",
    "NodeSummary",
    "NormalDisplayer",
    "ResultsDisplayer",
    "WideDisplayer",
    "format_number",
    "make_displayer",
    "root_level",
    "size_column_width",
]
