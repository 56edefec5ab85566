"""Resolve docmaps into the version history of a manuscript."""

__version__ = "0.1.0"

from docmap_parser.models import DocMap, ManuscriptData
from docmap_parser.parser import (
    DocmapEmptyError,
    DocmapError,
    DocmapStructureError,
    load_docmap,
    parse_docmap,
)

__all__ = [
    "__version__",
    "DocMap",
    "ManuscriptData",
    "DocmapError",
    "DocmapEmptyError",
    "DocmapStructureError",
    "load_docmap",
    "parse_docmap",
]
