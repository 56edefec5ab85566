"""Errors raised while resolving a docmap."""


class DocmapError(Exception):
    """Base error for docmap resolution."""

    pass


class DocmapStructureError(DocmapError):
    """The step graph cannot be walked: no steps, a cycle, or malformed input."""

    pass


class DocmapEmptyError(DocmapError):
    """Steps were visited but no manuscript version was ever created."""

    pass
