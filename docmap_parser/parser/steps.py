"""Walk the linked list of steps of a docmap."""

from collections.abc import Iterator

import structlog

from docmap_parser.models import DocMap, Step

from .errors import DocmapStructureError

logger = structlog.get_logger(__name__)


def iter_steps(docmap: DocMap) -> Iterator[Step]:
    """Yield steps in order, starting at ``first-step``.

    A string ``next-step`` is looked up in ``docmap.steps``; an inline step is
    followed directly. The walk ends at a missing pointer or an unknown id.

    Raises:
        DocmapStructureError: If a step is reached twice.
    """
    visited: set[int] = set()

    step_id: str | None = docmap.first_step
    step = docmap.steps.get(docmap.first_step)

    while step is not None:
        if id(step) in visited:
            raise DocmapStructureError(
                f"Docmap step graph has a cycle at step {step_id or '<inline>'}"
            )
        visited.add(id(step))

        yield step

        pointer = step.next_step
        if isinstance(pointer, str):
            step_id = pointer
            step = docmap.steps.get(pointer)
            if step is None:
                logger.debug("next_step_not_found", step_id=pointer)
        else:
            step_id = None
            step = pointer


def collect_steps(docmap: DocMap) -> list[Step]:
    """Materialize the ordered step sequence of a docmap.

    Raises:
        DocmapStructureError: If the docmap has no steps, the first step
            cannot be resolved, or the graph has a cycle.
    """
    if not docmap.steps:
        raise DocmapStructureError("Docmap has no steps")

    steps = list(iter_steps(docmap))
    if not steps:
        logger.warning("first_step_not_found", first_step=docmap.first_step)
        raise DocmapStructureError("Docmap has no steps")

    logger.debug("steps_resolved", docmap_id=docmap.id, step_count=len(steps))
    return steps
