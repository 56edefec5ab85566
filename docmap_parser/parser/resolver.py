"""Resolve a docmap into the version history of its manuscript.

Flow:
1. Load        → DocMap (from a model, a dict or a JSON string)
2. Traverse    → ordered list of Steps
3. Classify    → PublishingEvents, step by step
4. Reduce      → Manuscript records + umbrella metadata from every expression
5. Finalize    → ManuscriptData with resolved version identifiers
"""

from typing import Any, Union

import structlog
from pydantic import ValidationError

from docmap_parser.models import (
    DocMap,
    Manuscript,
    ManuscriptData,
    Preprint,
    PublishingEvent,
    Step,
    VersionedManuscript,
)

from .classify import classify_step, step_expressions
from .errors import DocmapEmptyError, DocmapStructureError
from .reducer import ManuscriptReducer, ReductionResult
from .steps import collect_steps

logger = structlog.get_logger(__name__)

DocmapInput = Union[DocMap, dict[str, Any], str, bytes]


def load_docmap(docmap: DocmapInput) -> DocMap:
    """Build a DocMap from a model, a parsed JSON object or JSON text.

    ``steps`` becomes an id → Step mapping and ``happened``/``published``
    values become datetimes.

    Raises:
        DocmapStructureError: If the input is not a valid docmap.
    """
    if isinstance(docmap, DocMap):
        return docmap

    try:
        if isinstance(docmap, (str, bytes)):
            return DocMap.model_validate_json(docmap)
        return DocMap.model_validate(docmap)
    except ValidationError as e:
        logger.error("docmap_invalid", errors=e.error_count())
        raise DocmapStructureError(f"Invalid docmap: {e}") from e


def classify_steps(docmap: DocMap) -> list[PublishingEvent]:
    """Classify every reachable step, concatenating events in step order."""
    events: list[PublishingEvent] = []
    for step in collect_steps(docmap):
        events.extend(classify_step(step))
    return events


def reduce_steps(steps: list[Step]) -> ReductionResult:
    """Classify and fold steps in order.

    Every expression of a step feeds the umbrella metadata before the step's
    events are applied, so a ``partOf`` on an expression no event carries is
    still collected.
    """
    reducer = ManuscriptReducer()
    for index, step in enumerate(steps):
        reducer.observe(*step_expressions(step))
        step_events = classify_step(step)
        logger.debug("step_events", step_index=index, count=len(step_events))
        for event in step_events:
            reducer.apply(event)
    return reducer.result()


def _chain_root(records: list[Manuscript], record: Manuscript) -> Manuscript:
    """Follow ``republished_from`` back to the first manuscript of the chain."""
    seen = {id(record)}
    while record.republished_from is not None:
        previous = records[record.republished_from]
        if id(previous) in seen:
            break
        seen.add(id(previous))
        record = previous
    return record


def finalize_versions(result: ReductionResult) -> ManuscriptData:
    """Turn reduced records into versions with resolved identifiers.

    The version identifier is the record's own, else that of the preprint it
    was republished from, else its 1-based position in the version list.

    Raises:
        DocmapEmptyError: If no manuscript record was created.
    """
    if not result.records:
        raise DocmapEmptyError("Docmap has no preprints")

    versions: list[VersionedManuscript] = []
    for position, record in enumerate(result.current_records, start=1):
        root = _chain_root(result.records, record)
        predecessor = (
            result.records[record.republished_from]
            if record.republished_from is not None
            else None
        )
        versions.append(
            VersionedManuscript(
                id=record.id,
                type=record.type,
                doi=record.doi,
                version_identifier=(
                    record.version_identifier or root.version_identifier or str(position)
                ),
                published_date=record.published_date,
                sent_for_review_date=record.sent_for_review_date,
                reviewed_date=record.reviewed_date,
                author_response_date=record.author_response_date,
                url=record.url,
                content=list(record.content),
                license=record.license,
                peer_review=record.peer_review.model_copy(deep=True) if record.peer_review else None,
                preprint=Preprint.from_manuscript(root),
                republished_from=Preprint.from_manuscript(predecessor) if predecessor else None,
            )
        )

    umbrella = None if result.umbrella.is_empty() else result.umbrella
    return ManuscriptData(id=versions[-1].id, manuscript=umbrella, versions=versions)


def parse_docmap(docmap: DocmapInput) -> ManuscriptData:
    """Resolve a docmap into its manuscript's versions.

    Args:
        docmap: A DocMap, a parsed JSON object or JSON text.

    Returns:
        ManuscriptData with versions in creation order.

    Raises:
        DocmapStructureError: If the docmap has no reachable steps, a step
            cycle, or is malformed.
        DocmapEmptyError: If no step describes a preprint or version of record.
    """
    docmap_struct = load_docmap(docmap)
    steps = collect_steps(docmap_struct)
    result = reduce_steps(steps)
    data = finalize_versions(result)

    logger.info(
        "docmap_parsed",
        docmap_id=docmap_struct.id,
        steps=len(steps),
        records=len(result.records),
        versions=len(data.versions),
    )
    return data
