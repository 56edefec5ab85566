"""Builders for docmaps, used by tests and examples.

Steps are chained inline with ``add_next_step`` and flattened into an
id-keyed mapping (``_:b0``, ``_:b1``...) by ``generate_docmap``.
"""

from datetime import datetime, timezone
from typing import Optional

from docmap_parser.models import (
    Action,
    Assertion,
    AssertionStatus,
    DocMap,
    Expression,
    ExpressionType,
    Manifestation,
    ManifestationType,
    ManuscriptPartOf,
    Organization,
    Participant,
    Person,
    Publisher,
    Step,
)

JSONLD_FRAME_URL = "https://w3id.org/docmaps/context.jsonld"

JSONLD_ADDON_FRAME = {
    "updated": {"@id": "dcterms:updated", "@type": "xsd:date"},
    "author-response": "fabio:Reply",
    "decision-letter": "fabio:Letter",
    "preprint": "fabio:Preprint",
    "version-of-record": "fabio:DefinitiveVersion",
    "update-summary": "fabio:ExecutiveSummary",
    "draft": "pso:draft",
    "manuscript-published": "pso:published",
    "republished": "pso:republished",
    "identifier": "dcterms:identifier",
    "happened": {"@id": "pwo:happened", "@type": "xsd:date"},
    "versionIdentifier": "prism:versionIdentifier",
}


# =============================================================================
# Expressions
# =============================================================================

def generate_preprint(
    doi: str,
    published: Optional[datetime] = None,
    url: Optional[str] = None,
    version: Optional[str] = None,
    content: Optional[list[Manifestation]] = None,
    license: Optional[str] = None,
    manuscript: Optional[ManuscriptPartOf] = None,
) -> Expression:
    return Expression(
        type=ExpressionType.PREPRINT.value,
        doi=doi,
        url=url,
        published=published,
        version_identifier=version,
        content=content,
        license=license,
        part_of=manuscript,
    )


def generate_revised_preprint(
    doi: str,
    published: Optional[datetime] = None,
    url: Optional[str] = None,
    version: Optional[str] = None,
    content: Optional[list[Manifestation]] = None,
) -> Expression:
    return Expression(
        type=ExpressionType.REVISED_PREPRINT.value,
        doi=doi,
        url=url,
        published=published,
        version_identifier=version,
        content=content,
    )


def generate_enhanced_preprint(
    identifier: str,
    version: str,
    doi: str,
    url: Optional[str] = None,
    content: Optional[list[Manifestation]] = None,
    published: Optional[datetime] = None,
    license: Optional[str] = None,
) -> Expression:
    """A preprint republished by the publisher under its own identifier."""
    return Expression(
        type=ExpressionType.PREPRINT.value,
        identifier=identifier,
        version_identifier=version,
        doi=doi,
        url=url,
        content=content,
        published=published,
        license=license,
    )


def generate_version_of_record(
    published: datetime,
    content: list[Manifestation],
    doi: Optional[str] = None,
    url: Optional[str] = None,
) -> Expression:
    return Expression(
        type=ExpressionType.VERSION_OF_RECORD.value,
        doi=doi,
        published=published,
        url=url,
        content=content,
    )


def _generate_evaluation(
    expression_type: ExpressionType,
    published: datetime,
    content: list[Manifestation],
    doi: Optional[str],
    url: Optional[str],
) -> Expression:
    return Expression(
        type=expression_type.value,
        doi=doi,
        published=published,
        url=url,
        content=content,
    )


def generate_peer_review(
    published: datetime,
    content: list[Manifestation],
    doi: Optional[str] = None,
    url: Optional[str] = None,
) -> Expression:
    return _generate_evaluation(ExpressionType.PEER_REVIEW, published, content, doi, url)


def generate_evaluation_summary(
    published: datetime,
    content: list[Manifestation],
    doi: Optional[str] = None,
    url: Optional[str] = None,
) -> Expression:
    return _generate_evaluation(ExpressionType.EVALUATION_SUMMARY, published, content, doi, url)


def generate_author_response(
    published: datetime,
    content: list[Manifestation],
    doi: Optional[str] = None,
    url: Optional[str] = None,
) -> Expression:
    return _generate_evaluation(ExpressionType.AUTHOR_RESPONSE, published, content, doi, url)


def generate_reply(
    published: datetime,
    content: list[Manifestation],
    doi: Optional[str] = None,
    url: Optional[str] = None,
) -> Expression:
    return _generate_evaluation(ExpressionType.REPLY, published, content, doi, url)


def generate_update_summary(
    published: datetime,
    content: list[Manifestation],
    doi: Optional[str] = None,
    url: Optional[str] = None,
) -> Expression:
    return _generate_evaluation(ExpressionType.UPDATE_SUMMARY, published, content, doi, url)


def generate_insight(
    title: str,
    url: str,
    description: Optional[str] = None,
    thumbnail: Optional[str] = None,
) -> Expression:
    return Expression(
        type=ExpressionType.INSIGHT.value,
        title=title,
        url=url,
        description=description,
        thumbnail=thumbnail,
    )


def generate_content(type: ManifestationType, url: str) -> Manifestation:
    return Manifestation(type=type.value, url=url)


def generate_web_content(url: str) -> Manifestation:
    return generate_content(ManifestationType.WEB_PAGE, url)


def generate_manuscript(
    doi: Optional[str] = None,
    identifier: Optional[str] = None,
    volume_identifier: Optional[str] = None,
    electronic_article_identifier: Optional[str] = None,
    subject_disciplines: Optional[list[str]] = None,
    complement: Optional[list[Expression]] = None,
    published: Optional[datetime] = None,
) -> ManuscriptPartOf:
    return ManuscriptPartOf(
        doi=doi,
        identifier=identifier,
        volume_identifier=volume_identifier,
        electronic_article_identifier=electronic_article_identifier,
        subject_disciplines=subject_disciplines,
        complement=complement,
        published=published,
    )


# =============================================================================
# Participants, actions and steps
# =============================================================================

def generate_organization(name: str, location: Optional[str] = None) -> Organization:
    return Organization(name=name, location=location)


def generate_person_participant(
    name: str,
    role: str,
    affiliation: Optional[Organization] = None,
) -> Participant:
    return Participant(actor=Person(name=name, affiliation=affiliation), role=role)


def generate_action(participants: list[Participant], outputs: list[Expression]) -> Action:
    return Action(participants=participants, outputs=outputs)


def generate_step(
    inputs: list[Expression],
    actions: list[Action],
    assertions: list[Assertion],
) -> Step:
    return Step(inputs=inputs, actions=actions, assertions=assertions)


def add_next_step(previous_step: Step, next_step: Step) -> Step:
    """Link two inline steps and return the new last step."""
    previous_step.next_step = next_step
    next_step.previous_step = previous_step
    return next_step


def simplify_expression(expression: Expression) -> Expression:
    """Reference an expression by identity only, as later steps do."""
    return Expression(
        type=expression.type,
        doi=expression.doi,
        version_identifier=expression.version_identifier,
        url=expression.url if expression.doi is None else None,
    )


# =============================================================================
# Assertions
# =============================================================================

def generate_assertion(
    item: Expression,
    status: AssertionStatus,
    date: Optional[datetime] = None,
) -> Assertion:
    return Assertion(item=item, status=status.value, happened=date)


def generate_published_assertion(item: Expression, date: Optional[datetime] = None) -> Assertion:
    return generate_assertion(item, AssertionStatus.PUBLISHED, date)


def generate_republished_assertion(item: Expression, date: Optional[datetime] = None) -> Assertion:
    return generate_assertion(item, AssertionStatus.REPUBLISHED, date)


def generate_peer_reviewed_assertion(item: Expression, date: Optional[datetime] = None) -> Assertion:
    return generate_assertion(item, AssertionStatus.PEER_REVIEWED, date)


def generate_corrected_assertion(item: Expression, date: Optional[datetime] = None) -> Assertion:
    return generate_assertion(item, AssertionStatus.CORRECTED, date)


def generate_enhanced_assertion(item: Expression, date: Optional[datetime] = None) -> Assertion:
    return generate_assertion(item, AssertionStatus.ENHANCED, date)


def generate_revised_assertion(item: Expression, date: Optional[datetime] = None) -> Assertion:
    return generate_assertion(item, AssertionStatus.REVISED, date)


def generate_under_review_assertion(item: Expression, date: Optional[datetime] = None) -> Assertion:
    return generate_assertion(item, AssertionStatus.UNDER_REVIEW, date)


def generate_version_of_record_assertion(item: Expression, date: Optional[datetime] = None) -> Assertion:
    return generate_assertion(item, AssertionStatus.VERSION_OF_RECORD, date)


def generate_draft_assertion(item: Expression, date: Optional[datetime] = None) -> Assertion:
    return generate_assertion(item, AssertionStatus.DRAFT, date)


# =============================================================================
# Docmap
# =============================================================================

def _find_first_step(step: Step) -> Step:
    seen = {id(step)}
    while isinstance(step.previous_step, Step):
        step = step.previous_step
        if id(step) in seen:
            raise ValueError("Cannot find first step, the chain is circular")
        seen.add(id(step))
    if isinstance(step.previous_step, str):
        raise ValueError("Cannot find first step, this step has already been dereferenced")
    return step


def dereference_steps(step: Step) -> tuple[str, dict[str, Step]]:
    """Flatten an inline chain of steps into ``_:b<n>`` keyed steps.

    Returns:
        Tuple of (first step id, steps by id).
    """
    steps: dict[str, Step] = {}
    current: Optional[Step] = _find_first_step(step)
    index = 0

    while current is not None:
        following = current.next_step if isinstance(current.next_step, Step) else None
        steps[f"_:b{index}"] = Step(
            inputs=current.inputs,
            actions=current.actions,
            assertions=current.assertions,
            next_step=f"_:b{index + 1}" if following is not None else None,
            previous_step=f"_:b{index - 1}" if index > 0 else None,
        )
        current = following
        index += 1

    return "_:b0", steps


def generate_docmap(id: str, publisher: Publisher, first_step: Step) -> DocMap:
    first_step_id, steps = dereference_steps(first_step)
    now = datetime.now(timezone.utc)
    return DocMap(
        context=[JSONLD_FRAME_URL, JSONLD_ADDON_FRAME],
        id=id,
        created=now,
        updated=now,
        publisher=publisher,
        first_step=first_step_id,
        steps=steps,
    )


def docmap_to_json(docmap: DocMap, indent: Optional[int] = None) -> str:
    """Serialize a docmap with its JSON-LD keys."""
    return docmap.model_dump_json(by_alias=True, exclude_none=True, indent=indent)
