"""Turn a docmap step into publishing events.

Explicit assertions are read first. When a step carries no assertion for an
event, the event is inferred from how many manuscript, evaluation and author
response expressions the step consumes and produces:

    manuscript in | manuscript out | evaluation in | evaluation out | event
    --------------+----------------+---------------+----------------+------------------
          0       |       1        |       0       |       0        | Published
          1       |       1        |       0       |       0        | Republished
          1       |      any       |       0       |      1+        | PeerReviewed (+ Republished)
          1       |       1        |      1+       |       0        | Published (revision)

An author response output on a step with one manuscript input adds an
AuthorResponded event regardless of the evaluations around it.
"""

from dataclasses import dataclass, field
from typing import Optional

import structlog

from docmap_parser.models import (
    Action,
    Assertion,
    AssertionStatus,
    AuthorRespondedEvent,
    DraftEvent,
    EvaluationExpression,
    EvaluationParticipant,
    Expression,
    Institution,
    Participant,
    PeerReviewedEvent,
    PublishedEvent,
    PublishingEvent,
    RepublishedEvent,
    Step,
    UnderReviewEvent,
)

from .expressions import is_author_response, is_evaluation, is_manuscript

logger = structlog.get_logger(__name__)


@dataclass
class StepExpressions:
    """Expressions of a step grouped by role and direction."""

    manuscript_inputs: list[Expression] = field(default_factory=list)
    manuscript_outputs: list[Expression] = field(default_factory=list)
    evaluation_inputs: list[Expression] = field(default_factory=list)
    evaluation_outputs: list[EvaluationExpression] = field(default_factory=list)
    author_response_outputs: list[EvaluationExpression] = field(default_factory=list)


def map_participant(participant: Participant) -> EvaluationParticipant:
    """Flatten an action participant into name, role and institution."""
    affiliation = participant.actor.affiliation
    institution = (
        Institution(name=affiliation.name, location=affiliation.location)
        if affiliation
        else None
    )
    return EvaluationParticipant(
        name=participant.actor.name,
        role=participant.role,
        institution=institution,
    )


def _with_participants(action: Action, output: Expression) -> EvaluationExpression:
    participants = [map_participant(p) for p in action.participants]
    return EvaluationExpression.from_output(output, participants)


def extract_expressions(step: Step) -> StepExpressions:
    """Group a step's inputs and action outputs by expression role."""
    extracted = StepExpressions(
        manuscript_inputs=[i for i in step.inputs if is_manuscript(i)],
        evaluation_inputs=[i for i in step.inputs if is_evaluation(i)],
    )

    for action in step.actions:
        for output in action.outputs:
            if is_manuscript(output):
                extracted.manuscript_outputs.append(output)
            elif is_evaluation(output):
                extracted.evaluation_outputs.append(_with_participants(action, output))
            elif is_author_response(output):
                extracted.author_response_outputs.append(_with_participants(action, output))

    return extracted


def step_expressions(step: Step) -> list[Expression]:
    """Every expression a step mentions: inputs, action outputs and assertion items."""
    expressions = list(step.inputs)
    for action in step.actions:
        expressions.extend(action.outputs)
    expressions.extend(assertion.item for assertion in step.assertions)
    return expressions


def find_manuscript_assertion(step: Step, status: AssertionStatus) -> Optional[Assertion]:
    """Return the first assertion with ``status`` about a manuscript expression."""
    return next(
        (
            assertion
            for assertion in step.assertions
            if assertion.status == status.value and is_manuscript(assertion.item)
        ),
        None,
    )


def _infer_published(items: StepExpressions) -> Optional[PublishedEvent]:
    if (
        len(items.manuscript_inputs) == 0
        and len(items.manuscript_outputs) == 1
        and len(items.evaluation_inputs) == 0
        and len(items.evaluation_outputs) == 0
    ):
        return PublishedEvent(asserted=False, item=items.manuscript_outputs[0])
    return None


def _infer_republished(items: StepExpressions) -> Optional[RepublishedEvent]:
    if (
        len(items.manuscript_inputs) == 1
        and len(items.manuscript_outputs) == 1
        and len(items.evaluation_inputs) == 0
        and len(items.evaluation_outputs) == 0
    ):
        return RepublishedEvent(
            asserted=False,
            item=items.manuscript_outputs[0],
            original_item=items.manuscript_inputs[0],
        )
    return None


def _infer_peer_reviewed(items: StepExpressions) -> list[PublishingEvent]:
    if not (
        len(items.manuscript_inputs) == 1
        and len(items.evaluation_inputs) == 0
        and len(items.evaluation_outputs) > 0
    ):
        return []

    reviewed = items.manuscript_inputs[0]
    events: list[PublishingEvent] = [
        PeerReviewedEvent(
            asserted=False,
            item=reviewed,
            evaluations=items.evaluation_outputs,
        )
    ]

    # sometimes the reviewed manuscript is republished in the same step
    if items.manuscript_outputs:
        events.append(
            RepublishedEvent(
                asserted=False,
                item=items.manuscript_outputs[0],
                original_item=reviewed,
            )
        )
    return events


def _infer_revision(items: StepExpressions) -> Optional[PublishedEvent]:
    # a new version produced in response to the evaluations of the previous one
    if (
        len(items.manuscript_inputs) == 1
        and len(items.manuscript_outputs) == 1
        and len(items.evaluation_inputs) > 0
        and len(items.evaluation_outputs) == 0
    ):
        return PublishedEvent(asserted=False, item=items.manuscript_outputs[0])
    return None


def _infer_author_responded(items: StepExpressions) -> Optional[AuthorRespondedEvent]:
    if len(items.manuscript_inputs) == 1 and len(items.author_response_outputs) == 1:
        return AuthorRespondedEvent(
            asserted=False,
            item=items.manuscript_inputs[0],
            response=items.author_response_outputs[0],
        )
    return None


def classify_step(step: Step) -> list[PublishingEvent]:
    """Derive the ordered publishing events of a single step.

    Events are appended in a fixed order: asserted Published, inferred
    Published, asserted UnderReview, inferred Republished, inferred
    PeerReviewed (with its optional Republished), inferred revision,
    inferred AuthorResponded, asserted Draft.

    Args:
        step: The step to classify.

    Returns:
        Events for this step; empty when nothing matches.
    """
    events: list[PublishingEvent] = []
    items = extract_expressions(step)

    published = find_manuscript_assertion(step, AssertionStatus.PUBLISHED)
    if published:
        events.append(
            PublishedEvent(asserted=True, item=published.item, date=published.happened)
        )

    inferred_published = _infer_published(items)
    if inferred_published:
        events.append(inferred_published)

    under_review = find_manuscript_assertion(step, AssertionStatus.UNDER_REVIEW)
    if under_review:
        events.append(
            UnderReviewEvent(asserted=True, item=under_review.item, date=under_review.happened)
        )

    republished = _infer_republished(items)
    if republished:
        events.append(republished)

    events.extend(_infer_peer_reviewed(items))

    revision = _infer_revision(items)
    if revision:
        events.append(revision)

    author_responded = _infer_author_responded(items)
    if author_responded:
        events.append(author_responded)

    draft = find_manuscript_assertion(step, AssertionStatus.DRAFT)
    if draft:
        events.append(DraftEvent(asserted=True, item=draft.item, date=draft.happened))

    logger.debug(
        "step_classified",
        events=[event.type.value for event in events],
        manuscript_inputs=len(items.manuscript_inputs),
        manuscript_outputs=len(items.manuscript_outputs),
    )
    return events
