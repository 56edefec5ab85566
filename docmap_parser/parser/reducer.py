"""Fold publishing events into manuscript version records.

Records are found by identity (DOI plus optional version identifier) or
created on first reference, then updated in place. Republication links the
new record to the record it supersedes; superseded records stay in the
record list so later events can still resolve against them, and are only
dropped from the final version list.
"""

from dataclasses import dataclass, field
from typing import Callable, Optional

import structlog

from docmap_parser.models import (
    AuthorRespondedEvent,
    DraftEvent,
    Evaluation,
    EvaluationExpression,
    Expression,
    ExpressionType,
    ManifestationType,
    Manuscript,
    ManuscriptType,
    PeerReview,
    PeerReviewedEvent,
    PublishedEvent,
    PublishingEvent,
    PublishingEventType,
    RepublishedEvent,
    ReviewType,
    UmbrellaMetadata,
    UnderReviewEvent,
)

from .umbrella import accumulate_umbrella

logger = structlog.get_logger(__name__)

_REVIEW_TYPE_BY_EXPRESSION_TYPE: dict[str, ReviewType] = {
    ExpressionType.PEER_REVIEW.value: ReviewType.REVIEW,
    ExpressionType.EVALUATION_SUMMARY.value: ReviewType.EVALUATION_SUMMARY,
    ExpressionType.AUTHOR_RESPONSE.value: ReviewType.AUTHOR_RESPONSE,
    ExpressionType.REPLY.value: ReviewType.AUTHOR_RESPONSE,
}


@dataclass
class ReductionResult:
    """Records built by the fold and the umbrella metadata seen along the way."""

    records: list[Manuscript] = field(default_factory=list)
    umbrella: UmbrellaMetadata = field(default_factory=UmbrellaMetadata)

    @property
    def superseded(self) -> set[int]:
        """Indexes of records another record was republished from."""
        return {
            record.republished_from
            for record in self.records
            if record.republished_from is not None
        }

    @property
    def current_records(self) -> list[Manuscript]:
        """Records in creation order, without superseded ones."""
        superseded = self.superseded
        return [record for index, record in enumerate(self.records) if index not in superseded]


def _content_urls(expression: Expression) -> list[str]:
    return [item.url for item in expression.content or [] if item.url]


def is_manuscript_about(manuscript: Manuscript, expression: Expression) -> bool:
    """Whether ``expression`` refers to ``manuscript``.

    The DOI must match. An expression without a version identifier matches
    any version of that DOI.
    """
    if expression.doi != manuscript.doi:
        return False
    if expression.version_identifier and expression.version_identifier != manuscript.version_identifier:
        return False
    return True


def to_evaluation(expression: EvaluationExpression) -> Optional[Evaluation]:
    """Map an evaluation or author response expression to an Evaluation."""
    review_type = _REVIEW_TYPE_BY_EXPRESSION_TYPE.get(expression.type)
    if review_type is None:
        return None
    return Evaluation(
        review_type=review_type,
        date=expression.published,
        doi=expression.doi,
        content_urls=[
            item.url
            for item in expression.content or []
            if item.type == ManifestationType.WEB_PAGE.value and item.url
        ],
        participants=list(expression.participants),
    )


class ManuscriptReducer:
    """Stateful fold over a publishing event stream.

    One reducer per docmap: it owns its records and umbrella metadata.
    """

    def __init__(self) -> None:
        self.records: list[Manuscript] = []
        self.umbrella = UmbrellaMetadata()
        self._handlers: dict[PublishingEventType, Callable[..., None]] = {
            PublishingEventType.DRAFT: self._on_draft,
            PublishingEventType.PUBLISHED: self._on_published,
            PublishingEventType.UNDER_REVIEW: self._on_under_review,
            PublishingEventType.PEER_REVIEWED: self._on_peer_reviewed,
            PublishingEventType.AUTHOR_RESPONDED: self._on_author_responded,
            PublishingEventType.REPUBLISHED: self._on_republished,
        }

    # ------------------------------------------------------------------
    # Record lookup
    # ------------------------------------------------------------------

    def find(self, expression: Expression) -> Optional[Manuscript]:
        """Return the first record the expression refers to, if any."""
        return next(
            (record for record in self.records if is_manuscript_about(record, expression)),
            None,
        )

    def index_of(self, record: Manuscript) -> int:
        """Position of ``record`` in the record list, by identity."""
        return next(index for index, candidate in enumerate(self.records) if candidate is record)

    def descends_from(self, record: Manuscript, ancestor: Manuscript) -> bool:
        """Whether ``record``'s republication chain passes through ``ancestor``."""
        seen: set[int] = set()
        current: Optional[Manuscript] = record
        while current is not None and id(current) not in seen:
            if current is ancestor:
                return True
            seen.add(id(current))
            current = (
                self.records[current.republished_from]
                if current.republished_from is not None
                else None
            )
        return False

    def observe(self, *expressions: Expression) -> None:
        """Fold the ``partOf`` of ``expressions`` into the umbrella metadata."""
        self.umbrella = accumulate_umbrella(self.umbrella, *expressions)

    def find_or_create(self, expression: Expression) -> Optional[Manuscript]:
        """Find the record described by ``expression`` and merge into it.

        Creates the record when none matches. Returns None when the
        expression has no DOI and so cannot be identified.
        """
        self.umbrella = accumulate_umbrella(self.umbrella, expression)

        if not expression.doi:
            logger.warning(
                "manuscript_without_doi",
                type=expression.type,
                identifier=expression.identifier,
                url=expression.url,
            )
            return None

        record = self.find(expression)
        if record is None:
            return self._create(expression)

        record.content.extend(_content_urls(expression))
        if expression.published:
            record.published_date = expression.published
        if expression.url:
            record.url = expression.url
        if expression.license:
            record.license = expression.license
        return record

    def _create(self, expression: Expression) -> Manuscript:
        manuscript_type = (
            ManuscriptType.VERSION_OF_RECORD
            if expression.type == ExpressionType.VERSION_OF_RECORD.value
            else ManuscriptType.PREPRINT
        )
        record = Manuscript(
            id=expression.identifier or expression.doi,
            type=manuscript_type,
            doi=expression.doi,
            version_identifier=expression.version_identifier,
            published_date=expression.published,
            url=expression.url,
            content=_content_urls(expression),
            license=expression.license,
        )
        self.records.append(record)
        logger.debug(
            "manuscript_created",
            id=record.id,
            doi=record.doi,
            version=record.version_identifier,
            index=len(self.records) - 1,
        )
        return record

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def apply(self, event: PublishingEvent) -> None:
        """Apply one event to the records."""
        self._handlers[event.type](event)

    def _on_draft(self, event: DraftEvent) -> None:
        self.find_or_create(event.item)

    def _on_published(self, event: PublishedEvent) -> None:
        record = self.find_or_create(event.item)
        if record is not None and event.date:
            record.published_date = event.date

    def _on_under_review(self, event: UnderReviewEvent) -> None:
        record = self.find_or_create(event.item)
        if record is not None and event.date:
            record.sent_for_review_date = event.date

    def _on_peer_reviewed(self, event: PeerReviewedEvent) -> None:
        self.umbrella = accumulate_umbrella(self.umbrella, *event.evaluations)
        record = self.find_or_create(event.item)
        if record is None:
            return

        evaluations = [e for e in map(to_evaluation, event.evaluations) if e is not None]
        peer_review = record.peer_review or PeerReview()
        peer_review.reviews.extend(e for e in evaluations if e.review_type is ReviewType.REVIEW)
        summary = next(
            (e for e in evaluations if e.review_type is ReviewType.EVALUATION_SUMMARY),
            None,
        )
        if summary is not None:
            peer_review.evaluation_summary = summary
        record.peer_review = peer_review

        summary_date = peer_review.evaluation_summary.date if peer_review.evaluation_summary else None
        record.reviewed_date = event.date or summary_date or record.reviewed_date

    def _on_author_responded(self, event: AuthorRespondedEvent) -> None:
        self.umbrella = accumulate_umbrella(self.umbrella, event.response)
        record = self.find_or_create(event.item)
        if record is None:
            return

        response = to_evaluation(event.response)
        peer_review = record.peer_review or PeerReview()
        if response is not None and response.review_type is ReviewType.AUTHOR_RESPONSE:
            peer_review.author_response = response
        record.peer_review = peer_review

        record.author_response_date = (
            event.date or event.response.published or record.author_response_date
        )

    def _on_republished(self, event: RepublishedEvent) -> None:
        republished = self.find_or_create(event.item)
        original = self.find_or_create(event.original_item)
        if original is None or republished is None:
            return
        if original is republished:
            logger.debug("republished_as_itself", id=original.id, doi=original.doi)
            return
        if self.descends_from(original, republished):
            logger.debug(
                "republication_cycle_skipped",
                original=original.doi,
                republished=republished.doi,
            )
            return

        republished.republished_from = self.index_of(original)
        logger.debug(
            "manuscript_republished",
            original=original.doi,
            republished=republished.doi,
        )

    def result(self) -> ReductionResult:
        return ReductionResult(records=self.records, umbrella=self.umbrella)


def reduce_events(events: list[PublishingEvent]) -> ReductionResult:
    """Fold an ordered event stream into manuscript records."""
    reducer = ManuscriptReducer()
    for event in events:
        reducer.apply(event)
    return reducer.result()
