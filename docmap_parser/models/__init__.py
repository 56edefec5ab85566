"""Pydantic data models for docmaps, publishing events and manuscripts."""

from .enums import (
    AssertionStatus,
    ExpressionRole,
    ExpressionType,
    ManifestationType,
    ManuscriptType,
    PublishingEventType,
    ReviewType,
)
from .docmap import (
    Account,
    Action,
    Assertion,
    DocMap,
    Expression,
    Manifestation,
    ManuscriptPartOf,
    Organization,
    Participant,
    Person,
    Publisher,
    Step,
)
from .events import (
    AuthorRespondedEvent,
    DraftEvent,
    EvaluationExpression,
    EvaluationParticipant,
    Institution,
    PeerReviewedEvent,
    PublishedEvent,
    PublishingEvent,
    RepublishedEvent,
    UnderReviewEvent,
)
from .manuscripts import (
    Evaluation,
    Manuscript,
    ManuscriptData,
    PeerReview,
    Preprint,
    RelatedContentItem,
    UmbrellaMetadata,
    VersionedManuscript,
)

__all__ = [
    # Enums
    "AssertionStatus",
    "ExpressionRole",
    "ExpressionType",
    "ManifestationType",
    "ManuscriptType",
    "PublishingEventType",
    "ReviewType",
    # Docmap
    "Account",
    "Action",
    "Assertion",
    "DocMap",
    "Expression",
    "Manifestation",
    "ManuscriptPartOf",
    "Organization",
    "Participant",
    "Person",
    "Publisher",
    "Step",
    # Events
    "AuthorRespondedEvent",
    "DraftEvent",
    "EvaluationExpression",
    "EvaluationParticipant",
    "Institution",
    "PeerReviewedEvent",
    "PublishedEvent",
    "PublishingEvent",
    "RepublishedEvent",
    "UnderReviewEvent",
    # Manuscripts
    "Evaluation",
    "Manuscript",
    "ManuscriptData",
    "PeerReview",
    "Preprint",
    "RelatedContentItem",
    "UmbrellaMetadata",
    "VersionedManuscript",
]
