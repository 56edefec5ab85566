"""Enumeration types for docmap and manuscript models."""

from enum import Enum


class ExpressionType(str, Enum):
    """Expression types found in docmap inputs, outputs and assertions."""

    PREPRINT = "preprint"
    REVISED_PREPRINT = "postprint"
    PEER_REVIEW = "review-article"
    EVALUATION_SUMMARY = "evaluation-summary"
    VERSION_OF_RECORD = "version-of-record"
    AUTHOR_RESPONSE = "author-response"
    REPLY = "reply"
    UPDATE_SUMMARY = "update-summary"
    INSIGHT = "insight"


class ManifestationType(str, Enum):
    """Types of content manifestation attached to an expression."""

    WEB_PAGE = "web-page"
    DIGITAL_MANIFESTATION = "digital-manifestation"


class AssertionStatus(str, Enum):
    """Publishing status claimed by an assertion."""

    DRAFT = "draft"
    PUBLISHED = "manuscript-published"
    UNDER_REVIEW = "under-review"
    PEER_REVIEWED = "peer-reviewed"
    ENHANCED = "enhanced"
    VERSION_OF_RECORD = "version-of-record"
    REVISED = "revised"
    REPUBLISHED = "republished"
    CORRECTED = "corrected"


class ExpressionRole(str, Enum):
    """Role an expression plays when classifying a step."""

    MANUSCRIPT = "manuscript"
    EVALUATION = "evaluation"
    AUTHOR_RESPONSE = "author_response"


class PublishingEventType(str, Enum):
    """Publishing events derived from a step."""

    PUBLISHED = "Published"
    DRAFT = "Draft"
    UNDER_REVIEW = "UnderReview"
    PEER_REVIEWED = "PeerReviewed"
    REPUBLISHED = "Republished"
    AUTHOR_RESPONDED = "AuthorResponded"


class ManuscriptType(str, Enum):
    """Kind of manuscript a version record describes."""

    PREPRINT = "preprint"
    VERSION_OF_RECORD = "version-of-record"


class ReviewType(str, Enum):
    """Kind of evaluation attached to a manuscript's peer review."""

    EVALUATION_SUMMARY = "evaluation-summary"
    REVIEW = "review-article"
    AUTHOR_RESPONSE = "author-response"
