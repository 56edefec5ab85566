"""Models for resolved manuscript versions and their peer review."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .enums import ManuscriptType, ReviewType
from .events import EvaluationParticipant


class OutputModel(BaseModel):
    """Base for resolver output: snake_case in Python, camelCase in JSON."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Evaluation(OutputModel):
    """A review, evaluation summary or author response."""

    review_type: ReviewType
    date: Optional[datetime] = None
    doi: Optional[str] = None
    content_urls: list[str] = Field(default_factory=list, description="Web page URLs")
    participants: list[EvaluationParticipant] = Field(default_factory=list)


class PeerReview(OutputModel):
    """Peer review state of a manuscript version."""

    reviews: list[Evaluation] = Field(default_factory=list)
    evaluation_summary: Optional[Evaluation] = None
    author_response: Optional[Evaluation] = None


class Manuscript(OutputModel):
    """A manuscript version record, mutated in place while events are folded.

    Identity is (``doi``, ``version_identifier``). ``republished_from`` is the
    index of the superseded record in the reducer's record list.
    """

    id: str = Field(..., description="Expression identifier, else its DOI")
    type: ManuscriptType
    doi: str
    version_identifier: Optional[str] = None
    published_date: Optional[datetime] = None
    sent_for_review_date: Optional[datetime] = None
    reviewed_date: Optional[datetime] = None
    author_response_date: Optional[datetime] = None
    url: Optional[str] = None
    content: list[str] = Field(default_factory=list)
    license: Optional[str] = None
    peer_review: Optional[PeerReview] = None
    republished_from: Optional[int] = Field(None, exclude=True)


class Preprint(OutputModel):
    """Read-only view of the manuscript a version was published from."""

    id: str
    doi: str
    version_identifier: Optional[str] = None
    published_date: Optional[datetime] = None
    url: Optional[str] = None
    content: list[str] = Field(default_factory=list)
    license: Optional[str] = None

    @classmethod
    def from_manuscript(cls, manuscript: Manuscript) -> "Preprint":
        return cls(
            id=manuscript.id,
            doi=manuscript.doi,
            version_identifier=manuscript.version_identifier,
            published_date=manuscript.published_date,
            url=manuscript.url,
            content=list(manuscript.content),
            license=manuscript.license,
        )


class VersionedManuscript(OutputModel):
    """A manuscript version as returned to callers."""

    id: str
    type: ManuscriptType
    doi: str
    version_identifier: str = Field(..., description="Resolved version identifier")
    published_date: Optional[datetime] = None
    sent_for_review_date: Optional[datetime] = None
    reviewed_date: Optional[datetime] = None
    author_response_date: Optional[datetime] = None
    url: Optional[str] = None
    content: list[str] = Field(default_factory=list)
    license: Optional[str] = None
    peer_review: Optional[PeerReview] = None
    preprint: Preprint = Field(..., description="Root of the republication chain")
    republished_from: Optional[Preprint] = None


class RelatedContentItem(OutputModel):
    """Content related to the umbrella manuscript, e.g. an insight."""

    type: str
    title: Optional[str] = None
    url: Optional[str] = None
    description: Optional[str] = None
    thumbnail: Optional[str] = None


class UmbrellaMetadata(OutputModel):
    """Manuscript-level metadata shared by every version."""

    doi: Optional[str] = None
    volume: Optional[str] = None
    e_location_id: Optional[str] = None
    subjects: Optional[list[str]] = None
    related_content: Optional[list[RelatedContentItem]] = None
    published_date: Optional[datetime] = None

    def is_empty(self) -> bool:
        return not any(value is not None for value in dict(self).values())


class ManuscriptData(OutputModel):
    """Resolver result: the version history of one manuscript."""

    id: str = Field(..., description="Id of the latest version")
    manuscript: Optional[UmbrellaMetadata] = None
    versions: list[VersionedManuscript] = Field(default_factory=list)

    def to_json_dict(self) -> dict:
        """Serialize with camelCase keys and without empty fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
