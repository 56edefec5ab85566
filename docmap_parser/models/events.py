"""Publishing events derived from docmap steps.

Events are never persisted: the step classifier creates them and the
manuscript reducer consumes them straight away.
"""

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field

from .docmap import Expression
from .enums import PublishingEventType


class Institution(BaseModel):
    """Institution of an evaluation participant."""

    name: str
    location: Optional[str] = None


class EvaluationParticipant(BaseModel):
    """A participant flattened from the action that produced an evaluation."""

    name: str
    role: str
    institution: Optional[Institution] = None


class EvaluationExpression(Expression):
    """An evaluation or author response carrying its action's participants."""

    participants: list[EvaluationParticipant] = Field(default_factory=list)

    @classmethod
    def from_output(
        cls,
        expression: Expression,
        participants: list[EvaluationParticipant],
    ) -> "EvaluationExpression":
        """Attach participants to an action output."""
        return cls(**dict(expression), participants=participants)


class PublishingEvent(BaseModel):
    """Common fields of every publishing event.

    ``asserted`` is True when the event comes from an explicit assertion and
    False when it was inferred from the shape of the step.
    """

    type: PublishingEventType
    asserted: bool = Field(..., description="Derived from an explicit assertion")
    item: Expression = Field(..., description="Manuscript expression the event is about")
    date: Optional[datetime] = Field(None, description="When the event happened, if known")


class PublishedEvent(PublishingEvent):
    type: Literal[PublishingEventType.PUBLISHED] = PublishingEventType.PUBLISHED


class DraftEvent(PublishingEvent):
    type: Literal[PublishingEventType.DRAFT] = PublishingEventType.DRAFT


class UnderReviewEvent(PublishingEvent):
    type: Literal[PublishingEventType.UNDER_REVIEW] = PublishingEventType.UNDER_REVIEW


class PeerReviewedEvent(PublishingEvent):
    type: Literal[PublishingEventType.PEER_REVIEWED] = PublishingEventType.PEER_REVIEWED
    evaluations: list[EvaluationExpression] = Field(default_factory=list)


class RepublishedEvent(PublishingEvent):
    """``item`` supersedes ``original_item``."""

    type: Literal[PublishingEventType.REPUBLISHED] = PublishingEventType.REPUBLISHED
    original_item: Expression


class AuthorRespondedEvent(PublishingEvent):
    type: Literal[PublishingEventType.AUTHOR_RESPONDED] = PublishingEventType.AUTHOR_RESPONDED
    response: EvaluationExpression
