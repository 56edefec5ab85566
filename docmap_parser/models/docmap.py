"""Models for the docmap input document.

A docmap is a linked list of steps. Each step consumes input expressions,
performs actions whose outputs are new expressions, and may carry explicit
assertions about an expression's publishing status.

Field names follow Python conventions; the JSON keys used by docmap
publishers (``first-step``, ``versionIdentifier``, ``partOf``...) are
accepted as aliases and used when serializing back to JSON.
"""

from datetime import date, datetime, timezone
from typing import Annotated, Any, Optional, Union

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field

from .enums import ManifestationType


def _to_utc_datetime(value: Any) -> Any:
    """Coerce docmap date values to timezone-aware UTC datetimes.

    Publishers emit both date-only (``2022-03-01``) and full timestamps
    (``2022-03-01T00:00:00.000Z``). Values without a timezone are UTC.
    """
    if value is None:
        return None
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        value = datetime.fromisoformat(text)
    elif isinstance(value, date) and not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day)

    if isinstance(value, datetime) and value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


DocmapDate = Annotated[datetime, BeforeValidator(_to_utc_datetime)]


class DocmapModel(BaseModel):
    """Base for docmap input models: aliases and names both accepted."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class Manifestation(DocmapModel):
    """A concrete rendering of an expression (web page, S3 object...)."""

    type: str = Field(ManifestationType.WEB_PAGE.value, description="Manifestation type")
    url: Optional[str] = Field(None, description="Where the content lives")
    published: Optional[DocmapDate] = Field(None, description="Publication date")
    doi: Optional[str] = Field(None, description="DOI of the manifestation")


class Organization(DocmapModel):
    """An institution a participant is affiliated with."""

    type: str = "organization"
    name: str
    location: Optional[str] = None


class Person(DocmapModel):
    """Actor performing an action."""

    type: str = "person"
    name: str
    affiliation: Optional[Organization] = None


class Participant(DocmapModel):
    """An actor and the role they played in an action."""

    actor: Person
    role: str


class Expression(DocmapModel):
    """A typed, identifiable artifact: preprint, review, evaluation, etc."""

    type: str = Field(..., description="Expression type, see ExpressionType")
    identifier: Optional[str] = None
    version_identifier: Optional[str] = Field(None, alias="versionIdentifier")
    doi: Optional[str] = None
    url: Optional[str] = None
    published: Optional[DocmapDate] = None
    content: Optional[list[Manifestation]] = None
    license: Optional[str] = None
    part_of: Optional["ManuscriptPartOf"] = Field(None, alias="partOf")

    # Related content (insights) carry display fields
    title: Optional[str] = None
    description: Optional[str] = None
    thumbnail: Optional[str] = None


class ManuscriptPartOf(DocmapModel):
    """Umbrella manuscript an expression belongs to (its ``partOf``)."""

    type: str = "manuscript"
    doi: Optional[str] = None
    identifier: Optional[str] = None
    volume_identifier: Optional[str] = Field(None, alias="volumeIdentifier")
    electronic_article_identifier: Optional[str] = Field(
        None, alias="electronicArticleIdentifier"
    )
    subject_disciplines: Optional[list[str]] = Field(None, alias="subjectDisciplines")
    complement: Optional[list[Expression]] = None
    published: Optional[DocmapDate] = None


Expression.model_rebuild()
ManuscriptPartOf.model_rebuild()


class Action(DocmapModel):
    """Participants and the expressions they produced."""

    participants: list[Participant] = Field(default_factory=list)
    outputs: list[Expression] = Field(default_factory=list)


class Assertion(DocmapModel):
    """An explicit claim that an item reached a publishing status."""

    item: Expression
    status: str = Field(..., description="Asserted status, see AssertionStatus")
    happened: Optional[DocmapDate] = None


class Step(DocmapModel):
    """One node of the docmap step graph.

    ``next_step``/``previous_step`` are either a step id resolved through
    ``DocMap.steps`` or an inline Step.
    """

    assertions: list[Assertion] = Field(default_factory=list)
    inputs: list[Expression] = Field(default_factory=list)
    actions: list[Action] = Field(default_factory=list)
    next_step: Optional[Union["Step", str]] = Field(None, alias="next-step")
    previous_step: Optional[Union["Step", str]] = Field(None, alias="previous-step")


class Account(DocmapModel):
    """Publisher account on an aggregation service."""

    id: str
    service: str


class Publisher(DocmapModel):
    """Publisher of a docmap."""

    id: Optional[str] = None
    name: Optional[str] = None
    logo: Optional[str] = None
    homepage: Optional[str] = None
    account: Optional[Account] = None


class DocMap(DocmapModel):
    """A parsed docmap document."""

    context: Any = Field(None, alias="@context")
    type: str = "docmap"
    id: str = Field(..., description="Docmap identifier")
    created: Optional[DocmapDate] = None
    updated: Optional[DocmapDate] = None
    publisher: Optional[Publisher] = None
    first_step: str = Field(..., alias="first-step")
    steps: dict[str, Step] = Field(default_factory=dict, description="Steps keyed by id")
