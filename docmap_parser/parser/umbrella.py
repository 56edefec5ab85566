"""Accumulate manuscript-level (umbrella) metadata from ``partOf`` fields."""

from docmap_parser.models import Expression, ManuscriptPartOf, RelatedContentItem, UmbrellaMetadata


def _related_content(part_of: ManuscriptPartOf) -> list[RelatedContentItem] | None:
    if part_of.complement is None:
        return None
    return [
        RelatedContentItem(
            type=item.type,
            title=item.title,
            url=item.url,
            description=item.description,
            thumbnail=item.thumbnail,
        )
        for item in part_of.complement
    ]


def merge_part_of(metadata: UmbrellaMetadata, part_of: ManuscriptPartOf) -> UmbrellaMetadata:
    """Return ``metadata`` updated with every non-empty field of ``part_of``.

    Fields missing from ``part_of`` keep their previous value.
    """
    candidates = {
        "doi": part_of.doi,
        "volume": part_of.volume_identifier,
        "e_location_id": part_of.electronic_article_identifier,
        "subjects": part_of.subject_disciplines,
        "related_content": _related_content(part_of),
        "published_date": part_of.published,
    }
    updates = {name: value for name, value in candidates.items() if value}
    if not updates:
        return metadata
    return metadata.model_copy(update=updates)


def accumulate_umbrella(metadata: UmbrellaMetadata, *expressions: Expression) -> UmbrellaMetadata:
    """Fold the ``partOf`` of each expression into ``metadata``."""
    for expression in expressions:
        if expression.part_of is not None:
            metadata = merge_part_of(metadata, expression.part_of)
    return metadata
