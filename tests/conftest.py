"""Pytest configuration and fixtures."""

from datetime import datetime

import pytest

from docmap_parser.generators import (
    add_next_step,
    generate_action,
    generate_author_response,
    generate_content,
    generate_docmap,
    generate_draft_assertion,
    generate_evaluation_summary,
    generate_insight,
    generate_manuscript,
    generate_organization,
    generate_peer_review,
    generate_person_participant,
    generate_preprint,
    generate_published_assertion,
    generate_reply,
    generate_republished_assertion,
    generate_step,
    generate_under_review_assertion,
    generate_version_of_record,
    generate_web_content,
)
from docmap_parser.models import DocMap, ManifestationType, Publisher, Step

CC_BY = "http://creativecommons.org/licenses/by/4.0/"


@pytest.fixture
def publisher() -> Publisher:
    """eLife publisher block."""
    return Publisher.model_validate(
        {
            "id": "https://elifesciences.org/",
            "name": "eLife",
            "logo": "https://sciety.org/static/groups/elife--b560187e-f2fb-4ff9-a861-a204f3fc0fb0.png",
            "homepage": "https://elifesciences.org/",
            "account": {
                "id": "https://sciety.org/groups/elife",
                "service": "https://sciety.org",
            },
        }
    )


def _docmap(publisher: Publisher, first_step: Step) -> DocMap:
    return generate_docmap("test", publisher, first_step)


def _reviewed_step_actions(include_reply: bool = False, reply_type: str = "reply"):
    anonymous = generate_person_participant("anonymous", "peer-reviewer")
    editor = generate_person_participant(
        "Daffy Duck", "editor", generate_organization("Acme Looniversity", "United States")
    )
    actions = [
        generate_action(
            [anonymous],
            [
                generate_peer_review(
                    datetime(2022, 4, 6),
                    [generate_web_content("https://content.com/12345.sa1")],
                    "elife/eLife.12345.sa1",
                )
            ],
        ),
        generate_action(
            [anonymous],
            [
                generate_peer_review(
                    datetime(2022, 4, 7),
                    [generate_web_content("https://content.com/12345.sa2")],
                    "elife/eLife.12345.sa2",
                )
            ],
        ),
        generate_action(
            [editor],
            [
                generate_evaluation_summary(
                    datetime(2022, 4, 10),
                    [generate_web_content("https://content.com/12345.sa3")],
                    "elife/eLife.12345.sa3",
                )
            ],
        ),
    ]
    if include_reply:
        actions.append(_author_response_action(reply_type))
    return actions


def _author_response_action(reply_type: str = "author-response"):
    author = generate_person_participant(
        "Bugs Bunny", "author", generate_organization("Acme Looniversity", "United States")
    )
    build = generate_reply if reply_type == "reply" else generate_author_response
    return generate_action(
        [author],
        [
            build(
                datetime(2022, 5, 9),
                [generate_web_content("https://content.com/12345.sa4")],
                "elife/eLife.12345.sa4",
            )
        ],
    )


# =============================================================================
# Structural fixtures
# =============================================================================

@pytest.fixture
def no_steps_docmap(publisher) -> DocMap:
    docmap = _docmap(publisher, generate_step([], [], []))
    docmap.steps = {}
    return docmap


@pytest.fixture
def empty_step_docmap(publisher) -> DocMap:
    return _docmap(publisher, generate_step([], [], []))


# =============================================================================
# Preprint fixtures
# =============================================================================

@pytest.fixture
def simple_preprint_docmap(publisher) -> DocMap:
    """One step publishing a preprint through an action output."""
    preprint = generate_preprint("preprint/article1", datetime(2022, 3, 1))
    return _docmap(publisher, generate_step([], [generate_action([], [preprint])], []))


@pytest.fixture
def preprint_with_url_docmap(publisher) -> DocMap:
    preprint = generate_preprint(
        "preprint/article1", datetime(2022, 3, 1), "https://somewhere.org/preprint/article1"
    )
    return _docmap(publisher, generate_step([], [generate_action([], [preprint])], []))


@pytest.fixture
def preprint_with_s3_docmap(publisher) -> DocMap:
    preprint = generate_preprint(
        "preprint/article1",
        datetime(2022, 3, 1),
        content=[
            generate_content(
                ManifestationType.DIGITAL_MANIFESTATION, "s3://bucket/path/to/article.meca"
            )
        ],
    )
    return _docmap(publisher, generate_step([], [generate_action([], [preprint])], []))


@pytest.fixture
def preprint_under_review_docmap(publisher) -> DocMap:
    preprint = generate_preprint(
        "preprint/article1", datetime(2022, 3, 1), "https://something.org/preprint/article1"
    )
    return _docmap(
        publisher,
        generate_step([], [], [generate_under_review_assertion(preprint, datetime(2022, 4, 12))]),
    )


@pytest.fixture
def preprint_published_docmap(publisher) -> DocMap:
    preprint = generate_preprint("preprint/article1", datetime(2022, 3, 1))
    return _docmap(
        publisher,
        generate_step([], [], [generate_published_assertion(preprint, datetime(2022, 3, 1))]),
    )


@pytest.fixture
def draft_docmap(publisher) -> DocMap:
    preprint = generate_preprint("preprint/article1", datetime(2022, 3, 1))
    return _docmap(
        publisher,
        generate_step([], [], [generate_draft_assertion(preprint, datetime(2022, 3, 1))]),
    )


@pytest.fixture
def published_then_under_review_docmap(publisher) -> DocMap:
    preprint = generate_preprint("preprint/article1", datetime(2022, 3, 1))
    first_step = generate_step(
        [], [], [generate_published_assertion(preprint, datetime(2022, 3, 1))]
    )
    add_next_step(
        first_step,
        generate_step([], [], [generate_under_review_assertion(preprint, datetime(2022, 4, 12))]),
    )
    return _docmap(publisher, first_step)


@pytest.fixture
def two_preprint_versions_docmap(publisher) -> DocMap:
    """An unversioned preprint followed by an assertion about version 4."""
    v1 = generate_preprint("preprint/article1", datetime(2022, 3, 1))
    v2 = generate_preprint("preprint/article1", datetime(2022, 4, 12), version="4")
    first_step = generate_step([], [], [generate_published_assertion(v1, datetime(2022, 3, 1))])
    add_next_step(
        first_step,
        generate_step([v1], [], [generate_published_assertion(v2, datetime(2022, 4, 12))]),
    )
    return _docmap(publisher, first_step)


@pytest.fixture
def published_date_in_later_step_docmap(publisher) -> DocMap:
    first_step = generate_step(
        [], [generate_action([], [generate_preprint("preprint/article1")])], []
    )
    add_next_step(
        first_step,
        generate_step(
            [],
            [generate_action([], [generate_preprint("preprint/article1", datetime(2023, 6, 23))])],
            [],
        ),
    )
    return _docmap(publisher, first_step)


@pytest.fixture
def url_and_content_in_later_step_docmap(publisher) -> DocMap:
    first_step = generate_step(
        [],
        [generate_action([], [generate_preprint("preprint/article1", datetime(2023, 6, 23))])],
        [],
    )
    later = generate_preprint(
        "preprint/article1",
        url="http://somewhere.org/preprint/article1",
        content=[
            generate_content(
                ManifestationType.DIGITAL_MANIFESTATION,
                "s3://somewhere-org-storage-bucket/preprint/article1.meca",
            )
        ],
    )
    add_next_step(first_step, generate_step([], [generate_action([], [later])], []))
    return _docmap(publisher, first_step)


@pytest.fixture
def published_assertion_without_date_docmap(publisher) -> DocMap:
    """Published assertion without a date next to an output that has one."""
    undated = generate_preprint("preprint/article1")
    dated = generate_preprint("preprint/article1", datetime(2022, 3, 1))
    return _docmap(
        publisher,
        generate_step([], [generate_action([], [dated])], [generate_published_assertion(undated)]),
    )


# =============================================================================
# Republication and revision fixtures
# =============================================================================

@pytest.fixture
def republished_via_assertion_docmap(publisher) -> DocMap:
    v1 = generate_preprint("preprint/article1", datetime(2022, 3, 1), version="4", license=CC_BY)
    v2 = generate_preprint(
        "elife/12345.1",
        datetime(2022, 4, 12),
        version="1",
        content=[
            generate_content(
                ManifestationType.DIGITAL_MANIFESTATION,
                "s3://somewhere-org-storage-bucket/preprint/article1.meca",
            )
        ],
        license=CC_BY,
    )
    first_step = generate_step([], [], [generate_published_assertion(v1, datetime(2022, 3, 1))])
    add_next_step(
        first_step,
        generate_step(
            [v1],
            [generate_action([], [v2])],
            [generate_republished_assertion(v2, datetime(2022, 4, 12))],
        ),
    )
    return _docmap(publisher, first_step)


@pytest.fixture
def inferred_republished_docmap(publisher) -> DocMap:
    v1 = generate_preprint("preprint/article1", datetime(2022, 3, 1), version="4")
    v2 = generate_preprint("elife/12345.1", datetime(2022, 4, 12), version="1", license=CC_BY)
    return _docmap(publisher, generate_step([v1], [generate_action([], [v2])], []))


@pytest.fixture
def preprint_and_revision_docmap(publisher) -> DocMap:
    v1 = generate_preprint("preprint/article1", datetime(2022, 3, 1), version="1")
    v2 = generate_preprint("preprint/article1v2", datetime(2022, 6, 1), version="2")
    first_step = generate_step([], [], [generate_published_assertion(v1, datetime(2022, 3, 1))])
    add_next_step(
        first_step,
        generate_step([], [], [generate_published_assertion(v2, datetime(2022, 6, 1))]),
    )
    return _docmap(publisher, first_step)


# =============================================================================
# Review fixtures
# =============================================================================

@pytest.fixture
def reviewed_preprint_docmap(publisher) -> DocMap:
    """Preprint published, then two reviews and an evaluation summary."""
    v1 = generate_preprint("preprint/article1", datetime(2022, 3, 1), version="1")
    first_step = generate_step([], [generate_action([], [v1])], [])
    add_next_step(first_step, generate_step([v1], _reviewed_step_actions(), []))
    return _docmap(publisher, first_step)


@pytest.fixture
def author_responded_docmap(publisher) -> DocMap:
    v1 = generate_preprint("preprint/article1", datetime(2022, 3, 1), version="1")
    first_step = generate_step([], [generate_action([], [v1])], [])
    review_step = add_next_step(first_step, generate_step([v1], _reviewed_step_actions(), []))
    add_next_step(review_step, generate_step([v1], [_author_response_action()], []))
    return _docmap(publisher, first_step)


@pytest.fixture
def author_replied_docmap(publisher) -> DocMap:
    v1 = generate_preprint("preprint/article1", datetime(2022, 3, 1), version="1")
    first_step = generate_step([], [generate_action([], [v1])], [])
    review_step = add_next_step(first_step, generate_step([v1], _reviewed_step_actions(), []))
    add_next_step(review_step, generate_step([v1], [_author_response_action("reply")], []))
    return _docmap(publisher, first_step)


@pytest.fixture
def author_replied_same_step_docmap(publisher) -> DocMap:
    v1 = generate_preprint("preprint/article1", datetime(2022, 3, 1), version="1")
    first_step = generate_step([], [generate_action([], [v1])], [])
    add_next_step(first_step, generate_step([v1], _reviewed_step_actions(include_reply=True), []))
    return _docmap(publisher, first_step)


@pytest.fixture
def inferred_reviewed_docmap(publisher) -> DocMap:
    """Reviews output from a step whose only input is the preprint."""
    v1 = generate_preprint("preprint/article1", datetime(2022, 3, 1), version="1")
    return _docmap(publisher, generate_step([v1], _reviewed_step_actions(), []))


@pytest.fixture
def inferred_revised_docmap(publisher) -> DocMap:
    """Reviewed preprint followed by a revision that takes the reviews as input."""
    v1 = generate_preprint("preprint/article1", datetime(2022, 3, 1), version="1")
    actions = _reviewed_step_actions()
    first_step = generate_step([v1], actions, [])

    evaluations = [output for action in actions for output in action.outputs]
    v2 = generate_preprint("preprint/article1", datetime(2022, 5, 1), version="2")
    add_next_step(first_step, generate_step([v1, *evaluations], [generate_action([], [v2])], []))
    return _docmap(publisher, first_step)


@pytest.fixture
def version_of_record_docmap(publisher) -> DocMap:
    vor = generate_version_of_record(
        datetime(2024, 5, 9),
        [generate_web_content("https://doi.org/version-of-record")],
        "vor/article1",
        "https://version-of-record",
    )
    return _docmap(publisher, generate_step([], [generate_action([], [vor])], []))


# =============================================================================
# Umbrella manuscript fixtures
# =============================================================================

def _preprint_part_of(publisher: Publisher, **manuscript_fields) -> DocMap:
    manuscript = generate_manuscript(**manuscript_fields)
    preprint = generate_preprint("preprint/article1", datetime(2022, 3, 1), manuscript=manuscript)
    return _docmap(publisher, generate_step([], [generate_action([], [preprint])], []))


@pytest.fixture
def preprint_with_manuscript_docmap(publisher) -> DocMap:
    return _preprint_part_of(
        publisher,
        doi="10.1101/123456",
        identifier="123456",
        volume_identifier="1",
        electronic_article_identifier="RP123456",
        subject_disciplines=["Biochemistry and Chemical Biology", "Neuroscience"],
    )


@pytest.fixture
def preprint_with_partial_manuscript_docmap(publisher) -> DocMap:
    return _preprint_part_of(
        publisher,
        doi="10.1101/123456",
        identifier="123456",
        electronic_article_identifier="RP123456",
    )


@pytest.fixture
def preprint_with_related_content_docmap(publisher) -> DocMap:
    return _preprint_part_of(
        publisher,
        doi="10.1101/123456",
        identifier="123456",
        electronic_article_identifier="RP123456",
        complement=[generate_insight("Insight Title", "https://somewhere.org/insight")],
    )


@pytest.fixture
def preprint_with_manuscript_published_docmap(publisher) -> DocMap:
    return _preprint_part_of(
        publisher,
        doi="10.1101/123456",
        identifier="123456",
        electronic_article_identifier="RP123456",
        published=datetime(2022, 3, 1),
    )


@pytest.fixture
def umbrella_from_multiple_locations_docmap(publisher) -> DocMap:
    """partOf on an action output and on a draft assertion in the same step."""
    first = generate_manuscript(
        doi="10.1101/123456", identifier="123456", electronic_article_identifier="RP123456"
    )
    second = generate_manuscript(
        doi="10.1101/123456",
        identifier="123456",
        volume_identifier="1",
        subject_disciplines=["subject 1"],
    )
    preprint = generate_preprint("preprint/article1", datetime(2022, 3, 1), manuscript=first)
    preprint2 = generate_preprint("preprint/article1", datetime(2022, 3, 1), manuscript=second)
    return _docmap(
        publisher,
        generate_step(
            [], [generate_action([], [preprint])], [generate_draft_assertion(preprint2)]
        ),
    )
