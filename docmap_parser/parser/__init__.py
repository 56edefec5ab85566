"""Docmap resolution: step traversal, event classification and reduction.

Usage:
    from docmap_parser.parser import parse_docmap

    data = parse_docmap(docmap_json)
    print(f"Found {len(data.versions)} versions of {data.id}")
"""

from docmap_parser.parser.classify import classify_step, extract_expressions, step_expressions
from docmap_parser.parser.errors import DocmapEmptyError, DocmapError, DocmapStructureError
from docmap_parser.parser.expressions import (
    expression_role,
    is_author_response,
    is_evaluation,
    is_manuscript,
)
from docmap_parser.parser.reducer import ManuscriptReducer, ReductionResult, reduce_events
from docmap_parser.parser.resolver import (
    classify_steps,
    finalize_versions,
    load_docmap,
    parse_docmap,
    reduce_steps,
)
from docmap_parser.parser.steps import collect_steps, iter_steps
from docmap_parser.parser.umbrella import accumulate_umbrella, merge_part_of

__all__ = [
    # Entry points
    "parse_docmap",
    "load_docmap",
    # Errors
    "DocmapError",
    "DocmapStructureError",
    "DocmapEmptyError",
    # Traversal
    "iter_steps",
    "collect_steps",
    # Classification
    "expression_role",
    "is_manuscript",
    "is_evaluation",
    "is_author_response",
    "extract_expressions",
    "step_expressions",
    "classify_step",
    "classify_steps",
    # Reduction
    "ManuscriptReducer",
    "ReductionResult",
    "reduce_events",
    "reduce_steps",
    "finalize_versions",
    "accumulate_umbrella",
    "merge_part_of",
]
