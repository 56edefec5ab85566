"""Classify expressions into the roles used by the step classifier."""

from docmap_parser.models import Expression, ExpressionRole, ExpressionType

_ROLE_BY_TYPE: dict[str, ExpressionRole] = {
    ExpressionType.PREPRINT.value: ExpressionRole.MANUSCRIPT,
    ExpressionType.VERSION_OF_RECORD.value: ExpressionRole.MANUSCRIPT,
    ExpressionType.PEER_REVIEW.value: ExpressionRole.EVALUATION,
    ExpressionType.EVALUATION_SUMMARY.value: ExpressionRole.EVALUATION,
    ExpressionType.AUTHOR_RESPONSE.value: ExpressionRole.AUTHOR_RESPONSE,
    # reply is also a valid author response type
    ExpressionType.REPLY.value: ExpressionRole.AUTHOR_RESPONSE,
}


def expression_role(expression: Expression) -> ExpressionRole | None:
    """Return the role of an expression, or None for role-less types."""
    return _ROLE_BY_TYPE.get(expression.type)


def is_manuscript(expression: Expression) -> bool:
    return expression_role(expression) is ExpressionRole.MANUSCRIPT


def is_evaluation(expression: Expression) -> bool:
    return expression_role(expression) is ExpressionRole.EVALUATION


def is_author_response(expression: Expression) -> bool:
    return expression_role(expression) is ExpressionRole.AUTHOR_RESPONSE
