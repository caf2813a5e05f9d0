"""
Mapping from domain errors to GraphQL errors
"""

from collections.abc import Iterator
from contextlib import contextmanager

from graphql import GraphQLError

from ..errors import InfrastructureError, UserInputError
from ..logging import get_logger

logger = get_logger(__name__)


def user_input_graphql_error(error: UserInputError) -> GraphQLError:
    return GraphQLError(
        error.message,
        extensions={
            "code": error.code.value,
            "field": error.field,
            "reason": error.reason,
        },
    )


def infrastructure_graphql_error(error: InfrastructureError) -> GraphQLError:
    return GraphQLError(error.message, extensions={"code": error.code.value})


@contextmanager
def graphql_errors() -> Iterator[None]:
    """Re-raise domain errors as GraphQL errors carrying an extensions code.

    Errors raised here end up in the response's ``errors`` list without
    aborting sibling fields.
    """
    try:
        yield
    except UserInputError as e:
        raise user_input_graphql_error(e) from e
    except InfrastructureError as e:
        logger.error(
            "Backing store failure",
            code=e.code.value,
            error=e.message,
            cause=repr(e.cause) if e.cause else None,
        )
        raise infrastructure_graphql_error(e) from e
