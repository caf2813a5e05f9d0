"""
Domain error kinds raised by the service layer.

Two kinds exist: user-input errors are safe to show to the caller and carry
the offending field; infrastructure errors describe a backing store that is
unreachable or misbehaving. The GraphQL layer maps both to its outward error
format (see ``bookshelf.graphql.errors``).
"""

from enum import Enum


class ErrorCode(str, Enum):
    """Machine-readable codes exposed in GraphQL error extensions."""

    BAD_USER_INPUT = "BAD_USER_INPUT"
    SERVICE_UNAVAILABLE = "SERVICE_UNAVAILABLE"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"


class BookshelfError(Exception):
    """Base exception for all classified errors."""

    code: ErrorCode = ErrorCode.INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UserInputError(BookshelfError):
    """Invalid caller input: uniqueness violation, dangling reference, unknown record."""

    code = ErrorCode.BAD_USER_INPUT

    def __init__(self, field: str, reason: str, message: str | None = None):
        super().__init__(message or f"{field}: {reason}")
        self.field = field
        self.reason = reason


class NotFoundError(UserInputError):
    """The record targeted by an update or delete does not exist."""

    def __init__(self, entity: str, record_id: str):
        super().__init__(
            "id",
            "not_found",
            f"No {entity} exists with ID: {record_id}",
        )
        self.entity = entity
        self.record_id = record_id


class InfrastructureError(BookshelfError):
    """The backing store failed for reasons unrelated to caller input."""

    code = ErrorCode.INTERNAL_SERVER_ERROR

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


class ServiceUnavailableError(InfrastructureError):
    """The backing store could not be reached at all."""

    code = ErrorCode.SERVICE_UNAVAILABLE

    MESSAGE = "Unable to connect to the books API"

    def __init__(self, cause: BaseException | None = None):
        super().__init__(self.MESSAGE, cause)
