"""Domain error taxonomy shared by the service layer and the API routers.

Validation errors subclass ``ValueError`` so that any caller that only
knows about ``ValueError`` still treats them as bad input. Routers map
each class to an HTTP status via ``ERROR_STATUS_CODES``.
"""


class InvalidRatingValueError(ValueError):
    """Raised when a review rating falls outside 1..5."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Rating must be an integer between 1 and 5, got {value!r}")


class EmptyCommentBodyError(ValueError):
    """Raised when a discussion comment is blank after trimming."""

    def __init__(self) -> None:
        super().__init__("Comment body must not be empty")


class InvalidParentCommentError(ValueError):
    """Raised when a reply targets a reply, a missing comment, or another representative's thread."""


class InvalidLocationError(ValueError):
    """Raised when a region / sub-region / local-unit path is not a true descent."""


class InvalidJurisdictionError(ValueError):
    """Raised when a representative's jurisdiction ids do not match its position tier."""


class NotFoundError(LookupError):
    """Raised when a single entity requested by id does not exist.

    Args:
        entity: Human-readable entity name (e.g. "Representative").
        entity_id: The identifier that was looked up.
    """

    def __init__(self, entity: str, entity_id: object) -> None:
        self.entity = entity
        self.entity_id = entity_id
        super().__init__(f"{entity} {entity_id} not found")


class UnauthorizedError(PermissionError):
    """Raised when a caller without the admin capability reaches a moderation operation."""

    def __init__(self, message: str = "Administrator access required") -> None:
        super().__init__(message)


ERROR_STATUS_CODES: dict[type[Exception], int] = {
    InvalidRatingValueError: 422,
    EmptyCommentBodyError: 422,
    InvalidParentCommentError: 422,
    InvalidLocationError: 422,
    InvalidJurisdictionError: 422,
    NotFoundError: 404,
    UnauthorizedError: 403,
}
