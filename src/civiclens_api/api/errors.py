"""Translation of domain errors into HTTP errors for the routers."""

from fastapi import HTTPException, status

from civiclens_api.core.errors import ERROR_STATUS_CODES

DOMAIN_ERRORS = (ValueError, LookupError, PermissionError)


def to_http_exception(exc: Exception) -> HTTPException:
    """Map a domain error to an ``HTTPException`` carrying its message.

    Unlisted ``ValueError`` subclasses become 400.
    """
    for error_type, status_code in ERROR_STATUS_CODES.items():
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    if isinstance(exc, ValueError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Internal server error")
