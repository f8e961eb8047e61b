"""Translation of failed service results into HTTP errors."""

from fastapi import HTTPException, status

from bookcatalog.catalog.service import OperationResult
from bookcatalog.domain.exceptions import ErrorKind

STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.INVALID_INPUT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.VALIDATION_FAILED: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def raise_for_result(result: OperationResult, default_code: str) -> None:
    """Raise an HTTPException when a service result is a failure.

    Args:
        result: Service result to check.
        default_code: Error code used when the result carries none.

    Raises:
        HTTPException: If the result is not successful.
    """
    if result.success:
        return

    status_code = (
        STATUS_BY_KIND.get(result.error_kind, status.HTTP_400_BAD_REQUEST)
        if result.error_kind
        else status.HTTP_400_BAD_REQUEST
    )
    raise HTTPException(
        status_code=status_code,
        detail={
            "error_code": result.error_code or default_code,
            "message": result.error or "Request failed",
        },
    )
