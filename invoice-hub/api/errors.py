"""
Translation of application errors into HTTP errors.

Every router catches at the operation boundary and raises the result of
`http_error_for`, so no failure escapes as an unhandled 500 traceback.
"""

from fastapi import HTTPException

from domain.errors import (
    ExportError,
    NotFoundError,
    PartialWriteError,
    PersistenceError,
    ValidationError,
)


def http_error_for(error: Exception, action: str) -> HTTPException:
    """Map an exception raised while performing `action` onto an HTTPException."""

    if isinstance(error, HTTPException):
        return error
    if isinstance(error, ValidationError):
        return HTTPException(status_code=400, detail=str(error))
    if isinstance(error, NotFoundError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, PartialWriteError):
        # The invoice exists without its sale record; surface its id for reconciliation
        return HTTPException(
            status_code=502,
            detail={"message": str(error), "invoice_id": error.invoice_id},
        )
    if isinstance(error, PersistenceError):
        return HTTPException(status_code=503, detail=f"Failed to {action}: {error}")
    if isinstance(error, ExportError):
        return HTTPException(status_code=500, detail=str(error))
    return HTTPException(status_code=500, detail=f"Failed to {action}: {error}")
