"""Translation of ledger errors into HTTP responses."""

from __future__ import annotations

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from wallet_ledger.exceptions import (
    AddressNotFoundError,
    DuplicateAddressError,
    LedgerError,
    OperationCancelledError,
    RandomSourceError,
    StorageBusyError,
    StorageError,
)

logger = logging.getLogger(__name__)

# Checked in order; the first matching class wins.
_STATUS_BY_ERROR: tuple[tuple[type[LedgerError], int], ...] = (
    (AddressNotFoundError, status.HTTP_404_NOT_FOUND),
    (DuplicateAddressError, status.HTTP_409_CONFLICT),
    (OperationCancelledError, status.HTTP_409_CONFLICT),
    (StorageBusyError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (StorageError, status.HTTP_500_INTERNAL_SERVER_ERROR),
    (RandomSourceError, status.HTTP_500_INTERNAL_SERVER_ERROR),
)


def status_for(exc: LedgerError) -> int:
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc)
    headers = {"Retry-After": "1"} if exc.retryable else None
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "code": exc.code},
        headers=headers,
    )
