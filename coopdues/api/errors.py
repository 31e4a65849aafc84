"""API error handling and response helpers."""

import logging
from typing import Any, Dict

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from coopdues.services.errors import (
    AlreadySettledError,
    AmountBelowPaidError,
    DuplicateMemberError,
    DuplicatePeriodError,
    InvalidAmountError,
    LedgerError,
    NotFoundError,
)

logger = logging.getLogger(__name__)

HTTP_STATUS_BY_ERROR: dict[type[LedgerError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    InvalidAmountError: status.HTTP_400_BAD_REQUEST,
    AmountBelowPaidError: status.HTTP_400_BAD_REQUEST,
    DuplicatePeriodError: status.HTTP_400_BAD_REQUEST,
    AlreadySettledError: status.HTTP_409_CONFLICT,
    DuplicateMemberError: status.HTTP_409_CONFLICT,
}


def http_status_for(error: LedgerError) -> int:
    for error_type, http_status in HTTP_STATUS_BY_ERROR.items():
        if isinstance(error, error_type):
            return http_status
    return status.HTTP_400_BAD_REQUEST


def error_response(error: LedgerError) -> Dict[str, Any]:
    """Create a standardized error response."""
    return {
        "error": {
            "code": error.code,
            "message": error.message,
        }
    }


async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
    http_status = http_status_for(exc)
    logger.info(
        "%s %s -> %d %s: %s",
        request.method,
        request.url.path,
        http_status,
        exc.code,
        exc.message,
    )
    return JSONResponse(status_code=http_status, content=error_response(exc))


def register_error_handlers(app: FastAPI) -> None:
    """Translate ledger errors into JSON error bodies."""
    app.add_exception_handler(LedgerError, ledger_error_handler)
