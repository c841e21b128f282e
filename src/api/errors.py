"""Render domain failures as structured outcomes."""

from __future__ import annotations

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from src.domain.errors import DomainError, ErrorKind, Outcome
from src.libs.notifier import get_notifier

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.NOT_VERIFIED: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_OWNER: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_ADMIN: status.HTTP_403_FORBIDDEN,
    ErrorKind.UNRECOGNIZED: status.HTTP_403_FORBIDDEN,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.ALREADY_APPLIED: status.HTTP_409_CONFLICT,
    ErrorKind.INVALID_TRANSITION: status.HTTP_409_CONFLICT,
    ErrorKind.JOB_INACTIVE: status.HTTP_409_CONFLICT,
    ErrorKind.STORE_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    outcome = Outcome.from_error(exc)
    await get_notifier().notify(request.url.path, outcome, method=request.method)
    headers = {"Retry-After": "5"} if exc.kind.retryable else None
    return JSONResponse(
        status_code=STATUS_BY_KIND.get(exc.kind, status.HTTP_400_BAD_REQUEST),
        content=outcome.to_dict(),
        headers=headers,
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)  # type: ignore[arg-type]
