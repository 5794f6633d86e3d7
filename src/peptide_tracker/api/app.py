"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from peptide_tracker.api.ledger import router as ledger_router
from peptide_tracker.app_logging import configure_logging
from peptide_tracker.containers import AppContainer
from peptide_tracker.domain.errors import (
    CapacityError,
    IntegrityWarning,
    LedgerError,
    NotFoundError,
    ValidationError,
)

_ERROR_STATUS: list[tuple[type[LedgerError], int]] = [
    (ValidationError, 422),
    (CapacityError, 409),
    (NotFoundError, 404),
    (IntegrityWarning, 409),
]


def error_status(error: LedgerError) -> int:
    """Return the HTTP status for a ledger error kind."""
    for error_type, code in _ERROR_STATUS:
        if isinstance(error, error_type):
            return code
    return 400


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Peptide Tracker")
    app.state.container = container

    app.include_router(ledger_router)

    @app.exception_handler(LedgerError)
    async def ledger_error_handler(request: Request, exc: LedgerError) -> JSONResponse:
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=error_status(exc),
            content={"error": exc.code, "detail": str(exc)},
        )

    @app.exception_handler(RequestValidationError)
    async def request_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        # Echoed inputs may be NaN, which JSON responses cannot carry.
        problems = [
            {"loc": list(error["loc"]), "msg": error["msg"]} for error in exc.errors()
        ]
        logger.info("Rejected %s %s: %s", request.method, request.url.path, problems)
        return JSONResponse(
            status_code=422,
            content={"error": "invalid_request", "detail": problems},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
