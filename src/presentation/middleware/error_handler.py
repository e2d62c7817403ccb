"""Error handling middleware and exception handlers."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
import structlog

from src.domain.exceptions import (
    DomainException,
    EntityStoreException,
    EntityStoreTimeoutException,
    GenerationRefusedException,
    InvalidArgumentException,
    InvalidSavedFilterException,
    LedgerWriteException,
    SavedFilterNotFoundException,
    WorkOrderNotFoundException,
)
from .request_context import get_request_id

logger = structlog.get_logger(__name__)


def _error_response(status_code: int, code: str, message: str, **extra) -> JSONResponse:
    content = {
        "error": code,
        "message": message,
        "request_id": get_request_id(),
    }
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content)


def error_handler_middleware(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI app.

    Maps domain exceptions to appropriate HTTP responses.
    """

    @app.exception_handler(WorkOrderNotFoundException)
    async def work_order_not_found_handler(
        request: Request,
        exc: WorkOrderNotFoundException,
    ) -> JSONResponse:
        """Handle work order not found errors."""
        return _error_response(404, exc.code, exc.message)

    @app.exception_handler(SavedFilterNotFoundException)
    async def saved_filter_not_found_handler(
        request: Request,
        exc: SavedFilterNotFoundException,
    ) -> JSONResponse:
        """Handle saved filter not found errors."""
        return _error_response(404, exc.code, exc.message)

    @app.exception_handler(GenerationRefusedException)
    async def generation_refused_handler(
        request: Request,
        exc: GenerationRefusedException,
    ) -> JSONResponse:
        """Handle business-rule refusals, listing every failed rule."""
        return _error_response(400, exc.code, exc.message, details=exc.errors)

    @app.exception_handler(InvalidSavedFilterException)
    async def invalid_saved_filter_handler(
        request: Request,
        exc: InvalidSavedFilterException,
    ) -> JSONResponse:
        """Handle saved filters rejected before they are stored."""
        return _error_response(400, exc.code, exc.message, details=exc.errors)

    @app.exception_handler(InvalidArgumentException)
    async def invalid_argument_handler(
        request: Request,
        exc: InvalidArgumentException,
    ) -> JSONResponse:
        """Handle computation errors caused by out-of-range arguments."""
        logger.warning(
            "invalid_argument",
            request_id=get_request_id(),
            message=exc.message,
        )
        return _error_response(422, exc.code, exc.message)

    @app.exception_handler(LedgerWriteException)
    async def ledger_write_handler(
        request: Request,
        exc: LedgerWriteException,
    ) -> JSONResponse:
        """Handle ledger writes that stopped part way."""
        logger.error(
            "ledger_write_incomplete",
            request_id=get_request_id(),
            message=exc.message,
            parent_id=exc.parent_id,
            created_ids=exc.created_ids,
            expected_count=exc.expected_count,
        )
        return _error_response(
            502,
            exc.code,
            "Financial records were only partially written. Review them before retrying.",
            parent_id=exc.parent_id,
            created_ids=exc.created_ids,
        )

    @app.exception_handler(EntityStoreTimeoutException)
    async def store_timeout_handler(
        request: Request,
        exc: EntityStoreTimeoutException,
    ) -> JSONResponse:
        """Handle entity store timeout errors."""
        logger.error(
            "entity_store_timeout",
            request_id=get_request_id(),
        )
        return _error_response(
            503,
            exc.code,
            "Service temporarily unavailable. Please try again.",
        )

    @app.exception_handler(EntityStoreException)
    async def store_error_handler(
        request: Request,
        exc: EntityStoreException,
    ) -> JSONResponse:
        """Handle entity store errors."""
        logger.error(
            "entity_store_error",
            request_id=get_request_id(),
            message=exc.message,
            status_code=exc.status_code,
        )
        return _error_response(
            503,
            exc.code,
            "Unable to process request. Please try again later.",
        )

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle generic domain exceptions."""
        logger.warning(
            "domain_exception",
            request_id=get_request_id(),
            code=exc.code,
            message=exc.message,
        )
        return _error_response(400, exc.code, exc.message)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unhandled_exception",
            request_id=get_request_id(),
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return _error_response(500, "INTERNAL_ERROR", "An unexpected error occurred.")
