"""Global exception handlers for the API."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from learnify.errors import LearnifyError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register the application error handlers on the FastAPI app."""

    @app.exception_handler(LearnifyError)
    async def learnify_error_handler(
        request: Request, exc: LearnifyError
    ) -> JSONResponse:
        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(
                "Request failed: %s",
                exc.message,
                exc_info=exc,
                extra={"path": request.url.path},
            )
        else:
            logger.warning(
                "Rejected request: %s", exc.message, extra={"path": request.url.path}
            )
        return JSONResponse(status_code=exc.status_code, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        fields = sorted(
            {
                error["loc"][1]
                for error in exc.errors()
                if len(error["loc"]) > 1 and isinstance(error["loc"][1], str)
            }
        )
        message = f"Invalid fields: {', '.join(fields)}" if fields else "Invalid request"
        logger.warning("Rejected request: %s", message, extra={"path": request.url.path})
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"error": message}
        )
