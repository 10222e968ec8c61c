"""Centralized exception handlers for the FastAPI application.

Auth and account errors raised anywhere below the routers are mapped to
HTTP responses here, so routers never translate them by hand.

Error Response Format:
    {
        "detail": "Human-readable error message",
        "code": "MACHINE_READABLE_ERROR_CODE"
    }

Usage:
    from tessera.presentation.api.exception_handlers import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from tessera_auth.exceptions import AuthError, ErrorCode
from tessera_identity.domain.account import InvalidEmailError

logger = logging.getLogger(__name__)


# =============================================================================
# Error Code to HTTP Status Mapping
# =============================================================================

ERROR_CODE_TO_STATUS: dict[ErrorCode, int] = {
    # 400 Bad Request
    ErrorCode.VALIDATION_ERROR: status.HTTP_400_BAD_REQUEST,
    # 401 Unauthorized
    ErrorCode.INCORRECT_CREDENTIAL: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INVALID_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.OAUTH_FAILED: status.HTTP_401_UNAUTHORIZED,
    # 403 Forbidden - account state
    ErrorCode.ACCOUNT_NOT_ACTIVE: status.HTTP_403_FORBIDDEN,
    ErrorCode.EMAIL_LINKED_TO_OAUTH: status.HTTP_403_FORBIDDEN,
    # 404 Not Found
    ErrorCode.ACCOUNT_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    # 409 Conflict
    ErrorCode.DUPLICATE_ACCOUNT: status.HTTP_409_CONFLICT,
    # 500 Internal Server Error
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _create_error_response(
    status_code: int,
    message: str,
    code: str,
) -> JSONResponse:
    """Create a standardized error response."""
    return JSONResponse(
        status_code=status_code,
        content={
            "detail": message,
            "code": code,
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application.

    Parameters
    ----------
    app
        The FastAPI application instance
    """

    @app.exception_handler(AuthError)
    async def auth_exception_handler(
        request: Request,
        exc: AuthError,
    ) -> JSONResponse:
        """Handle auth and account errors with a structured response.

        Details stay in the log; clients only see the message and code.
        """
        status_code = ERROR_CODE_TO_STATUS.get(
            exc.code,
            status.HTTP_400_BAD_REQUEST,
        )

        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(
                "Internal error on %s %s: %s (details=%s)",
                request.method,
                request.url.path,
                exc.message,
                exc.details,
            )
        else:
            logger.warning(
                "Auth error on %s %s: %s (code=%s, details=%s)",
                request.method,
                request.url.path,
                exc.message,
                exc.code.value,
                exc.details,
            )

        response = _create_error_response(
            status_code=status_code,
            message=exc.message,
            code=exc.code.value,
        )
        if status_code == status.HTTP_401_UNAUTHORIZED:
            response.headers["WWW-Authenticate"] = "Bearer"
        return response

    @app.exception_handler(InvalidEmailError)
    async def invalid_email_handler(
        request: Request,
        exc: InvalidEmailError,
    ) -> JSONResponse:
        logger.warning(
            "Invalid email on %s %s: %s",
            request.method,
            request.url.path,
            exc,
        )
        return _create_error_response(
            status_code=status.HTTP_400_BAD_REQUEST,
            message=str(exc),
            code=ErrorCode.VALIDATION_ERROR.value,
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unhandled exceptions with consistent error format.

        This is the catch-all handler for any exceptions not handled by
        the handlers above.
        """
        logger.exception(
            "Unhandled exception on %s %s: %s",
            request.method,
            request.url.path,
            exc,
        )
        return _create_error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message="An internal error occurred",
            code=ErrorCode.INTERNAL_ERROR.value,
        )
