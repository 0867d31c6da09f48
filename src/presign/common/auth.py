"""Middleware enforcing pre-signed URLs on incoming requests."""

from __future__ import annotations

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from presign.common.errors import (
    ErrorCode,
    InvalidArgumentError,
    SignatureExpiredError,
    SignatureMismatchError,
    error_response,
)
from presign.common.logging import get_logger
from presign.common.settings import Settings
from presign.url.validator import validate_presigned_url

logger = get_logger(__name__)


def request_url(request: Request) -> str:
    """Rebuild the URL a client requested, keeping path and query un-decoded."""
    raw_path = request.scope.get("raw_path")
    path = raw_path.split(b"?", 1)[0].decode("latin-1") if raw_path else request.url.path
    url = f"{request.url.scheme}://{request.url.netloc}{path}"
    query = request.scope.get("query_string", b"").decode("latin-1")
    if query:
        url = f"{url}?{query}"
    return url


class PresignedUrlMiddleware(BaseHTTPMiddleware):
    """Reject requests whose URL does not carry a valid, unexpired signature."""

    def __init__(self, app: ASGIApp, settings: Settings) -> None:
        super().__init__(app)
        self._settings = settings
        self._exempt_paths = set(settings.exempt_paths)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path in self._exempt_paths:
            return await call_next(request)

        secret = self._settings.secret_value
        if not secret:
            logger.error("Pre-signed URL secret not configured")
            return error_response(
                ErrorCode.SERVER_MISCONFIGURED,
                "URL signing secret not configured",
                status_code=500,
            )

        try:
            validate_presigned_url(
                request.method,
                request_url(request),
                secret,
                digestmod=self._settings.hmac_algorithm,
            )
        except InvalidArgumentError as exc:
            logger.info("Malformed pre-signed request", path=request.url.path, error=str(exc))
            return error_response(ErrorCode.BAD_REQUEST, str(exc), status_code=400)
        except SignatureExpiredError as exc:
            return error_response(
                ErrorCode.SIGNATURE_EXPIRED,
                str(exc),
                status_code=401,
                details={"expiration": exc.expiration},
            )
        except SignatureMismatchError as exc:
            return error_response(ErrorCode.SIGNATURE_MISMATCH, str(exc), status_code=401)

        request.state.signature_verified = True
        return await call_next(request)
