"""Shared error types, codes and response helpers."""

from __future__ import annotations

from typing import Any

from starlette.responses import JSONResponse


class InvalidArgumentError(ValueError):
    """Malformed or missing input (bad URL, missing signature, bad expiration)."""


class SignatureMismatchError(Exception):
    """The signature on a URL could not be trusted."""


class SignatureExpiredError(SignatureMismatchError):
    """The signature was valid for a URL whose expiration has passed."""

    def __init__(self, message: str, expiration: int, now: int) -> None:
        super().__init__(message)
        self.expiration = expiration
        self.now = now


class ErrorCode:
    BAD_REQUEST = "bad_request"
    SIGNATURE_MISMATCH = "signature_mismatch"
    SIGNATURE_EXPIRED = "signature_expired"
    SERVER_MISCONFIGURED = "server_misconfigured"


def error_response(
    code: str,
    message: str,
    status_code: int,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    payload = {
        "error": {
            "code": code,
            "message": message,
        }
    }
    if details:
        payload["error"]["details"] = details
    return JSONResponse(payload, status_code=status_code)
