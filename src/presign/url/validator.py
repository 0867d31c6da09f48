"""Validation of pre-signed URLs."""

from __future__ import annotations

import re
import time
from datetime import datetime

from presign.common.errors import (
    InvalidArgumentError,
    SignatureExpiredError,
    SignatureMismatchError,
)
from presign.common.hmac import DEFAULT_DIGEST, DigestMod
from presign.common.hmac import verify as verify_hmac
from presign.common.logging import get_logger
from presign.url.canonical import canonicalize, parse_query, split_url
from presign.url.methods import HttpMethod
from presign.url.signer import EXPIRATION, HMAC_SIGNATURE, to_epoch_millis

logger = get_logger(__name__)

_EPOCH_MILLIS = re.compile(r"[+-]?[0-9]{1,19}")
_MIN_MILLIS = -(2**63)
_MAX_MILLIS = 2**63 - 1


def _single_value(params: list[tuple[str, str]], key: str) -> str | None:
    values = [value for name, value in params if name == key]
    if not values:
        return None
    if len(values) > 1:
        raise InvalidArgumentError(f"Query parameter {key!r} appears more than once")
    return values[0]


def parse_expiration(value: str) -> int:
    """Parse an ``expiration`` value as epoch milliseconds."""
    if not _EPOCH_MILLIS.fullmatch(value):
        raise InvalidArgumentError(f"Invalid {EXPIRATION} value: {value!r:.40}")
    millis = int(value)
    if not _MIN_MILLIS <= millis <= _MAX_MILLIS:
        raise InvalidArgumentError(f"{EXPIRATION} value out of range: {value!r}")
    return millis


def validate_presigned_url(
    method: HttpMethod | str | None,
    url: str | None,
    credentials: str | None,
    now: datetime | int | None = None,
    digestmod: DigestMod = DEFAULT_DIGEST,
) -> None:
    """
    Validate a URL produced by ``generate_presigned_url``.

    Returns nothing; the absence of an exception means the URL is trusted.

    Args:
        method: HTTP method the URL is being used with
        url: Received URL, including its query string
        credentials: Shared secret
        now: Current time (datetime or epoch millis); defaults to the clock
        digestmod: Hash name or constructor for the HMAC

    Raises:
        InvalidArgumentError: If the input is malformed (no signature,
            unparseable expiration, bad method or URL)
        SignatureExpiredError: If the expiration is before ``now``
        SignatureMismatchError: If the signature does not match
    """
    if credentials is None:
        raise InvalidArgumentError("Credentials are required")
    http_method = HttpMethod.parse(method)
    parts = split_url(url)

    params = parse_query(parts.query)
    signature = _single_value(params, HMAC_SIGNATURE)
    if signature is None:
        raise InvalidArgumentError(f"URL is missing the {HMAC_SIGNATURE} parameter")

    raw_expiration = _single_value(params, EXPIRATION)
    if raw_expiration is not None:
        expiration = parse_expiration(raw_expiration)
        now_millis = int(time.time() * 1000) if now is None else to_epoch_millis(now)
        if expiration < now_millis:
            logger.warning(
                "Pre-signed URL expired",
                method=http_method.value,
                host=parts.hostname,
                path=parts.path,
                expiration=expiration,
                now=now_millis,
            )
            raise SignatureExpiredError(
                f"Signature expired at {expiration}", expiration=expiration, now=now_millis
            )

    canonical = canonicalize(http_method, url, HMAC_SIGNATURE)
    if not verify_hmac(credentials, canonical, signature, digestmod):
        logger.warning(
            "Pre-signed URL signature mismatch",
            method=http_method.value,
            host=parts.hostname,
            path=parts.path,
        )
        raise SignatureMismatchError("Signatures do not match")
