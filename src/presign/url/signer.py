"""Signature generation and pre-signed URL construction."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from urllib.parse import urlunsplit

from presign.common.errors import InvalidArgumentError
from presign.common.hmac import DEFAULT_DIGEST, DigestMod, sign
from presign.common.logging import get_logger
from presign.url.canonical import canonicalize, format_query, parse_query, split_url
from presign.url.methods import HttpMethod

logger = get_logger(__name__)

EXPIRATION = "expiration"
HMAC_SIGNATURE = "hmacSignature"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_MILLISECOND = timedelta(milliseconds=1)


def to_epoch_millis(value: datetime | int) -> int:
    """Convert a datetime (or epoch milliseconds) to epoch milliseconds."""
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.astimezone()
        return (value - _EPOCH) // _MILLISECOND
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidArgumentError(
            f"Expiration must be a datetime or epoch milliseconds, got {value!r}"
        )
    return value


def generate_signature(
    method: HttpMethod | str | None,
    url: str | None,
    signature_param_name: str | None,
    credentials: str | None,
    digestmod: DigestMod = DEFAULT_DIGEST,
) -> str:
    """
    Sign the canonical form of ``method`` + ``url``.

    Args:
        method: HTTP method of the request
        url: URL to sign; ``signature_param_name`` is ignored if present
        signature_param_name: Query key excluded from the canonical string
        credentials: Shared secret
        digestmod: Hash name or constructor for the HMAC

    Returns:
        Lower-case hex HMAC digest
    """
    if credentials is None:
        raise InvalidArgumentError("Credentials are required")
    canonical = canonicalize(method, url, signature_param_name)
    return sign(credentials, canonical, digestmod)


def generate_presigned_url(
    method: HttpMethod | str | None,
    url: str | None,
    expires: datetime | int | None,
    credentials: str | None,
    digestmod: DigestMod = DEFAULT_DIGEST,
) -> str:
    """
    Build a pre-signed URL.

    The result is ``url`` with its parameters normalized to ``key=value``,
    followed by ``expiration=<epochMillis>`` when ``expires`` is given and
    ``hmacSignature=<hex>`` last.

    Raises:
        InvalidArgumentError: If method, url or credentials is missing, or
            the URL cannot be parsed
    """
    if method is None:
        raise InvalidArgumentError("HTTP method is required")
    if url is None:
        raise InvalidArgumentError("URL is required")
    if credentials is None:
        raise InvalidArgumentError("Credentials are required")

    http_method = HttpMethod.parse(method)
    parts = split_url(url)

    params = [p for p in parse_query(parts.query) if p[0] != HMAC_SIGNATURE]
    if expires is not None:
        params = [p for p in params if p[0] != EXPIRATION]
        params.append((EXPIRATION, str(to_epoch_millis(expires))))

    unsigned = urlunsplit(parts._replace(query=format_query(params), fragment=""))
    signature = generate_signature(http_method, unsigned, HMAC_SIGNATURE, credentials, digestmod)
    params.append((HMAC_SIGNATURE, signature))

    logger.debug(
        "Generated pre-signed URL",
        method=http_method.value,
        host=parts.hostname,
        path=parts.path,
        expires=expires is not None,
    )
    return urlunsplit(parts._replace(query=format_query(params)))
