"""Canonical request strings for URL signing.

The canonical form of a request is::

    METHOD host path[?k1=v1&k2=v2...]

Query parameters are sorted by key (stable, so repeated keys keep their
order) and every parameter is rendered as ``key=value``, including bare keys.
Scheme, port, userinfo and fragment never take part, so the same logical
request canonicalizes identically however it reached the server.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from urllib.parse import SplitResult, urlsplit

from presign.common.errors import InvalidArgumentError
from presign.url.methods import HttpMethod

QueryParams = list[tuple[str, str]]

_INVALID_HOST_CHARS = re.compile(r"[\s<>\"{}|\\^`]")


@dataclass(frozen=True)
class CanonicalRequest:
    """Normalized view of a request, built fresh for every sign/validate call."""

    method: HttpMethod
    host: str
    path: str
    params: tuple[tuple[str, str], ...]

    def __str__(self) -> str:
        canonical = f"{self.method.value} {self.host} {self.path}"
        if self.params:
            canonical = f"{canonical}?{format_query(self.params)}"
        return canonical


def split_url(url: str | None) -> SplitResult:
    """Split a URL, requiring a host. Scheme-less ``host/path`` is accepted."""
    if url is None:
        raise InvalidArgumentError("URL is required")
    if not isinstance(url, str):
        raise InvalidArgumentError(f"URL must be a string, got {type(url).__name__}")

    try:
        url.encode("utf-8")
    except UnicodeEncodeError as exc:
        raise InvalidArgumentError(f"Invalid URL: not encodable as UTF-8 ({exc.reason})") from exc

    try:
        text = url.strip()
        parts = urlsplit(text)
        if not parts.netloc and "//" not in text:
            parts = urlsplit(f"//{text}")
        host = parts.hostname
    except ValueError as exc:
        raise InvalidArgumentError(f"Invalid URL {url!r}: {exc}") from exc

    if not host:
        raise InvalidArgumentError(f"Invalid URL {url!r}: no host")
    if _INVALID_HOST_CHARS.search(host):
        raise InvalidArgumentError(f"Invalid URL {url!r}: bad host {host!r}")
    return parts


def parse_query(query: str) -> QueryParams:
    """Split a raw query string into ordered ``(key, value)`` pairs.

    Values are left percent-encoded. ``key`` and ``key=`` both give an empty
    value; empty segments are skipped.
    """
    params: QueryParams = []
    for segment in query.split("&"):
        if not segment:
            continue
        key, _, value = segment.partition("=")
        params.append((key, value))
    return params


def format_query(params: QueryParams | tuple[tuple[str, str], ...]) -> str:
    """Join pairs as ``key=value`` with ``&``."""
    return "&".join(f"{key}={value}" for key, value in params)


def _sort_key(param: tuple[str, str]) -> bytes:
    return param[0].encode("utf-8")


def build_canonical_request(
    method: HttpMethod | str | None,
    url: str | None,
    signature_param_name: str | None,
) -> CanonicalRequest:
    """Build the canonical request for ``method`` and ``url``.

    Parameters named ``signature_param_name`` are excluded; pass None to keep
    every parameter.
    """
    http_method = HttpMethod.parse(method)
    parts = split_url(url)

    params = parse_query(parts.query)
    if signature_param_name is not None:
        params = [p for p in params if p[0] != signature_param_name]

    return CanonicalRequest(
        method=http_method,
        host=parts.hostname or "",
        path=parts.path,
        params=tuple(sorted(params, key=_sort_key)),
    )


def canonicalize(
    method: HttpMethod | str | None,
    url: str | None,
    signature_param_name: str | None,
) -> str:
    """Return the canonical string signed for ``method`` and ``url``."""
    return str(build_canonical_request(method, url, signature_param_name))
