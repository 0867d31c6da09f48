"""HTTP methods accepted by the signer."""

from __future__ import annotations

from enum import Enum

from presign.common.errors import InvalidArgumentError


class HttpMethod(str, Enum):
    """HTTP method token used in the canonical string."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    PATCH = "PATCH"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: HttpMethod | str | None) -> HttpMethod:
        """Coerce an enum member or case-insensitive name to an HttpMethod."""
        if isinstance(value, cls):
            return value
        if value is None:
            raise InvalidArgumentError("HTTP method is required")
        try:
            return cls(value.strip().upper())
        except (AttributeError, ValueError):
            raise InvalidArgumentError(f"Unsupported HTTP method: {value!r}") from None
