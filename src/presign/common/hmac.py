"""HMAC signing primitives."""

from __future__ import annotations

import hmac
from collections.abc import Callable
from typing import Any

DigestMod = str | Callable[..., Any]

DEFAULT_DIGEST = "sha256"


def sign(secret: str, message: str | bytes, digestmod: DigestMod = DEFAULT_DIGEST) -> str:
    """Create a lower-case hex-encoded HMAC signature."""
    if isinstance(message, str):
        message = message.encode("utf-8")
    return hmac.new(secret.encode("utf-8"), message, digestmod).hexdigest()


def verify(
    secret: str,
    message: str | bytes,
    signature: str,
    digestmod: DigestMod = DEFAULT_DIGEST,
) -> bool:
    """Verify HMAC signature in constant time."""
    expected = sign(secret, message, digestmod)
    return hmac.compare_digest(expected.encode("utf-8"), signature.encode("utf-8"))

