"""Common utilities for presign."""

from presign.common.errors import (
    InvalidArgumentError,
    SignatureExpiredError,
    SignatureMismatchError,
)
from presign.common.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
    "InvalidArgumentError",
    "SignatureMismatchError",
    "SignatureExpiredError",
]
