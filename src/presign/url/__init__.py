"""Canonicalization, signing and validation of pre-signed URLs."""

from presign.url.canonical import CanonicalRequest, build_canonical_request, canonicalize
from presign.url.methods import HttpMethod
from presign.url.signer import (
    EXPIRATION,
    HMAC_SIGNATURE,
    generate_presigned_url,
    generate_signature,
)
from presign.url.validator import validate_presigned_url

__all__ = [
    "EXPIRATION",
    "HMAC_SIGNATURE",
    "CanonicalRequest",
    "HttpMethod",
    "build_canonical_request",
    "canonicalize",
    "generate_presigned_url",
    "generate_signature",
    "validate_presigned_url",
]
