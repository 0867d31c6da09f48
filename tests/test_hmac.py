"""Tests for the HMAC primitives."""

from presign.common.hmac import sign, verify

SECRET = "a super secret password"
MESSAGE = "POST host.org /path/child?a=two&z=one"


class TestSign:
    """Test HMAC signing."""

    def test_sha256_default(self):
        """Default digest is SHA-256."""
        assert sign(SECRET, MESSAGE) == (
            "c1aa521cc99352b11b505ad89796ec44f50172d491d3b30abb1b1098c5f1d5f9"
        )

    def test_sha1(self):
        """SHA-1 can be selected by name."""
        assert sign(SECRET, MESSAGE, "sha1") == "443991603ef96a0f15548d637d9eb8c05db0c29a"

    def test_bytes_message(self):
        """Bytes and str messages sign the same."""
        assert sign(SECRET, MESSAGE.encode("utf-8")) == sign(SECRET, MESSAGE)

    def test_lower_case_hex(self):
        """Signatures are lower-case hex."""
        signature = sign(SECRET, MESSAGE)
        assert signature == signature.lower()
        int(signature, 16)


class TestVerify:
    """Test HMAC verification."""

    def test_verify_valid(self):
        """A matching signature verifies."""
        assert verify(SECRET, MESSAGE, sign(SECRET, MESSAGE)) is True

    def test_verify_tampered(self):
        """A different message does not verify."""
        assert verify(SECRET, MESSAGE + "x", sign(SECRET, MESSAGE)) is False

    def test_verify_other_digest(self):
        """A signature made with another digest does not verify."""
        assert verify(SECRET, MESSAGE, sign(SECRET, MESSAGE, "sha1")) is False

    def test_verify_non_ascii_signature(self):
        """Non-ASCII signatures fail verification instead of raising."""
        assert verify(SECRET, MESSAGE, "é" * 64) is False
