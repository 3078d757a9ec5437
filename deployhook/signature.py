"""GitHub-style HMAC-SHA256 webhook signatures."""

import hashlib
import hmac

SIGNATURE_HEADER = "X-Hub-Signature-256"
SIGNATURE_PREFIX = "sha256="


def sign_payload(payload: bytes, secret: bytes) -> str:
    """Return the ``sha256=<hex>`` header value for ``payload``."""
    return SIGNATURE_PREFIX + hmac.new(secret, payload, hashlib.sha256).hexdigest()


def verify_signature(payload: bytes, secret: bytes, signature_header: str | None) -> bool:
    """Check ``signature_header`` against the HMAC of the raw request body.

    The comparison runs over bytes with ``hmac.compare_digest`` so it stays
    constant-time and accepts headers with non-ASCII characters.
    """
    if not signature_header or not signature_header.startswith(SIGNATURE_PREFIX):
        return False

    expected = sign_payload(payload, secret)
    return hmac.compare_digest(expected.encode(), signature_header.encode("utf-8"))
