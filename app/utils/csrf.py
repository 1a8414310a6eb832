"""Stateless double-submit CSRF tokens.

A token is ``<id>.<base64url(HMAC-SHA256(secret, id))>``, where ``id`` is 128
random bits in hex. Nothing is stored server side: a token is valid when its
signature checks out.
"""

import base64
import binascii
import hashlib
import hmac
import secrets

CSRF_COOKIE_NAME = "csrf_token"
CSRF_HEADER_NAME = "X-CSRF-Token"


def _sign(token_id: str, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), token_id.encode("utf-8"), hashlib.sha256).digest()


def issue_csrf_token(secret: str) -> str:
    token_id = secrets.token_hex(16)
    signature = base64.urlsafe_b64encode(_sign(token_id, secret)).decode("ascii")
    return f"{token_id}.{signature}"


def validate_csrf_token(token: str, secret: str) -> bool:
    token_id, sep, signature_str = token.partition(".")
    if not sep:
        return False

    try:
        signature = base64.b64decode(signature_str, altchars=b"-_", validate=True)
    except (binascii.Error, ValueError):
        return False

    # Reject non-canonical encodings (unused trailing bits, foreign alphabet)
    if base64.urlsafe_b64encode(signature).decode("ascii") != signature_str:
        return False

    return hmac.compare_digest(signature, _sign(token_id, secret))
