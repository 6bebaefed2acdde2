# base64url helpers for JWK members (RFC 7515 section 2, RFC 7518 section 6).
import base64
from typing import Optional


def b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(text: str) -> bytes:
    pad = -len(text) % 4
    return base64.urlsafe_b64decode(text + "=" * pad)


def int_to_b64url(value: int, length: Optional[int] = None) -> str:
    """Big-endian unsigned encoding; minimal length unless ``length`` is given."""
    if length is None:
        length = max(1, (value.bit_length() + 7) // 8)
    return b64url_encode(value.to_bytes(length, "big"))


def b64url_to_int(text: str) -> int:
    return int.from_bytes(b64url_decode(text), "big")
