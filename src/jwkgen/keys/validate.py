"""Parameter validation per key family.

Rules are checked in a fixed order so the first violated rule determines the
reported error: family, then size (RSA/oct), then curve (EC/OKP), then use.
The algorithm label is taken verbatim and never checked against use or family.
"""
from __future__ import annotations

import re
from typing import Optional

from .errors import (
    InvalidCurve,
    InvalidSize,
    InvalidUsage,
    MissingCurve,
    MissingFamily,
    MissingSize,
    UnknownFamily,
)
from .model import EC_CURVES, OKP_CURVES, GenerationParameters, KeyFamily, KeyUse
from ..utils.logging import get_logger

log = get_logger()

_SIZED = (KeyFamily.RSA, KeyFamily.OCT)
_CURVES = {KeyFamily.EC: EC_CURVES, KeyFamily.OKP: OKP_CURVES}

# ASCII decimal, or 0x / 0o / 0b prefixed; no underscores or leading plus
_SIZE_RE = re.compile(r"-?(?:(?P<prefixed>0[xX][0-9a-fA-F]+|0[oO][0-7]+|0[bB][01]+)|[0-9]+)")
# signed 32-bit range
MAX_KEY_SIZE = 2**31 - 1


def _blank(value: Optional[str]) -> bool:
    return value is None or value == ""


def parse_family(kty: Optional[str]) -> KeyFamily:
    if _blank(kty):
        raise MissingFamily("Key type must be supplied.")
    try:
        return KeyFamily(kty)
    except ValueError:
        choices = ", ".join(f.value for f in KeyFamily)
        raise UnknownFamily(f"Unknown key type: {kty} (expected one of {choices})") from None


def parse_size(family: KeyFamily, size: Optional[str]) -> int:
    if _blank(size):
        raise MissingSize(f"Key size (in bits) is required for key type {family.value}")
    text = size.strip()
    m = _SIZE_RE.fullmatch(text)
    if m is None:
        raise InvalidSize(f"Invalid key size: {size}")
    try:
        bits = int(text, 0) if m.group("prefixed") else int(text, 10)
    except ValueError:
        # past the interpreter's int string conversion limit
        raise InvalidSize(f"Invalid key size: {size}") from None
    if bits <= 0:
        raise InvalidSize(f"Key size (in bits) must be positive, got {bits}")
    if bits > MAX_KEY_SIZE:
        raise InvalidSize(f"Invalid key size: {size} (must not exceed {MAX_KEY_SIZE})")
    if bits % 8 != 0:
        raise InvalidSize(f"Key size (in bits) must be divisible by 8, got {bits}")
    return bits


def parse_curve(family: KeyFamily, crv: Optional[str]) -> str:
    if _blank(crv):
        raise MissingCurve(f"Curve is required for key type {family.value}")
    allowed = _CURVES[family]
    if crv not in allowed:
        raise InvalidCurve(
            f"Curve {crv} is not valid for key type {family.value}, must be one of {', '.join(allowed)}"
        )
    return crv


def parse_use(use: Optional[str]) -> Optional[KeyUse]:
    if _blank(use):
        return None
    try:
        return KeyUse(use)
    except ValueError:
        raise InvalidUsage(f"Invalid key usage, must be 'sig' or 'enc', got {use}") from None


def validate_parameters(
    kty: Optional[str],
    size: Optional[str] = None,
    crv: Optional[str] = None,
    use: Optional[str] = None,
    alg: Optional[str] = None,
    kid: Optional[str] = None,
    no_kid: bool = False,
) -> GenerationParameters:
    family = parse_family(kty)

    bits: Optional[int] = None
    curve: Optional[str] = None
    if family in _SIZED:
        bits = parse_size(family, size)
        if not _blank(crv):
            log.warning(f"ignoring curve {crv} for key type {family.value}")
    else:
        curve = parse_curve(family, crv)
        if not _blank(size):
            log.warning(f"ignoring key size {size} for key type {family.value}")

    key_use = parse_use(use)

    return GenerationParameters(
        family=family,
        size=bits,
        curve=curve,
        use=key_use,
        alg=None if _blank(alg) else alg,
        kid=None if _blank(kid) else kid,
        no_kid=bool(no_kid),
    )


__all__ = ["validate_parameters", "parse_family", "parse_size", "parse_curve", "parse_use"]
