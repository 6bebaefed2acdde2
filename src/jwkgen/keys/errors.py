"""Failure taxonomy for key generation and key set handling.

Library code raises these; the CLI is the only place they are caught and
turned into an exit status.
"""
from __future__ import annotations

from typing import Optional


class JwkGenError(Exception):
    """Base class for every failure reported by jwkgen."""


class KeyValidationError(JwkGenError):
    """Generation parameters rejected before any key material is produced."""


class MissingFamily(KeyValidationError):
    pass


class UnknownFamily(KeyValidationError):
    pass


class MissingSize(KeyValidationError):
    pass


class InvalidSize(KeyValidationError):
    pass


class MissingCurve(KeyValidationError):
    pass


class InvalidCurve(KeyValidationError):
    pass


class InvalidUsage(KeyValidationError):
    pass


class GenerationFailed(JwkGenError):
    """The crypto backend refused the requested key configuration."""


class CorruptKeySet(JwkGenError):
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not parse existing KeySet {path}: {reason}")


class IOFailure(JwkGenError):
    def __init__(self, path: str, cause: Optional[OSError] = None, action: str = "access"):
        self.path = path
        self.cause = cause
        detail = cause.strerror if cause is not None and cause.strerror else str(cause)
        super().__init__(f"Could not {action} {path}: {detail}")


__all__ = [
    "JwkGenError",
    "KeyValidationError",
    "MissingFamily",
    "UnknownFamily",
    "MissingSize",
    "InvalidSize",
    "MissingCurve",
    "InvalidCurve",
    "InvalidUsage",
    "GenerationFailed",
    "CorruptKeySet",
    "IOFailure",
]
