"""Render keys and key sets to JSON and emit them to stdout or a file."""
from __future__ import annotations

import json
import sys
from typing import Any, Dict, Optional, TextIO

from .errors import IOFailure
from .model import KeyObject, KeySet
from ..config import load_config


def render(key_set_mode: bool, key: KeyObject, public_only: bool = False) -> Optional[Dict[str, Any]]:
    """JSON form of ``key``, or None when a public view is asked of a symmetric key.

    In key set mode the key is wrapped as a one-element ``{"keys": [...]}``.
    """
    if public_only:
        projected = key.to_public()
        if projected is None:
            return None
        key = projected
    if key_set_mode:
        return KeySet(keys=[key]).to_jwks()
    return key.to_jwk()


def render_keyset(keyset: KeySet, public_only: bool = False) -> Dict[str, Any]:
    return keyset.to_jwks(public_only=public_only)


def dumps(document: Dict[str, Any], indent: Optional[int] = None) -> str:
    if indent is None:
        indent = load_config().json_indent
    return json.dumps(document, indent=indent, ensure_ascii=False) + "\n"


def emit(document: Dict[str, Any], destination: Optional[str] = None, stream: Optional[TextIO] = None) -> None:
    text = dumps(document)
    if destination is None:
        (stream or sys.stdout).write(text)
        return
    # Full overwrite; no partial-write recovery
    try:
        with open(destination, "w", encoding="utf-8") as f:
            f.write(text)
    except OSError as e:
        raise IOFailure(destination, e, action="write") from e


__all__ = ["render", "render_keyset", "dumps", "emit"]
