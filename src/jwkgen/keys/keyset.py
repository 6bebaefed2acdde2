"""Load an on-disk JWK Set and append a freshly generated key to it.

Merging never writes; persisting the result is the output writer's job.
Contents of an existing file are trusted: duplicate kids are neither detected
nor removed.
"""
from __future__ import annotations

import json
import os
from typing import Optional

from .errors import CorruptKeySet, IOFailure
from .model import KeyObject, KeySet
from ..utils.logging import get_logger

log = get_logger()


def load_keyset(path: str) -> KeySet:
    try:
        with open(path, "rb") as f:
            raw = f.read()
    except OSError as e:
        raise IOFailure(path, e, action="read existing KeySet") from e
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise CorruptKeySet(path, f"not UTF-8: {e}") from e
    try:
        doc = json.loads(text)
    except ValueError as e:
        raise CorruptKeySet(path, f"invalid JSON: {e}") from e
    try:
        keyset = KeySet.from_jwks(doc)
    except ValueError as e:
        raise CorruptKeySet(path, str(e)) from e
    log.info(f"loaded {len(keyset)} key(s) from {path}")
    return keyset


def merge(existing_path: Optional[str], new_key: KeyObject) -> KeySet:
    if existing_path is None or not os.path.exists(existing_path):
        base = KeySet()
    else:
        base = load_keyset(existing_path)
    return base.append(new_key)


__all__ = ["load_keyset", "merge"]
