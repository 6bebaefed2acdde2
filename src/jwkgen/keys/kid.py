from __future__ import annotations

import time
from typing import Callable, Optional

from .model import KeyUse


def assign_kid(
    requested: Optional[str],
    suppress: bool,
    use: Optional[KeyUse],
    clock: Callable[[], float] = time.time,
) -> Optional[str]:
    """Pick the key id: the requested one, none when suppressed, else ``<use><epoch seconds>``.

    The generated form is only unique per second and use; two keys minted in
    the same second with the same use share a kid.
    """
    if requested:
        return requested
    if suppress:
        return None
    prefix = use.short_code if use is not None else ""
    return f"{prefix}{int(clock())}"


__all__ = ["assign_kid"]
