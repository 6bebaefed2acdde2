from __future__ import annotations

import sys
import time
from typing import Callable, Optional, TextIO

from .keyset import merge
from .kid import assign_kid
from .makers import generate
from .model import GenerationParameters, KeyObject
from .output import dumps, emit, render, render_keyset
from ..utils.logging import get_logger

log = get_logger()


def build_key(params: GenerationParameters, clock: Callable[[], float] = time.time) -> KeyObject:
    key = generate(params)
    kid = assign_kid(params.kid, params.no_kid, params.use, clock=clock)
    return key.model_copy(update={"kid": kid})


def run(
    params: GenerationParameters,
    key_set_mode: bool = False,
    public_display: bool = False,
    output: Optional[str] = None,
    stream: Optional[TextIO] = None,
    clock: Callable[[], float] = time.time,
) -> KeyObject:
    """One generation: build the key, then display it or persist it.

    With ``output`` set nothing is printed; in key set mode the key is appended
    to whatever set already lives at ``output``.
    """
    out = stream or sys.stdout
    key = build_key(params, clock=clock)

    if output is not None:
        if key_set_mode:
            keyset = merge(output, key)
            emit(render_keyset(keyset), destination=output)
            log.info(f"wrote KeySet with {len(keyset)} key(s) to {output} (kid={key.kid})")
        else:
            emit(key.to_jwk(), destination=output)
            log.info(f"wrote {key.kty.value} key to {output} (kid={key.kid})")
        return key

    out.write("Full key:\n")
    out.write(dumps(render(key_set_mode, key)))
    if public_display:
        out.write("\n")
        pub = render(key_set_mode, key, public_only=True)
        if pub is not None:
            out.write("Public key:\n")
            out.write(dumps(pub))
        else:
            out.write("No public key.\n")
    return key


__all__ = ["build_key", "run"]
