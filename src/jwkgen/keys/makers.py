"""Key material generators, one per key family.

Every maker takes validated ``GenerationParameters`` and returns a
``KeyObject`` carrying the params' use and alg (the kid is attached later by
the identifier assigner). Key-pair math is delegated to ``cryptography``;
symmetric secrets come straight from the OS CSPRNG.

A configuration the backend refuses (RSA modulus too small, curve not built
into the linked OpenSSL, ...) surfaces as ``GenerationFailed``. Nothing here
is retried.
"""
from __future__ import annotations

import os
from typing import Callable, Dict

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed448, ed25519, rsa, x448, x25519

from .encoding import b64url_encode, int_to_b64url
from .errors import GenerationFailed
from .model import GenerationParameters, KeyFamily, KeyObject
from ..config import load_config
from ..utils.logging import get_logger

log = get_logger()

EC_CURVE_TYPES: Dict[str, type] = {
    "P-256": ec.SECP256R1,
    "secp256k1": ec.SECP256K1,
    "P-384": ec.SECP384R1,
    "P-521": ec.SECP521R1,
}

OKP_KEY_TYPES: Dict[str, type] = {
    "Ed25519": ed25519.Ed25519PrivateKey,
    "Ed448": ed448.Ed448PrivateKey,
    "X25519": x25519.X25519PrivateKey,
    "X448": x448.X448PrivateKey,
}


def _wrap(params: GenerationParameters, public: dict, private: dict) -> KeyObject:
    return KeyObject(
        kty=params.family,
        use=params.use,
        alg=params.alg,
        public=public,
        private=private,
    )


def make_rsa(params: GenerationParameters) -> KeyObject:
    sk = rsa.generate_private_key(
        public_exponent=load_config().rsa_public_exponent,
        key_size=params.size,
    )
    priv = sk.private_numbers()
    pub = priv.public_numbers
    return _wrap(
        params,
        public={"n": int_to_b64url(pub.n), "e": int_to_b64url(pub.e)},
        private={
            "d": int_to_b64url(priv.d),
            "p": int_to_b64url(priv.p),
            "q": int_to_b64url(priv.q),
            "dp": int_to_b64url(priv.dmp1),
            "dq": int_to_b64url(priv.dmq1),
            "qi": int_to_b64url(priv.iqmp),
        },
    )


def make_ec(params: GenerationParameters) -> KeyObject:
    curve = EC_CURVE_TYPES[params.curve]()
    sk = ec.generate_private_key(curve)
    priv = sk.private_numbers()
    pub = priv.public_numbers
    # Coordinates and d are fixed-width per RFC 7518 section 6.2.1.2
    width = (curve.key_size + 7) // 8
    return _wrap(
        params,
        public={
            "crv": params.curve,
            "x": int_to_b64url(pub.x, width),
            "y": int_to_b64url(pub.y, width),
        },
        private={"d": int_to_b64url(priv.private_value, width)},
    )


def make_okp(params: GenerationParameters) -> KeyObject:
    sk = OKP_KEY_TYPES[params.curve].generate()
    d = sk.private_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PrivateFormat.Raw,
        encryption_algorithm=serialization.NoEncryption(),
    )
    x = sk.public_key().public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw,
    )
    return _wrap(
        params,
        public={"crv": params.curve, "x": b64url_encode(x)},
        private={"d": b64url_encode(d)},
    )


def make_oct(params: GenerationParameters) -> KeyObject:
    secret = os.urandom(params.size // 8)
    return _wrap(params, public={}, private={"k": b64url_encode(secret)})


MAKERS: Dict[KeyFamily, Callable[[GenerationParameters], KeyObject]] = {
    KeyFamily.RSA: make_rsa,
    KeyFamily.EC: make_ec,
    KeyFamily.OKP: make_okp,
    KeyFamily.OCT: make_oct,
}


def generate(params: GenerationParameters) -> KeyObject:
    maker = MAKERS[params.family]
    detail = f"size={params.size}" if params.size is not None else f"crv={params.curve}"
    log.info(f"generating {params.family.value} key ({detail})")
    try:
        return maker(params)
    except (ValueError, OverflowError, MemoryError, UnsupportedAlgorithm) as e:
        raise GenerationFailed(
            f"Could not generate {params.family.value} key ({detail}): {e}"
        ) from e


__all__ = ["generate", "MAKERS", "EC_CURVE_TYPES", "OKP_KEY_TYPES"]
