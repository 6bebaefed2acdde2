from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class KeyFamily(str, Enum):
    RSA = "RSA"
    EC = "EC"
    OKP = "OKP"
    OCT = "oct"

    @property
    def asymmetric(self) -> bool:
        return self is not KeyFamily.OCT


class KeyUse(str, Enum):
    SIGNATURE = "sig"
    ENCRYPTION = "enc"

    @property
    def short_code(self) -> str:
        return self.value


EC_CURVES = ("P-256", "secp256k1", "P-384", "P-521")
OKP_CURVES = ("Ed25519", "Ed448", "X25519", "X448")

# JWK members per key type (RFC 7518 section 6, RFC 8037 section 2)
PUBLIC_MEMBERS: Dict[KeyFamily, tuple] = {
    KeyFamily.RSA: ("n", "e"),
    KeyFamily.EC: ("crv", "x", "y"),
    KeyFamily.OKP: ("crv", "x"),
    KeyFamily.OCT: (),
}
PRIVATE_MEMBERS: Dict[KeyFamily, tuple] = {
    KeyFamily.RSA: ("d", "p", "q", "dp", "dq", "qi", "oth"),
    KeyFamily.EC: ("d",),
    KeyFamily.OKP: ("d",),
    KeyFamily.OCT: ("k",),
}
REQUIRED_MEMBERS: Dict[KeyFamily, tuple] = {
    KeyFamily.RSA: ("n", "e"),
    KeyFamily.EC: ("crv", "x", "y"),
    KeyFamily.OKP: ("crv", "x"),
    KeyFamily.OCT: ("k",),
}
_COMMON_MEMBERS = ("kty", "use", "kid", "alg")


class GenerationParameters(BaseModel):
    model_config = ConfigDict(frozen=True)

    family: KeyFamily
    size: Optional[int] = None
    curve: Optional[str] = None
    use: Optional[KeyUse] = None
    alg: Optional[str] = None
    kid: Optional[str] = None
    no_kid: bool = False


class KeyObject(BaseModel):
    kty: KeyFamily
    use: Optional[KeyUse] = None
    alg: Optional[str] = None
    kid: Optional[str] = None
    public: Dict[str, Any] = Field(default_factory=dict)
    private: Dict[str, Any] = Field(default_factory=dict)
    # Members of a loaded key this tool does not interpret (x5c, exp, ...)
    extra: Dict[str, Any] = Field(default_factory=dict)

    @property
    def is_private(self) -> bool:
        return bool(self.private)

    def to_jwk(self) -> Dict[str, Any]:
        doc: Dict[str, Any] = {"kty": self.kty.value}
        if self.use is not None:
            doc["use"] = self.use.value
        if self.kid is not None:
            doc["kid"] = self.kid
        if self.alg is not None:
            doc["alg"] = self.alg
        doc.update(self.public)
        doc.update(self.private)
        doc.update(self.extra)
        return doc

    def to_public(self) -> Optional["KeyObject"]:
        """Public projection, or None for symmetric keys which have no public part."""
        if not self.kty.asymmetric:
            return None
        return self.model_copy(update={"private": {}})

    @classmethod
    def from_jwk(cls, doc: Any) -> "KeyObject":
        if not isinstance(doc, dict):
            raise ValueError("key entry is not a JSON object")
        try:
            kty = KeyFamily(doc.get("kty"))
        except ValueError:
            raise ValueError(f"unknown key type {doc.get('kty')!r}") from None
        missing = [m for m in REQUIRED_MEMBERS[kty] if m not in doc]
        if missing:
            raise ValueError(f"{kty.value} key missing member(s) {', '.join(missing)}")
        use = doc.get("use")
        if use is not None:
            try:
                use = KeyUse(use)
            except ValueError:
                raise ValueError(f"unsupported key use {use!r}") from None
        public = {m: doc[m] for m in PUBLIC_MEMBERS[kty] if m in doc}
        private = {m: doc[m] for m in PRIVATE_MEMBERS[kty] if m in doc}
        known = set(_COMMON_MEMBERS) | set(public) | set(private)
        return cls(
            kty=kty,
            use=use,
            alg=doc.get("alg"),
            kid=doc.get("kid"),
            public=public,
            private=private,
            extra={k: v for k, v in doc.items() if k not in known},
        )


class KeySet(BaseModel):
    keys: List[KeyObject] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.keys)

    def append(self, key: KeyObject) -> "KeySet":
        # Duplicate kids are kept as-is
        return KeySet(keys=[*self.keys, key])

    def kids(self) -> List[Optional[str]]:
        return [k.kid for k in self.keys]

    def to_jwks(self, public_only: bool = False) -> Dict[str, Any]:
        if not public_only:
            return {"keys": [k.to_jwk() for k in self.keys]}
        projected = [k.to_public() for k in self.keys]
        return {"keys": [p.to_jwk() for p in projected if p is not None]}

    @classmethod
    def from_jwks(cls, doc: Any) -> "KeySet":
        if not isinstance(doc, dict):
            raise ValueError("document root is not a JSON object")
        entries = doc.get("keys")
        if not isinstance(entries, list):
            raise ValueError("missing 'keys' array")
        return cls(keys=[KeyObject.from_jwk(e) for e in entries])
