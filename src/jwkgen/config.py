"""Generator configuration loader.

Loads from optional config/jwkgen.yml first, then environment overrides
(a local .env is honoured through python-dotenv).
"""
from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Dict, Any

import yaml
from dotenv import load_dotenv

load_dotenv()

_DEFAULT = {
    "json_indent": 2,
    "rsa_public_exponent": 65537,
    "log_level": "WARNING",
}


@dataclass
class GeneratorConfig:
    json_indent: int = _DEFAULT["json_indent"]
    rsa_public_exponent: int = _DEFAULT["rsa_public_exponent"]
    log_level: str = _DEFAULT["log_level"]


_CONFIG: GeneratorConfig | None = None

_ENV_MAP = {
    "json_indent": ("JWKGEN_JSON_INDENT", int),
    "rsa_public_exponent": ("JWKGEN_RSA_PUBLIC_EXPONENT", int),
    "log_level": ("JWKGEN_LOG_LEVEL", str),
}


def config_path() -> str:
    return os.getenv("JWKGEN_CONFIG", os.path.join(os.getcwd(), "config", "jwkgen.yml"))


def _read_file(path: str) -> Dict[str, Any]:
    if not os.path.exists(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            file_cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):  # pragma: no cover
        return {}
    return file_cfg if isinstance(file_cfg, dict) else {}


def load_config(reload: bool = False) -> GeneratorConfig:
    global _CONFIG
    if _CONFIG is not None and not reload:
        return _CONFIG
    data: Dict[str, Any] = {}
    # File first
    for k, v in _read_file(config_path()).items():
        if k in _ENV_MAP:
            data[k] = v
    # Env overrides
    for k, (env, _cast) in _ENV_MAP.items():
        if env in os.environ:
            data[k] = os.environ[env]
    cfg = GeneratorConfig()
    for k, (_env, cast) in _ENV_MAP.items():
        if k not in data:
            continue
        try:
            setattr(cfg, k, cast(data[k]))
        except (TypeError, ValueError):
            pass
    cfg.log_level = cfg.log_level.upper()
    _CONFIG = cfg
    return cfg
