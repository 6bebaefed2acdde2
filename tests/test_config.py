from pathlib import Path

import pytest

from jwkgen.config import load_config
from jwkgen.keys.output import dumps


@pytest.fixture
def isolated_config(monkeypatch, tmp_path: Path):
    for var in ("JWKGEN_JSON_INDENT", "JWKGEN_RSA_PUBLIC_EXPONENT", "JWKGEN_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("JWKGEN_CONFIG", str(tmp_path / "jwkgen.yml"))
    yield tmp_path / "jwkgen.yml"
    monkeypatch.undo()
    load_config(reload=True)


def test_defaults(isolated_config):
    cfg = load_config(reload=True)
    assert cfg.json_indent == 2
    assert cfg.rsa_public_exponent == 65537
    assert cfg.log_level == "WARNING"


def test_yaml_then_env_override(isolated_config, monkeypatch):
    isolated_config.write_text("json_indent: 4\nlog_level: debug\nunknown: 1\n", encoding="utf-8")
    cfg = load_config(reload=True)
    assert cfg.json_indent == 4
    assert cfg.log_level == "DEBUG"
    monkeypatch.setenv("JWKGEN_JSON_INDENT", "0")
    assert load_config(reload=True).json_indent == 0


def test_malformed_values_fall_back(isolated_config, monkeypatch):
    monkeypatch.setenv("JWKGEN_JSON_INDENT", "wide")
    cfg = load_config(reload=True)
    assert cfg.json_indent == 2


def test_cached_until_reload(isolated_config, monkeypatch):
    first = load_config(reload=True)
    monkeypatch.setenv("JWKGEN_JSON_INDENT", "8")
    assert load_config() is first
    assert load_config(reload=True).json_indent == 8


def test_indent_drives_output(isolated_config, monkeypatch):
    monkeypatch.setenv("JWKGEN_JSON_INDENT", "4")
    load_config(reload=True)
    assert dumps({"kty": "oct"}) == '{\n    "kty": "oct"\n}\n'
