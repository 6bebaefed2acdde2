import pytest
from hypothesis import given, strategies as st

from jwkgen.keys.errors import (
    InvalidCurve,
    InvalidSize,
    InvalidUsage,
    KeyValidationError,
    MissingCurve,
    MissingFamily,
    MissingSize,
    UnknownFamily,
)
from jwkgen.keys.model import EC_CURVES, OKP_CURVES, KeyFamily, KeyUse
from jwkgen.keys.validate import validate_parameters


@given(st.integers(min_value=-100_000, max_value=100_000).filter(lambda n: n % 8 != 0))
def test_size_not_divisible_by_8_rejected(n):
    for kty in ("RSA", "oct"):
        with pytest.raises(InvalidSize):
            validate_parameters(kty, size=str(n))


@given(st.text(min_size=1, max_size=12).filter(lambda s: s not in EC_CURVES))
def test_ec_curve_outside_allow_list_rejected(crv):
    with pytest.raises(InvalidCurve):
        validate_parameters("EC", crv=crv)


@given(st.text(min_size=1, max_size=12).filter(lambda s: s not in OKP_CURVES))
def test_okp_curve_outside_allow_list_rejected(crv):
    with pytest.raises(InvalidCurve):
        validate_parameters("OKP", crv=crv)


@pytest.mark.parametrize("crv", EC_CURVES)
def test_ec_curves_accepted(crv):
    params = validate_parameters("EC", crv=crv)
    assert params.family is KeyFamily.EC
    assert params.curve == crv
    assert params.size is None


@pytest.mark.parametrize("crv", OKP_CURVES)
def test_okp_curves_accepted(crv):
    assert validate_parameters("OKP", crv=crv).curve == crv


def test_okp_curve_not_valid_for_ec():
    with pytest.raises(InvalidCurve):
        validate_parameters("EC", crv="Ed25519")
    with pytest.raises(InvalidCurve):
        validate_parameters("OKP", crv="P-256")


@pytest.mark.parametrize("kty", [None, ""])
def test_missing_family(kty):
    with pytest.raises(MissingFamily):
        validate_parameters(kty, size="2048")


@pytest.mark.parametrize("kty", ["rsa", "ec", "OCT", "DSA", "x"])
def test_unknown_family(kty):
    with pytest.raises(UnknownFamily):
        validate_parameters(kty, size="2048")


@pytest.mark.parametrize("size", [None, ""])
def test_missing_size(size):
    with pytest.raises(MissingSize):
        validate_parameters("RSA", size=size)
    with pytest.raises(MissingSize):
        validate_parameters("oct", size=size)


@pytest.mark.parametrize(
    "size",
    ["abc", "20 48", "2048.0", "0", "-8", "0x", "2_048", "+2048", "\u0662\u0660\u0664\u0668", "0x_100"],
)
def test_malformed_size_is_invalid_size(size):
    with pytest.raises(InvalidSize):
        validate_parameters("RSA", size=size)


def test_size_parsing_accepts_decimal_and_hex():
    assert validate_parameters("RSA", size="2048").size == 2048
    assert validate_parameters("oct", size=" 256 ").size == 256
    assert validate_parameters("oct", size="0x100").size == 256


def test_missing_curve():
    with pytest.raises(MissingCurve):
        validate_parameters("EC")
    with pytest.raises(MissingCurve):
        validate_parameters("OKP", crv="")


def test_usage_mapping():
    assert validate_parameters("oct", size="128", use="sig").use is KeyUse.SIGNATURE
    assert validate_parameters("oct", size="128", use="enc").use is KeyUse.ENCRYPTION
    assert validate_parameters("oct", size="128").use is None
    assert validate_parameters("oct", size="128", use="").use is None


@pytest.mark.parametrize("use", ["signature", "SIG", "verify", "x"])
def test_invalid_usage(use):
    with pytest.raises(InvalidUsage):
        validate_parameters("EC", crv="P-256", use=use)


def test_precedence_first_violation_wins():
    # family before size
    with pytest.raises(UnknownFamily):
        validate_parameters("nope", size="7", use="bad")
    # size before usage
    with pytest.raises(InvalidSize):
        validate_parameters("RSA", size="7", use="bad")
    # curve before usage
    with pytest.raises(MissingCurve):
        validate_parameters("EC", use="bad")


def test_alg_accepted_verbatim_regardless_of_use():
    params = validate_parameters("EC", crv="P-256", use="enc", alg="RS256")
    assert params.alg == "RS256"
    assert validate_parameters("oct", size="64", alg="whatever-label").alg == "whatever-label"


def test_irrelevant_options_dropped():
    params = validate_parameters("EC", size="2048", crv="P-384")
    assert params.size is None
    params = validate_parameters("RSA", size="2048", crv="P-384")
    assert params.curve is None


def test_kid_options_carried():
    params = validate_parameters("oct", size="128", kid="my-key", no_kid=True)
    assert params.kid == "my-key"
    assert params.no_kid is True
    assert validate_parameters("oct", size="128", kid="").kid is None


def test_parameters_are_immutable():
    params = validate_parameters("oct", size="128")
    with pytest.raises(Exception):
        params.size = 256


def test_all_validation_errors_share_base():
    with pytest.raises(KeyValidationError):
        validate_parameters("EC", crv="P-999")


@pytest.mark.parametrize("size", [str(2**31), str(2**66), hex(2**40), "9" * 5000])
def test_size_beyond_32_bit_range_rejected(size):
    for kty in ("RSA", "oct"):
        with pytest.raises(InvalidSize):
            validate_parameters(kty, size=size)


def test_size_accepts_octal_and_binary_prefixes():
    assert validate_parameters("oct", size="0o400").size == 256
    assert validate_parameters("oct", size="0b100000000").size == 256
