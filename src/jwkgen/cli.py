from __future__ import annotations

import argparse
import sys

from .keys.errors import JwkGenError, KeyValidationError
from .keys.model import EC_CURVES, OKP_CURVES, KeyFamily
from .keys.pipeline import run
from .keys.validate import validate_parameters
from .utils.logging import get_logger

log = get_logger()


class UsageError(Exception):
    pass


class _Parser(argparse.ArgumentParser):
    # argparse exits 2 on bad arguments; every failure here exits 1
    def error(self, message):
        raise UsageError(f"Failed to parse arguments: {message}")


def build_parser() -> _Parser:
    families = ", ".join(f.value for f in KeyFamily)
    p = _Parser(
        prog="jwkgen",
        usage="jwkgen -t <keyType> [options]",
        description="Generate JSON Web Keys and optionally add them to a JWK Set file",
    )
    p.add_argument("-t", "--type", dest="kty", help=f"Key Type, one of: {families}")
    p.add_argument(
        "-s", "--size", dest="size",
        help="Key Size in bits, required for RSA and oct key types. Must be an integer divisible by 8",
    )
    p.add_argument(
        "-c", "--curve", dest="crv",
        help=(
            f"Key Curve, required for EC or OKP key type. Must be one of {', '.join(EC_CURVES)} "
            f"for EC keys or one of {', '.join(OKP_CURVES)} for OKP keys."
        ),
    )
    p.add_argument("-u", "--use", dest="use", help="Usage, one of: enc, sig (optional)")
    p.add_argument("-a", "--alg", dest="alg", help="Algorithm (optional)")
    p.add_argument("-i", "--kid", dest="kid", help="Key ID (optional), one will be generated if not defined")
    p.add_argument("-I", "--no-generate-kid", dest="no_kid", action="store_true",
                   help="Don't generate a Key ID if none defined")
    p.add_argument("-p", "--public", dest="public", action="store_true", help="Display public key separately")
    p.add_argument("-S", "--keyset", dest="keyset", action="store_true", help="Wrap the generated key in a KeySet")
    p.add_argument(
        "-o", "--output", dest="output",
        help="Write output to file (will append to existing KeySet if -S is used), No Display of Key Material",
    )
    return p


def _fail(parser: argparse.ArgumentParser, message: str, show_usage: bool = True) -> int:
    print(message, file=sys.stderr)
    if show_usage:
        parser.print_help(sys.stderr)
    return 1


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except UsageError as e:
        return _fail(parser, str(e))

    try:
        params = validate_parameters(
            args.kty,
            size=args.size,
            crv=args.crv,
            use=args.use,
            alg=args.alg,
            kid=args.kid,
            no_kid=args.no_kid,
        )
        run(params, key_set_mode=args.keyset, public_display=args.public, output=args.output)
    except KeyValidationError as e:
        return _fail(parser, str(e))
    except JwkGenError as e:
        log.debug(f"{type(e).__name__}: {e!r}")
        return _fail(parser, str(e), show_usage=False)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
