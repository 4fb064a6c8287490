"""mhs CLI — serve a directory, or canned responses, from the command line.

Entry point registered as ``mhs`` in ``pyproject.toml``::

    [project.scripts]
    mhs = "mhs.cli:main"
"""

import argparse
import sys

from mhs.config import DEFAULT_PORT, ServerConfig
from mhs.errors import ConfigurationError

USAGE = "mhs [options] [/request-path response-template]..."

PAIRS_MESSAGE = "Please specify pairs of paths and response templates"

EPILOG = """\
RESPONSE TEMPLATES
A response template can either be a status code, a path to an existing directory, or a file. It is assumed to be a file path if it is not a valid status code and does not exist as a directory.

EXAMPLES
Serve current directory on port 8080:
  mhs -p 8081
Serve current directory on port 8081:
  mhs -p 8081
Serve 200s from /ok and 500s from /error:
  mhs /ok 200 /error 500
Serve 200s from /status and the "/tmp" directory from /files:
  mhs /status 200 /files /tmp
"""


def port_number(value: str) -> int:
    """argparse type for ``-p``: an integer in 0..65535."""
    try:
        port = int(value)
    except ValueError:
        msg = f"invalid port {value!r}"
        raise argparse.ArgumentTypeError(msg) from None
    if not 0 <= port <= 65535:
        msg = f"port {port} is outside the range 0-65535"
        raise argparse.ArgumentTypeError(msg)
    return port


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mhs",
        usage=USAGE,
        description="Minimal HTTP(S) server for development and testing.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-p",
        dest="port",
        type=port_number,
        default=DEFAULT_PORT,
        metavar="int",
        help=f"port to serve on (default {DEFAULT_PORT})",
    )
    parser.add_argument(
        "-c",
        dest="cors",
        action="store_true",
        help="send CORS and cross-origin isolation headers",
    )
    parser.add_argument(
        "-s",
        dest="cert_path",
        default="",
        metavar="path",
        help="TLS certificate file (requires -k)",
    )
    parser.add_argument(
        "-k",
        dest="key_path",
        default="",
        metavar="path",
        help="TLS private key file (requires -s)",
    )
    parser.add_argument(
        "bindings",
        nargs="*",
        metavar="/request-path response-template",
        help=argparse.SUPPRESS,
    )
    return parser


def parse_config(argv: list[str] | None = None) -> ServerConfig:
    """Parse the command line into a validated ``ServerConfig``.

    Options may appear anywhere among the positional pairs. Exits with
    status 2 on usage errors and 1 on invalid configuration.
    """
    parser = build_parser()
    args = parser.parse_intermixed_args(argv)

    if len(args.bindings) % 2 != 0:
        print(PAIRS_MESSAGE)
        raise SystemExit(1)

    pairs = tuple(zip(args.bindings[::2], args.bindings[1::2], strict=True))
    config = ServerConfig(
        port=args.port,
        cors=args.cors,
        cert_path=args.cert_path,
        key_path=args.key_path,
        bindings=pairs,
    )
    try:
        config.validate()
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
    return config


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``mhs`` command."""
    config = parse_config(argv)

    from mhs.cli._run import serve

    serve(config)
