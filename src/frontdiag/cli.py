"""
frontdiag Command-Line Interface.

Developer tooling for the diagnostic subsystem.

Usage:
    frontdiag normalize --token eol                 # Show the normalized diagnostic
    frontdiag normalize --prefix "unexpected " --suffix " here" --token do
    frontdiag rules                                 # List the normalization rules
    frontdiag decode "{sigil,1,114,[<<\"a\">>],[],nil}"
    frontdiag warn "unused variable" --file lib/a.ex --line 3
"""

import argparse
import logging
import sys
from typing import Optional

from frontdiag import __version__
from frontdiag.compiler.normalizer import RULES, SYNTAX_ERROR_BEFORE, select_rule
from frontdiag.compiler.raiser import format_diagnostic_error, parse_error
from frontdiag.compiler.reporter import warn, warn_message
from frontdiag.compiler.term_decoder import decode_structured_token
from frontdiag.utils.console import set_ansi_enabled
from frontdiag.utils.errors import DiagnosticError, TermDecodeError

logger = logging.getLogger("frontdiag")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="frontdiag",
        description="Diagnostic reporting tools for the compiler front-end",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    color = parser.add_mutually_exclusive_group()
    color.add_argument(
        "--color",
        dest="color",
        action="store_true",
        default=None,
        help="Force ANSI colors on the diagnostic stream",
    )
    color.add_argument(
        "--no-color",
        dest="color",
        action="store_false",
        default=None,
        help="Disable ANSI colors on the diagnostic stream",
    )
    parser.add_argument(
        "--log-level",
        choices=["debug", "info", "warning", "error"],
        default="warning",
        help="Logging level (default: warning)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    normalize_parser = subparsers.add_parser(
        "normalize", help="Normalize a raw parser fragment and print the diagnostic"
    )
    normalize_parser.add_argument(
        "--prefix",
        default=SYNTAX_ERROR_BEFORE,
        help=f"Error prefix (default: {SYNTAX_ERROR_BEFORE!r})",
    )
    normalize_parser.add_argument(
        "--suffix",
        default=None,
        help="Error suffix; makes the prefix a (prefix, suffix) pair",
    )
    normalize_parser.add_argument("--token", default="", help="Offending token text")
    normalize_parser.add_argument("--file", default="nofile", help="Source file")
    normalize_parser.add_argument("--line", type=int, default=0, help="Source line")
    normalize_parser.add_argument(
        "--traceback", action="store_true", help="Also print the trimmed traceback"
    )
    normalize_parser.set_defaults(func=cmd_normalize)

    rules_parser = subparsers.add_parser("rules", help="List the normalization rules in order")
    rules_parser.set_defaults(func=cmd_rules)

    decode_parser = subparsers.add_parser("decode", help="Decode a structured token")
    decode_parser.add_argument("text", help="Serialized token text")
    decode_parser.set_defaults(func=cmd_decode)

    warn_parser = subparsers.add_parser("warn", help="Emit a warning through the reporter")
    warn_parser.add_argument("text", help="Warning text")
    warn_parser.add_argument("--file", default=None, help="Source file")
    warn_parser.add_argument("--line", type=int, default=0, help="Source line")
    warn_parser.set_defaults(func=cmd_warn)

    return parser


def _fragment(args: argparse.Namespace):
    if args.suffix is not None:
        return (args.prefix, args.suffix)
    return args.prefix


def cmd_normalize(args: argparse.Namespace) -> int:
    """Run a fragment through parse_error and print what the boundary would."""
    prefix = _fragment(args)
    try:
        rule = select_rule(prefix, args.token)
        logger.info("Fragment matched rule %s", rule.name)
        parse_error(args.line, args.file, prefix, args.token)
    except DiagnosticError as e:
        print(format_diagnostic_error(e, with_traceback=args.traceback))
        return 1
    except TermDecodeError as e:
        print(f"Internal error: {e}", file=sys.stderr)
        return 2
    return 0


def cmd_rules(args: argparse.Namespace) -> int:  # noqa: ARG001
    """Print the rule table."""
    for index, rule in enumerate(RULES, start=1):
        print(f"{index:2}. {rule.name:<22} {rule.kind.value}")
    return 0


def cmd_decode(args: argparse.Namespace) -> int:
    """Print a decoded structured token."""
    try:
        print(repr(decode_structured_token(args.text)))
    except TermDecodeError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


def cmd_warn(args: argparse.Namespace) -> int:
    """Emit a warning."""
    if args.file is None:
        warn_message(args.text)
    else:
        warn(args.line, args.file, args.text)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    if args.color is not None:
        set_ansi_enabled(args.color)

    return args.func(args)


if __name__ == "__main__":
    sys.exit(main())
