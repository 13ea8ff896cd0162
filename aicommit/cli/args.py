"""CLI Argument Parsing"""

import argparse
from dataclasses import dataclass
from typing import Optional, Sequence

import argcomplete


class UsageError(Exception):
    """Raised for bad command line arguments."""
    pass


@dataclass
class CliArgs:
    help: bool = False
    version: bool = False
    model: Optional[str] = None


class _Parser(argparse.ArgumentParser):
    """ArgumentParser that raises instead of printing usage and exiting."""

    def error(self, message):
        raise UsageError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        prog='aicommit',
        description='Generate a commit message for the staged changes with Ollama, then commit it',
        epilog='Set OLLAMA_API_KEY to use Ollama Cloud instead of a local server. DEBUG=1 logs request and response bodies.',
        add_help=False,
        allow_abbrev=False,
    )

    parser.add_argument('-h', '--help', action='store_true', help='Show this help and exit')
    parser.add_argument('-v', '--version', action='store_true', help='Show version and exit')
    parser.add_argument('-m', '--model', type=str, metavar='MODEL', help='Model name (overrides the local or cloud default)')

    argcomplete.autocomplete(parser)
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> CliArgs:
    """Parse argv (defaults to sys.argv[1:]) into CliArgs.

    Raises:
        UsageError: unknown option, or --model without a model name
    """
    parser = build_parser()
    namespace, unknown = parser.parse_known_args(argv)
    if unknown:
        raise UsageError(f"Unknown option: {unknown[0]}")
    if namespace.model is not None and not namespace.model.strip():
        raise UsageError("--model requires a model name")
    return CliArgs(help=namespace.help, version=namespace.version, model=namespace.model)


def format_help() -> str:
    return build_parser().format_help()
