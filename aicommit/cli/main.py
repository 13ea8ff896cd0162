"""CLI Main Entry Point"""

import os
import sys
from typing import Optional, Sequence

from aicommit import get_version
from aicommit.cli.args import UsageError, format_help, parse_args
from aicommit.cli.prompt import edit_message, prompt_user
from aicommit.config import Config, build_config, load_rc
from aicommit.git import get_staged_diff, run_commit
from aicommit.llm import generate_commit_message
from aicommit.output import Spinner, print_error
from aicommit.workflow import Collaborators, CommitFlow

EXIT_CANCELLED = 130


def _generate_with_spinner(diff: str, config: Config) -> str:
    """Run one generation behind the terminal spinner.

    Debug lines share stderr with the spinner, so debug runs go without it.
    """
    if config.debug:
        return generate_commit_message(diff, config)
    with Spinner(f"Generating with {config.model}..."):
        return generate_commit_message(diff, config)


def default_collaborators() -> Collaborators:
    return Collaborators(
        get_diff=get_staged_diff,
        generate=_generate_with_spinner,
        ask=prompt_user,
        edit=edit_message,
        commit=run_commit,
    )


def run(argv: Optional[Sequence[str]] = None, collaborators: Optional[Collaborators] = None) -> int:
    """Parse arguments, resolve config and run the commit flow. Returns the exit code."""
    try:
        args = parse_args(argv)
    except UsageError as e:
        print_error(f"Error: {e}")
        return 1

    if args.help:
        print(format_help())
        return 0
    if args.version:
        print(get_version())
        return 0

    config = build_config(args.model, os.environ, load_rc())
    flow = CommitFlow(config, collaborators or default_collaborators())
    try:
        return flow.run()
    except KeyboardInterrupt:
        print(file=sys.stderr)
        print_error("Cancelled.")
        return EXIT_CANCELLED


def main() -> None:
    sys.exit(run())
