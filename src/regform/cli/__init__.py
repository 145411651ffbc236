"""Regform CLI — fill in the registration form from the terminal.

Entry point registered as ``regform`` in ``pyproject.toml``::

    [project.scripts]
    regform = "regform.cli:main"
"""

import argparse
import sys


def _add_field_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--username", default=None, help="Username (3-20 characters)")
    parser.add_argument("--language", default=None, help="Favorite language (javascript or rust)")
    parser.add_argument("--food", default=None, help="Favorite food (pizza, spaghetti or broccoli)")
    parser.add_argument("--agree", action="store_true", help="Accept the terms")
    parser.add_argument(
        "--show-all",
        action="store_true",
        help="Report errors for every field, not just the ones given",
    )


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``regform`` command."""
    parser = argparse.ArgumentParser(
        prog="regform",
        description="Regform — validate and submit a registration.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (overrides REGFORM_LOG_LEVEL)",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- regform check ----------------------------------------------------
    check_parser = subparsers.add_parser("check", help="Validate without submitting")
    _add_field_arguments(check_parser)

    # -- regform submit ---------------------------------------------------
    submit_parser = subparsers.add_parser("submit", help="Validate and submit")
    _add_field_arguments(submit_parser)
    submit_parser.add_argument(
        "--endpoint",
        default=None,
        help="Registration URL (overrides REGFORM_ENDPOINT)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from regform.cli._fill import run_check, run_submit

    if args.command == "check":
        run_check(args)
    elif args.command == "submit":
        run_submit(args)
