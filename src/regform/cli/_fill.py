"""``regform check`` / ``regform submit`` — drive a form from CLI arguments.

Each given field is set (and so touched) in a fixed order; the report
shows the errors the user would see at that point. ``submit`` exits 0
only when the server accepted the registration.
"""

import argparse
import asyncio
import dataclasses
import logging
import sys

from regform.cli._report import render_report
from regform.config import FormConfig
from regform.errors import ConfigurationError
from regform.form import RegistrationForm
from regform.status import Succeeded


def load_config(args: argparse.Namespace) -> FormConfig:
    """Environment config with command-line overrides applied."""
    config = FormConfig.from_env()
    overrides: dict[str, str] = {}
    if getattr(args, "endpoint", None):
        overrides["endpoint"] = args.endpoint
    if getattr(args, "log_level", None):
        overrides["log_level"] = args.log_level
    if overrides:
        config = dataclasses.replace(config, **overrides)
    return config


def build_form(config: FormConfig) -> RegistrationForm:
    """Create the form the commands operate on."""
    return RegistrationForm(config)


def _apply_args(form: RegistrationForm, args: argparse.Namespace) -> None:
    if args.username is not None:
        form.set_field_value("username", args.username)
    if args.language is not None:
        form.set_field_value("favLanguage", args.language)
    if args.food is not None:
        form.set_field_value("favFood", args.food)
    if args.agree:
        form.set_field_value("agreement", True)


async def _check(config: FormConfig, args: argparse.Namespace) -> bool:
    async with build_form(config) as form:
        _apply_args(form, args)
        await form.settle()
        print(render_report(form.snapshot, show_all=args.show_all))
        return form.snapshot.is_valid


async def _submit(config: FormConfig, args: argparse.Namespace) -> bool:
    async with build_form(config) as form:
        _apply_args(form, args)
        await form.settle()
        if not form.snapshot.is_valid:
            print(render_report(form.snapshot, show_all=args.show_all))
            return False
        status = await form.submit()
        await form.settle()
        print(render_report(form.snapshot, show_all=args.show_all))
        return isinstance(status, Succeeded)


def _configure(args: argparse.Namespace) -> FormConfig:
    try:
        config = load_config(args)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(2) from exc
    logging.basicConfig(
        level=config.logging_level,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return config


def run_check(args: argparse.Namespace) -> None:
    """Validate the given fields. Exits 1 if the form is not valid."""
    config = _configure(args)
    if not asyncio.run(_check(config, args)):
        raise SystemExit(1)


def run_submit(args: argparse.Namespace) -> None:
    """Validate and submit the given fields. Exits 1 unless registered."""
    config = _configure(args)
    if not asyncio.run(_submit(config, args)):
        raise SystemExit(1)
