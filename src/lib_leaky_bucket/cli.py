"""Click command line for inspecting and replaying admission decisions.

Purpose
-------
Offer ``lib_leaky_bucket`` / ``python -m lib_leaky_bucket`` so operators can
print the package banner and replay a recorded request sequence through the
limiter without writing code.

Contents
--------
* :func:`cli` - root group with traceback and ``.env`` toggles.
* ``info`` / ``replay`` subcommands.
* :func:`main` - wraps :func:`lib_cli_exit_tools.run_cli` and restores the
  traceback preferences afterwards.

System Role
-----------
Presentation layer only. ``replay`` builds a private store and feeds it through
the same :func:`create_admit_request` use case the runtime façade uses.
"""

from __future__ import annotations

import math
import os
from typing import Sequence

import click
import lib_cli_exit_tools
from click.core import ParameterSource

from . import __init__conf__, summary_info
from . import config as leaky_config
from .adapters import LockedLimiterStore, MonotonicClock, RichConsoleReporter, ShardedLimiterStore
from .application.use_cases import create_admit_request
from .domain import InvalidConfiguration, create

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def _parse_request(token: str) -> tuple[str, float]:
    """Split ``IDENTITY@TIMESTAMP`` into its parts.

    Examples
    --------
    >>> _parse_request("user@example.com@2.5")
    ('user@example.com', 2.5)
    """

    identity, sep, stamp = token.rpartition("@")
    if not sep or not identity:
        raise click.BadParameter(f"expected IDENTITY@TIMESTAMP, got {token!r}", param_hint="REQUESTS")
    try:
        timestamp = float(stamp)
    except ValueError as exc:
        raise click.BadParameter(f"timestamp must be a number, got {stamp!r}", param_hint="REQUESTS") from exc
    if not math.isfinite(timestamp):
        raise click.BadParameter(f"timestamp must be finite, got {stamp!r}", param_hint="REQUESTS")
    return identity, timestamp


@click.group(invoke_without_command=True, context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(version=__init__conf__.version, prog_name=__init__conf__.shell_command, message="%(version)s")
@click.option(
    "--traceback/--no-traceback",
    default=False,
    help="Show full Python tracebacks on errors.",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=False,
    help=f"Load environment variables from the nearest .env (also enabled by {leaky_config.DOTENV_ENV_VAR}=1).",
)
@click.pass_context
def cli(ctx: click.Context, traceback: bool, use_dotenv: bool) -> None:
    """Leaky-bucket admission control toolbox."""

    explicit: bool | None = None
    if ctx.get_parameter_source("use_dotenv") is not ParameterSource.DEFAULT:
        explicit = use_dotenv
    if leaky_config.should_use_dotenv(explicit=explicit, env_value=os.getenv(leaky_config.DOTENV_ENV_VAR)):
        leaky_config.enable_dotenv()

    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback

    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print package metadata."""

    click.echo(summary_info(), nl=False)


@cli.command("replay", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option("--capacity", type=int, default=None, help="Bucket capacity (default from LEAKY_BUCKET_LIMIT or 10).")
@click.option("--leak-rate", type=float, default=None, help="Units drained per time unit (default from LEAKY_BUCKET_LIMIT or 1.0).")
@click.option("--sharded", is_flag=True, help="Use one lock per identity instead of a single lock.")
@click.option("--no-color", is_flag=True, help="Disable coloured output.")
@click.argument("requests", nargs=-1, required=True, metavar="IDENTITY@TIMESTAMP...")
def cli_replay(capacity: int | None, leak_rate: float | None, sharded: bool, no_color: bool, requests: tuple[str, ...]) -> None:
    """Feed IDENTITY@TIMESTAMP requests through a fresh limiter and print each decision."""

    parsed = [_parse_request(token) for token in requests]
    try:
        resolved_capacity, resolved_rate = leaky_config.resolve_limit(capacity, leak_rate)
        initial = create(resolved_capacity, resolved_rate)
    except InvalidConfiguration as exc:
        raise click.UsageError(str(exc)) from exc

    store = ShardedLimiterStore(initial) if sharded else LockedLimiterStore(initial)
    reporter = RichConsoleReporter(no_color=no_color)
    admit_request = create_admit_request(store=store, clock=MonotonicClock(), reporter=reporter)

    decisions = [admit_request(identity, timestamp) for identity, timestamp in parsed]
    reporter.render_buckets(store.snapshot())
    allowed = sum(1 for decision in decisions if decision.allowed)
    click.echo(f"{allowed} allowed, {len(decisions) - allowed} denied")


def main(argv: Sequence[str] | None = None, *, restore_traceback: bool = True) -> int:
    """Run the CLI through :mod:`lib_cli_exit_tools` and return the exit code.

    Parameters
    ----------
    argv:
        Optional argument list (defaults to ``sys.argv[1:]``).
    restore_traceback:
        Reset ``lib_cli_exit_tools.config`` traceback flags to their previous
        values once the command finished.
    """

    previous_traceback = lib_cli_exit_tools.config.traceback
    previous_force_color = lib_cli_exit_tools.config.traceback_force_color
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main"]
