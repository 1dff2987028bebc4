#!/usr/bin/env python3
# This file is part of the orcrux project
#
# Copyright (c) 2019-2022 Manuel Barkhau (mbarkhau@gmail.com) - MIT License
# SPDX-License-Identifier: MIT

"""CLI/Imperative shell for orcrux."""

import logging
from typing import Tuple
from typing import Optional
from typing import Sequence
from typing import NamedTuple

import click

from . import api
from . import errors
from . import params
from . import shamir
from . import sss_random
from . import __version__

try:
    import pretty_traceback

    pretty_traceback.install(envvar='ENABLE_PRETTY_TRACEBACK')
except ImportError:
    pass  # no need to fail because of missing dev dependency


logger = logging.getLogger("orcrux.cli")


class LogConfig(NamedTuple):
    fmt: str
    lvl: int


LOG_FORMAT_DEFAULT = "%(levelname)-7s - %(message)s"

LOG_FORMAT_VERBOSE = "%(asctime)s.%(msecs)03d %(levelname)-7s %(name)-16s - %(message)s"


def _parse_logging_config(verbosity: int) -> LogConfig:
    if verbosity == 0:
        return LogConfig(LOG_FORMAT_DEFAULT, logging.WARNING)
    elif verbosity == 1:
        return LogConfig(LOG_FORMAT_VERBOSE, logging.INFO)
    else:
        assert verbosity >= 2
        return LogConfig(LOG_FORMAT_VERBOSE, logging.DEBUG)


_PREV_VERBOSITY: int = -1


def _configure_logging(verbosity: int = 0) -> None:
    # pylint: disable=global-statement
    global _PREV_VERBOSITY

    if verbosity <= _PREV_VERBOSITY:
        # allow function to be called multiple times
        return

    _PREV_VERBOSITY = verbosity

    # remove previous logging handlers
    for handler in list(logging.root.handlers):
        logging.root.removeHandler(handler)

    log_cfg = _parse_logging_config(verbosity)
    logging.basicConfig(level=log_cfg.lvl, format=log_cfg.fmt, datefmt="%Y-%m-%dT%H:%M:%S")


def echo(msg: str = "", nl: bool = True) -> bool:
    click.echo(msg, nl=nl)
    return True


DEFAULT_SCHEME = f"{params.DEFAULT_SSS_T}of{params.DEFAULT_SSS_N}"


_opt_scheme = click.option(
    '-s',
    '--scheme',
    'scheme_arg',
    type=str,
    default=DEFAULT_SCHEME,
    show_default=True,
    help="Threshold and total Number of shares (format: TofN)",
)


_opt_num_shares = click.option(
    '-n',
    '--num-shares',
    type=int,
    default=None,
    help="Total number of shares (overrides N of --scheme)",
)


_opt_threshold = click.option(
    '-t',
    '--threshold',
    type=int,
    default=None,
    help="Minimum number of shares to recompose (overrides T of --scheme)",
)


_opt_format = click.option(
    '-f',
    '--format',
    'fmt',
    type=str,
    default=params.DEFAULT_FORMAT,
    show_default=True,
    help="Encoding of the share payload (hex or base64)",
)


_opt_secret = click.option(
    '--secret',
    type=str,
    default=None,
    help="Secret to split (default: read from stdin)",
)


_opt_json = click.option(
    '--json',
    'json_output',
    type=bool,
    is_flag=True,
    default=False,
    help="Print a JSON response with 'error' and 'data' fields",
)


_opt_verbose = click.option(
    '-v',
    '--verbose',
    count=True,
    help="Control log level. -vv for debug level.",
)


@click.group(context_settings={'help_option_names': ["-h", "--help"]})
@_opt_verbose
def cli(verbose: int = 0) -> None:
    """CLI for orcrux, split and recompose secrets."""
    _configure_logging(verbose)


@cli.command()
@click.version_option(version=__version__)
def version() -> None:
    """Show version number."""
    echo(f"orcrux version: {__version__}")


def _read_stdin_secret() -> str:
    stdin = click.get_text_stream('stdin')
    if stdin.isatty():
        return click.prompt("Enter your secret", hide_input=True)
    else:
        return stdin.read()


@cli.command()
@_opt_scheme
@_opt_num_shares
@_opt_threshold
@_opt_format
@_opt_secret
@_opt_json
@_opt_verbose
def split(
    scheme_arg : str = DEFAULT_SCHEME,
    num_shares : Optional[int] = None,
    threshold  : Optional[int] = None,
    fmt        : str = params.DEFAULT_FORMAT,
    secret     : Optional[str] = None,
    json_output: bool = False,
    verbose    : int = 0,
) -> None:
    """Split a secret into shares."""
    _configure_logging(verbose)

    try:
        scheme = params.parse_scheme(scheme_arg)
    except ValueError as err:
        raise click.BadParameter(str(err), param_hint="--scheme")

    if num_shares is not None:
        scheme = scheme._replace(num_shares=num_shares)
    if threshold is not None:
        scheme = scheme._replace(threshold=threshold)

    if sss_random.is_debug_random():
        logger.warning(sss_random.DEBUG_WARN_MSG)

    secret_text = _read_stdin_secret() if secret is None else secret

    if json_output:
        echo(api.split_response(secret_text, scheme.num_shares, scheme.threshold, fmt))
        return

    try:
        shares = shamir.split(secret_text.encode('utf-8'), scheme.num_shares, scheme.threshold, fmt)
    except errors.SSSError as err:
        raise click.ClickException(str(err))

    echo(shares, nl=False)


def _read_share_lines(share_args: Sequence[str]) -> Tuple[str, ...]:
    if share_args:
        return tuple(share_args)

    stdin = click.get_text_stream('stdin')
    return tuple(stdin.read().splitlines())


@cli.command()
@click.argument('shares', nargs=-1)
@_opt_json
@_opt_verbose
def recompose(shares: Tuple[str, ...] = (), json_output: bool = False, verbose: int = 0) -> None:
    """Recover a secret from shares.

    Shares are taken from the arguments, or one per line from stdin.
    """
    _configure_logging(verbose)

    share_lines = _read_share_lines(shares)

    if json_output:
        echo(api.recompose_response(share_lines))
        return

    try:
        secret = shamir.recompose(share_lines)
    except errors.SSSError as err:
        raise click.ClickException(str(err))

    stdout = click.get_binary_stream('stdout')
    stdout.write(secret)
    stdout.flush()


if __name__ == '__main__':
    cli()
