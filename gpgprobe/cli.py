"""Typer-based command line entry point for the GPG key check."""
from __future__ import annotations

import sys
from typing import List, Optional

import click
import typer

from .logging_conf import setup_logging
from .probe import check_key
from .settings import Settings
from .status import CheckResult, State, report

PROG_NAME = "check_gpg_key"

app = typer.Typer(
    add_completion=False,
    help="Report the expiration and revocation state of a GPG public key as a monitoring plugin.",
)


@app.command()
def check(
    key_id: str = typer.Argument(..., metavar="KEY_ID", help="Key id or fingerprint to check"),
    warning: Optional[str] = typer.Option(
        None, "-w", metavar="DAYS", help="Warn when the key expires within this many days"
    ),
    no_refresh: bool = typer.Option(False, "--no-refresh", help="Do not refresh the key from keyservers"),
    gnupg_homedir: Optional[str] = typer.Option(
        None, "--gnupg-homedir", metavar="PATH", help="GnuPG home directory to use"
    ),
) -> int:
    result = check_key(
        key_id,
        warning_days=warning,
        use_refresh=not no_refresh,
        homedir=gnupg_homedir,
        settings=Settings.from_env(),
    )
    return report(result)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the check and return its exit code; usage errors map to UNKNOWN."""
    setup_logging(Settings.from_env())
    command = typer.main.get_command(app)
    try:
        return command.main(args=argv, prog_name=PROG_NAME, standalone_mode=False)
    except click.ClickException as e:
        return report(CheckResult(State.UNKNOWN, e.format_message()))


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
