import enum
from dataclasses import dataclass

import typer


class State(enum.IntEnum):
    """Plugin states and their exit codes, as monitoring frameworks expect them."""

    OK = 0
    WARNING = 1
    CRITICAL = 2
    UNKNOWN = 3
    # Reserved; no check in this package produces it.
    DEPENDENT = 4


@dataclass(frozen=True)
class CheckResult:
    state: State
    message: str

    @property
    def code(self) -> int:
        return int(self.state)

    def as_dict(self) -> dict:
        return {"state": self.state.name, "code": self.code, "message": self.message}


def render(result: CheckResult) -> str:
    return f"{result.state.name}: {result.message}"


def report(result: CheckResult) -> int:
    """Print the status line on stdout and return the exit code to use."""
    typer.echo(render(result))
    return result.code
