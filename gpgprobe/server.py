from typing import Annotated, Optional

from fastmcp import FastMCP
from pydantic import Field

from .mcp_contracts import CheckReport
from .probe import check_key
from .settings import Settings

mcp = FastMCP(
    name="GpgProbe",
    instructions=(
        "Purpose: check whether a GPG public key in a local keyring is still usable "
        "and report it the way a monitoring plugin would (OK, WARNING, CRITICAL, UNKNOWN).\n\n"
        "Use me when: you need to know if a key is revoked, expired, or about to expire.\n"
        "Do NOT use me for: importing, exporting, signing, or generating keys.\n\n"
        "How to call:\n"
        "- `check_gpg_key(key_id=..., warning_days=?, refresh=?, gnupg_homedir=?)`.\n"
        "  `refresh=true` asks gpg to refresh the key from its configured keyservers first.\n\n"
        "Output: a JSON object with `key_id`, `state`, `code` (0-3), `message` and `line`."
    ),
)


@mcp.tool(description="Liveness check; always returns 'pong'.")
def ping() -> str:
    return "pong"


@mcp.tool(
    description=(
        "Check the expiration and revocation state of a GPG public key and return "
        "a monitoring-style status report."
    ),
    tags={"gpgprobe", "gpg", "expiry", "revocation"},
    annotations={
        "title": "Check GPG key",
        "readOnlyHint": False,
        "idempotentHint": True,
        "openWorldHint": True,
    },
)
def check_gpg_key(
    key_id: Annotated[str, Field(description="Key id or fingerprint, as accepted by gpg.")],
    warning_days: Annotated[
        Optional[int],
        Field(description="Report WARNING when the key expires within this many days. Leave null for none."),
    ] = None,
    refresh: Annotated[
        bool,
        Field(description="Refresh the key from the configured keyservers before checking."),
    ] = True,
    gnupg_homedir: Annotated[
        Optional[str],
        Field(description="GnuPG home directory. Leave null to use gpg's default."),
    ] = None,
) -> dict:
    """
    Examples:

    - Expiry and revocation only, no keyserver access:
      { "key_id": "0x1234ABCD", "refresh": false }

    - Warn 30 days ahead:
      { "key_id": "0x1234ABCD", "warning_days": 30 }
    """
    result = check_key(
        key_id,
        warning_days=warning_days,
        use_refresh=refresh,
        homedir=gnupg_homedir,
        settings=Settings.from_env(),
    )
    return CheckReport.from_result(key_id, result).model_dump()


if __name__ == "__main__":
    mcp.run()
