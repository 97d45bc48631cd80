from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence

from .errors import CollaboratorError

logger = logging.getLogger(__name__)

# gpg --with-colons record types and field positions (0-based).
_PUB = "pub"
_REV = "rev"
_KEYID_FIELD = 4
_EXPIRES_FIELD = 6


@dataclass(frozen=True)
class KeyExpiryRecord:
    expires_at: Optional[int] = None
    key_id: Optional[str] = None


class KeyringAccessor(Protocol):
    def exists(self, key_id: str) -> None: ...

    def refresh(self, key_id: str) -> None: ...

    def is_revoked(self, key_id: str) -> bool: ...

    def list_expiry(self, key_id: str) -> Sequence[KeyExpiryRecord]: ...


def _fields(line: str) -> List[str]:
    return line.rstrip("\r").split(":")


def parse_expiry_records(text: str) -> List[KeyExpiryRecord]:
    """
    Pull one record per primary key out of a ``--with-colons`` key listing.

    Field 7 of a ``pub`` line holds the expiration as epoch seconds; it is
    empty for keys that never expire.
    """
    records: List[KeyExpiryRecord] = []
    for line in text.splitlines():
        fields = _fields(line)
        if fields[0] != _PUB:
            continue
        key_id = fields[_KEYID_FIELD] if len(fields) > _KEYID_FIELD else None
        raw = fields[_EXPIRES_FIELD].strip() if len(fields) > _EXPIRES_FIELD else ""
        if not raw:
            records.append(KeyExpiryRecord(expires_at=None, key_id=key_id or None))
            continue
        if not raw.isdigit():
            raise CollaboratorError(f"unparseable expiration field {raw!r} in gpg output: {line.strip()}")
        records.append(KeyExpiryRecord(expires_at=int(raw), key_id=key_id or None))
    return records


def _decode(raw: Optional[bytes]) -> str:
    # User ids are printed as stored, which is not always UTF-8.
    return (raw or b"").decode("utf-8", errors="replace")


def _one_line(text: str) -> str:
    return "; ".join(line.strip() for line in text.splitlines() if line.strip())


def has_revocation(text: str) -> bool:
    return any(_fields(line)[0] == _REV for line in text.splitlines())


class GpgKeyring:
    """KeyringAccessor backed by the gpg command line tool."""

    def __init__(self, homedir: Optional[str | os.PathLike[str]] = None, binary: str = "gpg") -> None:
        self._homedir = homedir
        self._binary = binary

    def _command(self, *args: str) -> List[str]:
        cmd = [self._binary, "--batch", "--no-tty", "--with-colons"]
        if self._homedir is not None:
            cmd += ["--homedir", str(self._homedir)]
        cmd += list(args)
        return cmd

    def _run(self, *args: str) -> str:
        cmd = self._command(*args)
        logger.debug("running %s", " ".join(cmd))
        try:
            proc = subprocess.run(cmd, capture_output=True, check=False)
        except OSError as e:
            raise CollaboratorError(f"could not run {self._binary}: {e}") from e
        if proc.returncode != 0:
            detail = _one_line(_decode(proc.stderr)) or f"exit status {proc.returncode}"
            raise CollaboratorError(f"{self._binary} {args[0]} failed: {detail}")
        return _decode(proc.stdout)

    def exists(self, key_id: str) -> None:
        self._run("--list-keys", "--", key_id)

    def refresh(self, key_id: str) -> None:
        self._run("--refresh-keys", "--", key_id)

    def is_revoked(self, key_id: str) -> bool:
        return has_revocation(self._run("--check-sigs", "--", key_id))

    def list_expiry(self, key_id: str) -> List[KeyExpiryRecord]:
        return parse_expiry_records(self._run("--fixed-list-mode", "--list-keys", "--", key_id))
