from __future__ import annotations

import logging

from .common import days_until, iso_from_epoch
from .config import CheckConfig
from .errors import CollaboratorError
from .keyring import KeyringAccessor
from .status import CheckResult, State

logger = logging.getLogger(__name__)


def _unknown(e: Exception) -> CheckResult:
    return CheckResult(State.UNKNOWN, str(e))


def evaluate(config: CheckConfig, keyring: KeyringAccessor, now: float) -> CheckResult:
    """
    Decide the health of ``config.key_id``.

    Steps run in a fixed order and the first one that reaches a verdict wins:
    existence, optional refresh, revocation, then each primary key's expiry in
    the order gpg lists them. A key id that matches several primary keys only
    reports the first problem found.
    """
    key_id = config.key_id

    # gpg --refresh-keys does not fail cleanly on keys missing locally.
    try:
        keyring.exists(key_id)
    except CollaboratorError as e:
        logger.debug("key %s not found: %s", key_id, e)
        return _unknown(e)

    if config.use_refresh:
        try:
            keyring.refresh(key_id)
        except CollaboratorError as e:
            logger.debug("refresh of %s failed: %s", key_id, e)
            return _unknown(e)

    try:
        revoked = keyring.is_revoked(key_id)
    except CollaboratorError as e:
        return _unknown(e)
    if revoked:
        return CheckResult(State.CRITICAL, f"key {key_id} has been revoked")

    try:
        records = keyring.list_expiry(key_id)
    except CollaboratorError as e:
        return _unknown(e)

    for record in records:
        if record.expires_at is None:
            logger.debug("key %s (%s) never expires", key_id, record.key_id)
            continue
        if record.expires_at <= now:
            return CheckResult(
                State.CRITICAL,
                f"key {key_id} expired on {iso_from_epoch(record.expires_at)}",
            )
        if config.warning_threshold is not None and config.warning_threshold > record.expires_at:
            days = days_until(record.expires_at, now)
            return CheckResult(
                State.WARNING,
                f"key {key_id} expires in {days} days ({iso_from_epoch(record.expires_at)})",
            )

    return CheckResult(State.OK, f"key {key_id} is valid")
