from __future__ import annotations

import logging
import os
import time
from typing import Callable, Optional

from .config import build_config
from .errors import ValidationError
from .evaluator import evaluate
from .keyring import GpgKeyring, KeyringAccessor
from .settings import Settings
from .status import CheckResult, State

logger = logging.getLogger(__name__)

KeyringFactory = Callable[[Optional[os.PathLike[str]], str], KeyringAccessor]


def _default_keyring(homedir: Optional[os.PathLike[str]], binary: str) -> KeyringAccessor:
    return GpgKeyring(homedir=homedir, binary=binary)


def check_key(
    key_id: Optional[str],
    warning_days: Optional[str | int] = None,
    use_refresh: bool = True,
    homedir: Optional[str | os.PathLike[str]] = None,
    *,
    settings: Optional[Settings] = None,
    keyring_factory: KeyringFactory = _default_keyring,
    now_fn: Callable[[], float] = time.time,
) -> CheckResult:
    """Run one check end to end. Never raises for bad input or gpg failures."""
    settings = settings or Settings.from_env()
    now = now_fn()
    try:
        config = build_config(key_id, warning_days, use_refresh, homedir, now=now)
    except ValidationError as e:
        logger.debug("invalid invocation: %s", e)
        return CheckResult(State.UNKNOWN, str(e))

    keyring = keyring_factory(config.homedir, settings.GPG_BINARY)
    result = evaluate(config, keyring, now)
    logger.debug("check of %s finished: %s", config.key_id, result.state.name)
    return result
