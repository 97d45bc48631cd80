from __future__ import annotations

import pathlib
from dataclasses import dataclass
from typing import Optional

from .common import SECONDS_PER_DAY
from .errors import ValidationError
from .path_utils import validate_homedir


@dataclass(frozen=True)
class CheckConfig:
    key_id: str
    warning_days: Optional[int] = None
    warning_threshold: Optional[int] = None
    use_refresh: bool = True
    homedir: Optional[pathlib.Path] = None


def parse_warning_days(raw: Optional[str | int]) -> Optional[int]:
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise ValidationError(f"-w expects a number of days, got {raw!r}")
    if isinstance(raw, int):
        days = raw
    else:
        text = raw.strip()
        if not text:
            raise ValidationError("-w requires a number of days")
        try:
            days = int(text, 10)
        except ValueError:
            raise ValidationError(f"-w expects an integer number of days, got {raw!r}") from None
    if days < 0:
        raise ValidationError(f"-w must be zero or a positive number of days, got {days}")
    return days


def build_config(
    key_id: Optional[str],
    warning_days: Optional[str | int] = None,
    use_refresh: bool = True,
    homedir: Optional[str | pathlib.Path] = None,
    *,
    now: float,
) -> CheckConfig:
    """
    Validate invocation parameters into a CheckConfig.

    The warning threshold is turned into an absolute timestamp here, once,
    from the invocation's ``now``.
    """
    if key_id is None or not key_id.strip():
        raise ValidationError("a key id is required")

    days = parse_warning_days(warning_days)
    # Whole seconds keep the arithmetic exact for any -w value.
    threshold = int(now) + days * SECONDS_PER_DAY if days is not None else None
    home = validate_homedir(homedir) if homedir is not None else None

    return CheckConfig(
        key_id=key_id.strip(),
        warning_days=days,
        warning_threshold=threshold,
        use_refresh=use_refresh,
        homedir=home,
    )
