import datetime as dt

SECONDS_PER_DAY = 86400


def iso_utc(d: dt.datetime) -> str:
    if d.tzinfo is None:
        d = d.replace(tzinfo=dt.timezone.utc)
    return d.astimezone(dt.timezone.utc).isoformat().replace("+00:00", "Z")


def iso_from_epoch(ts: int) -> str:
    return iso_utc(dt.datetime.fromtimestamp(ts, tz=dt.timezone.utc))


def days_until(ts: float, now: float) -> int:
    return int((ts - now) // SECONDS_PER_DAY)
