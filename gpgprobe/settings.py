import logging
import os
from dataclasses import dataclass, field

_TRUTHY = ("1", "true", "yes")


@dataclass(frozen=True)
class Settings:
    LOG_LEVEL: str = field(default="WARNING")
    LOG_JSON: bool = field(default=False)
    GPG_BINARY: str = field(default="gpg")

    @staticmethod
    def from_env() -> "Settings":
        log_level = os.getenv("GPGPROBE_LOG_LEVEL", "WARNING").upper()
        if not isinstance(logging.getLevelName(log_level), int):
            log_level = "WARNING"
        if os.getenv("GPGPROBE_DEBUG", "false").lower() in _TRUTHY:
            log_level = "DEBUG"
        log_json = os.getenv("GPGPROBE_LOG_JSON", "false").lower() in _TRUTHY
        binary = os.getenv("GPGPROBE_GPG_BINARY", "").strip() or "gpg"
        return Settings(LOG_LEVEL=log_level, LOG_JSON=log_json, GPG_BINARY=binary)
