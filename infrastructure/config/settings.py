from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

_TRUTHY = {"1", "true", "yes", "on"}


def _flag(value: Optional[str]) -> bool:
    return bool(value) and value.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class Settings:
    """Process-wide settings for services, read from the environment."""

    root: Path
    log_level: str = "INFO"
    logger_stdout: bool = False

    @property
    def services_config_dir(self) -> Path:
        return self.root / "config" / "services"

    @property
    def services_log_dir(self) -> Path:
        return self.root / "log" / "services"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        if environ is None:
            # .env values never override variables already set
            load_dotenv(override=False)
            environ = os.environ
        root = environ.get("SERVICE_ROOT") or os.getcwd()
        return cls(
            root=Path(root),
            log_level=(environ.get("LOG_LEVEL") or "INFO").upper(),
            logger_stdout=_flag(environ.get("SERVICE_LOGGER_STDOUT")),
        )
