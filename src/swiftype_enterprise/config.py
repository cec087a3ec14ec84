"""Client configuration: an immutable settings object plus env/.env loading."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Dict, Optional

from dotenv import dotenv_values

from .errors import ConfigurationError
from .logging import get_logger

log = get_logger("config")

DEFAULT_ENDPOINT = "https://api.swiftype.com/api/v1/"
DEFAULT_TIMEOUT = 15.0

ENV_ACCESS_TOKEN = "SWIFTYPE_ENTERPRISE_ACCESS_TOKEN"
ENV_ENDPOINT = "SWIFTYPE_ENTERPRISE_ENDPOINT"
ENV_OPEN_TIMEOUT = "SWIFTYPE_ENTERPRISE_OPEN_TIMEOUT"
ENV_OVERALL_TIMEOUT = "SWIFTYPE_ENTERPRISE_OVERALL_TIMEOUT"


@dataclass(frozen=True)
class Configuration:
    """Connection settings shared by every request a client makes.

    ``open_timeout`` bounds opening the connection, ``overall_timeout``
    bounds waiting for the response. Both are in seconds.
    """

    access_token: Optional[str] = None
    endpoint: str = DEFAULT_ENDPOINT
    open_timeout: float = DEFAULT_TIMEOUT
    overall_timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        for name in ("open_timeout", "overall_timeout"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or value <= 0:
                raise ConfigurationError(f"{name} must be a positive number of seconds, got {value!r}")

    def with_overrides(self, **overrides: object) -> "Configuration":
        """Return a copy where every non-None override replaces the current value."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if not changes:
            return self
        return replace(self, **changes)


def _find_upwards(start_dir: str, filename: str) -> Optional[str]:
    """Return first matching file found when walking up from start_dir."""
    d = os.path.abspath(start_dir or ".")
    while True:
        candidate = os.path.join(d, filename)
        if os.path.isfile(candidate):
            return candidate
        parent = os.path.dirname(d)
        if parent == d:
            return None
        d = parent


def _read_dotenv(dotenv_dir: str) -> Dict[str, str]:
    path = _find_upwards(dotenv_dir, ".env")
    if not path:
        log.debug(f"No .env found starting from: {os.path.abspath(dotenv_dir)}")
        return {}
    values = {k: v for k, v in dotenv_values(path).items() if v is not None}
    log.debug(f"Loaded {len(values)} key(s) from .env at {path}")
    return values


def _parse_timeout(name: str, raw: Optional[str]) -> float:
    if raw is None or not raw.strip():
        return DEFAULT_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        log.warning(f"{name}={raw!r} is not a number; using {DEFAULT_TIMEOUT}s")
        return DEFAULT_TIMEOUT
    if value <= 0:
        log.warning(f"{name}={raw!r} must be positive; using {DEFAULT_TIMEOUT}s")
        return DEFAULT_TIMEOUT
    return value


def load_configuration(dotenv_dir: str = ".") -> Configuration:
    """Build the default Configuration from the environment and a .env file.

    Process environment wins over values found in .env.
    """
    env = _read_dotenv(dotenv_dir)

    def _get(name: str) -> Optional[str]:
        v = os.environ.get(name)
        if v:
            return v.strip()
        v = env.get(name)
        return v.strip() if v else None

    token = _get(ENV_ACCESS_TOKEN)
    if token:
        log.info(f"Using {ENV_ACCESS_TOKEN} from environment or .env")
    else:
        log.debug(f"{ENV_ACCESS_TOKEN} not found in env or .env")

    return Configuration(
        access_token=token,
        endpoint=_get(ENV_ENDPOINT) or DEFAULT_ENDPOINT,
        open_timeout=_parse_timeout(ENV_OPEN_TIMEOUT, _get(ENV_OPEN_TIMEOUT)),
        overall_timeout=_parse_timeout(ENV_OVERALL_TIMEOUT, _get(ENV_OVERALL_TIMEOUT)),
    )
