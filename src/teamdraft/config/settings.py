"""Environment-driven runtime settings."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os


logger = logging.getLogger(__name__)

_ENFORCE_BALANCE_ENV = "TEAMDRAFT_ENFORCE_BALANCE"
_MAX_SESSIONS_ENV = "TEAMDRAFT_MAX_SESSIONS"
_RANK_PREFIX_ENV = "TEAMDRAFT_RANK_PREFIX"
_TEAM_NAME_FORMAT_ENV = "TEAMDRAFT_TEAM_NAME_FORMAT"

_MAX_SESSIONS_DEFAULT = 64
_RANK_PREFIX_DEFAULT = "rank"
_TEAM_NAME_FORMAT_DEFAULT = "Team {name}"


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    text = raw.strip().lower()
    if text in {"1", "true", "yes", "on"}:
        return True
    if text in {"0", "false", "no", "off", ""}:
        return False
    logger.warning("Invalid bool for %s: %s; using default %s", name, raw, default)
    return default


def _env_team_name_format(default: str) -> str:
    raw = os.getenv(_TEAM_NAME_FORMAT_ENV)
    if raw is None:
        return default
    if "{name}" not in raw:
        logger.warning("%s must contain '{name}': %s; using default", _TEAM_NAME_FORMAT_ENV, raw)
        return default
    return raw


@dataclass(frozen=True)
class Settings:
    enforce_category_balance: bool
    max_sessions: int
    rank_prefix: str
    team_name_format: str


def load_settings() -> Settings:
    """Read settings from the environment at call time."""

    return Settings(
        enforce_category_balance=_env_bool(_ENFORCE_BALANCE_ENV, False),
        max_sessions=_env_int(_MAX_SESSIONS_ENV, _MAX_SESSIONS_DEFAULT, min_value=1),
        rank_prefix=os.getenv(_RANK_PREFIX_ENV) or _RANK_PREFIX_DEFAULT,
        team_name_format=_env_team_name_format(_TEAM_NAME_FORMAT_DEFAULT),
    )
