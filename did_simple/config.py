# did_simple/config.py
"""Environment-driven settings, read once at import."""

import logging
import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict

from .constants import ENV_PREFIX
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}
_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class Settings(BaseModel):
    """Process-wide settings for did-simple."""
    model_config = ConfigDict(frozen=True)

    verify_enabled: bool = True
    log_level: str = "INFO"


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Environment variable '{name}' must be a boolean, got '{raw}'.")


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Builds Settings from DID_SIMPLE_* environment variables.

    Args:
        environ: Mapping to read from. Defaults to os.environ.

    Raises:
        ConfigurationError: If a variable holds an unusable value.
    """
    env = os.environ if environ is None else environ

    verify_var = f"{ENV_PREFIX}VERIFY"
    level_var = f"{ENV_PREFIX}LOG_LEVEL"

    values = {}
    raw_verify = env.get(verify_var)
    if raw_verify is not None:
        values["verify_enabled"] = _parse_bool(verify_var, raw_verify)

    raw_level = env.get(level_var)
    if raw_level is not None:
        level = raw_level.strip().upper()
        if level not in _LOG_LEVELS:
            raise ConfigurationError(f"Environment variable '{level_var}' must be one of {sorted(_LOG_LEVELS)}, got '{raw_level}'.")
        values["log_level"] = level

    settings = Settings(**values)
    logger.debug(f"Loaded settings: {settings}")
    return settings


SETTINGS: Settings = load_settings()
