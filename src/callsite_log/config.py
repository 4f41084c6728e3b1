"""Settings consumed by the log facility.

Values come from, in increasing precedence: built-in defaults, an optional
YAML file (``path`` argument or ``CALLSITE_LOG_CONFIG``), and environment
variables. The YAML file mirrors the settings layout::

    project_name: My App
    logging:
      enabled: true
      level: INFO
      file: stdout
    statsd:
      enabled: false
      exclude_levels: [debug]
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "CALLSITE_LOG_CONFIG"

# --- Helpers for parsing env vars ---


def _env_bool(name: str) -> Optional[bool]:
    """Parse a boolean environment variable.

    Accepts common boolean string representations: '1', 'true', 'yes', 'on'
    (case-insensitive).

    Args:
        name: Environment variable name

    Returns:
        Optional[bool]: The parsed value, or None if the variable is not set
    """
    val = os.getenv(name)
    if val is None:
        return None
    return val.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str) -> Optional[float]:
    val = os.getenv(name)
    if val is None:
        return None
    try:
        return float(val)
    except ValueError:
        logger.warning("Ignoring non-numeric %s=%r", name, val)
        return None


def _env_list(name: str) -> Optional[list[str]]:
    val = os.getenv(name)
    if val is None:
        return None
    return [item.strip() for item in val.split(",") if item.strip()]


class LoggingSettings(BaseModel):
    enabled: bool = True
    level: str = "INFO"
    file: str = "stdout"


class StatsdSettings(BaseModel):
    enabled: bool = False
    sample_rate: float = 1.0
    exclude_levels: list[str] = Field(default_factory=list)

    @field_validator("exclude_levels", mode="before")
    @classmethod
    def none_means_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class Settings(BaseModel):
    project_name: Optional[str] = None
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    statsd: StatsdSettings = Field(default_factory=StatsdSettings)

    @field_validator("project_name", mode="before")
    @classmethod
    def project_name_as_text(cls, value: Any) -> Any:
        # YAML turns names like 2024 into numbers.
        return None if value is None else str(value)


def _read_yaml(path: Path) -> dict[str, Any]:
    if not path.is_file():
        logger.error("Configuration file not found at path: %s", path)
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error("Error parsing YAML file %s: %s", path, e)
            raise
    return data or {}


def _env_overrides() -> dict[str, dict[str, Any]]:
    overrides: dict[str, dict[str, Any]] = {"logging": {}, "statsd": {}}
    sources = {
        ("logging", "enabled"): _env_bool("LOG_ENABLED"),
        ("logging", "level"): os.getenv("LOG_LEVEL"),
        ("logging", "file"): os.getenv("LOG_FILE"),
        ("statsd", "enabled"): _env_bool("STATSD_ENABLED"),
        ("statsd", "sample_rate"): _env_float("STATSD_SAMPLE_RATE"),
        ("statsd", "exclude_levels"): _env_list("STATSD_EXCLUDE_LEVELS"),
    }
    for (section, key), value in sources.items():
        if value is not None:
            overrides[section][key] = value
    return overrides


def load_settings(path: Optional[str] = None) -> Settings:
    """Load settings from an optional YAML file and the environment.

    Args:
        path: YAML file to read; defaults to $CALLSITE_LOG_CONFIG when unset

    Returns:
        Settings: The validated settings

    Raises:
        FileNotFoundError: If a configuration file is named but missing
        yaml.YAMLError: If the configuration file cannot be parsed
        pydantic.ValidationError: If a value has the wrong type
    """
    data: dict[str, Any] = {}
    config_path = path or os.getenv(CONFIG_PATH_ENV)
    if config_path:
        data = _read_yaml(Path(config_path))
        logger.debug("Loaded log settings from %s", config_path)

    project_name = os.getenv("PROJECT_NAME")
    if project_name is not None:
        data["project_name"] = project_name
    for section, values in _env_overrides().items():
        if values:
            merged = dict(data.get(section) or {})
            merged.update(values)
            data[section] = merged

    return Settings.model_validate(data)
