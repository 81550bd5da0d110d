"""Settings loading for keynav.

Settings are resolved in three layers: built-in defaults, then the YAML
settings file (~/.config/keynav/navigation.yaml or $KEYNAV_CONFIG), then
KEYNAV_* environment variables.
"""

import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from keynav.exceptions import ConfigurationError
from .constants import (
    DUPLICATE_POLICIES,
    DUPLICATE_POLICY_ERROR,
    ENV_VAR_DEFINITIONS,
    ERROR_CLEAR_DELAY_SECONDS,
    HISTORY_LIMIT,
    KEYBOARD_HOVER_COOLDOWN_SECONDS,
    KEYNAV_CONFIG_DIR,
    RESTORE_MAX_ATTEMPTS,
    RESTORE_RETRY_DELAY_SECONDS,
    SETTINGS_FILENAME,
)

logger = logging.getLogger(__name__)

_TRUE_VALUES = ("true", "1")


@dataclass
class NavigationSettings:
    """Tunable behavior of a NavigationStore.

    Attributes:
        debug: Log verbose tracing of registry and state changes
        muted: Suppress move/select/error sound feedback
        on_duplicate: "error" to reject a re-used id, "replace" to overwrite it
        history_limit: Number of transitions kept in history
        error_clear_delay: Seconds before a dead-end error clears itself
        restore_retry_delay: Seconds between focus-memory restore attempts
        restore_max_attempts: Restore attempts before giving up
        hover_cooldown: Seconds pointer hover is ignored after a key move
        sounds: Sound type name ("move", "select", "error") -> file path
    """

    debug: bool = False
    muted: bool = False
    on_duplicate: str = DUPLICATE_POLICY_ERROR
    history_limit: int = HISTORY_LIMIT
    error_clear_delay: float = ERROR_CLEAR_DELAY_SECONDS
    restore_retry_delay: float = RESTORE_RETRY_DELAY_SECONDS
    restore_max_attempts: int = RESTORE_MAX_ATTEMPTS
    hover_cooldown: float = KEYBOARD_HOVER_COOLDOWN_SECONDS
    sounds: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if self.on_duplicate not in DUPLICATE_POLICIES:
            raise ConfigurationError(
                f"on_duplicate must be one of {list(DUPLICATE_POLICIES)}",
                setting="on_duplicate",
                value=self.on_duplicate,
            )
        if self.history_limit < 1:
            raise ConfigurationError(
                "history_limit must be positive", setting="history_limit"
            )
        if self.restore_max_attempts < 0:
            raise ConfigurationError(
                "restore_max_attempts must be non-negative",
                setting="restore_max_attempts",
            )
        for name in ("error_clear_delay", "restore_retry_delay", "hover_cooldown"):
            if getattr(self, name) < 0:
                raise ConfigurationError(f"{name} must be non-negative", setting=name)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for display."""
        return asdict(self)


def get_settings_path() -> Path:
    """Get the settings file path, respecting KEYNAV_CONFIG."""
    override = os.environ.get("KEYNAV_CONFIG")
    if override:
        return Path(override).expanduser()
    return KEYNAV_CONFIG_DIR / SETTINGS_FILENAME


def validate_env_var(name: str, value: Optional[str]) -> Tuple[bool, Optional[str]]:
    """Validate a single environment variable value.

    Args:
        name: The environment variable name.
        value: The current value (or None if not set).

    Returns:
        Tuple of (is_valid, error_message).
    """
    if name not in ENV_VAR_DEFINITIONS or value is None:
        return True, None

    valid_values = ENV_VAR_DEFINITIONS[name].get("valid_values")
    if valid_values is None:
        return True, None

    if value.lower() not in [v.lower() for v in valid_values]:
        return False, f"Invalid value '{value}' for {name}. Valid values: {valid_values}"

    return True, None


def validate_all_env_vars() -> List[str]:
    """Validate all keynav environment variables.

    Returns:
        List of error messages (empty if all valid).
    """
    errors = []
    for name in ENV_VAR_DEFINITIONS:
        is_valid, error = validate_env_var(name, os.environ.get(name))
        if not is_valid:
            errors.append(error)
    return errors


def get_env_var(name: str, validate: bool = True) -> Optional[str]:
    """Get an environment variable with optional validation.

    Raises:
        ConfigurationError: If validate=True and the value is invalid.
    """
    value = os.environ.get(name)

    if validate and value is not None:
        is_valid, error = validate_env_var(name, value)
        if not is_valid:
            raise ConfigurationError(error, setting=name)

    if value is None and name in ENV_VAR_DEFINITIONS:
        return ENV_VAR_DEFINITIONS[name].get("default")

    return value


def get_env_info() -> Dict[str, Dict]:
    """Get description, current value and validity of every KEYNAV_* variable."""
    info = {}
    for name, definition in ENV_VAR_DEFINITIONS.items():
        value = os.environ.get(name)
        is_valid, _ = validate_env_var(name, value)
        info[name] = {
            "description": definition.get("description", ""),
            "value": value,
            "is_set": value is not None,
            "valid": is_valid,
            "default": definition.get("default"),
        }
    return info


def _read_settings_file(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}

    try:
        with open(path) as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Failed to parse settings file: {e}", path=str(path)) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError("Settings file must contain a mapping", path=str(path))
    return data


def load_settings(path: Optional[Path] = None) -> NavigationSettings:
    """Resolve NavigationSettings from defaults, settings file and environment.

    Args:
        path: Settings file to read instead of the default location

    Returns:
        The effective settings

    Raises:
        ConfigurationError: If the file or an environment variable is invalid
    """
    settings_path = path or get_settings_path()
    values = _read_settings_file(settings_path)

    known = set(NavigationSettings.__dataclass_fields__)
    unknown = sorted(set(values) - known)
    if unknown:
        logger.warning(f"Ignoring unknown settings in {settings_path}: {unknown}")
    values = {k: v for k, v in values.items() if k in known}

    if os.environ.get("KEYNAV_DEBUG") is not None:
        values["debug"] = get_env_var("KEYNAV_DEBUG").lower() in _TRUE_VALUES
    if os.environ.get("KEYNAV_MUTED") is not None:
        values["muted"] = get_env_var("KEYNAV_MUTED").lower() in _TRUE_VALUES
    if os.environ.get("KEYNAV_DUPLICATE_POLICY") is not None:
        values["on_duplicate"] = get_env_var("KEYNAV_DUPLICATE_POLICY").lower()

    try:
        return NavigationSettings(**values)
    except TypeError as e:
        raise ConfigurationError(f"Invalid settings: {e}", path=str(settings_path)) from e
