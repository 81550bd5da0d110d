"""
Centralized constants for keynav.

Timing values are in seconds. They are the defaults that
NavigationSettings starts from; a settings file or environment
variables can override most of them per instance.
"""

from pathlib import Path

# =============================================================================
# PATHS
# =============================================================================

KEYNAV_CONFIG_DIR = Path.home() / ".config" / "keynav"
SETTINGS_FILENAME = "navigation.yaml"
LOG_FILENAME = "keynav.log"

# =============================================================================
# HISTORY & TIMING
# =============================================================================

HISTORY_LIMIT = 100  # Transitions kept in the navigation history ring

ERROR_CLEAR_DELAY_SECONDS = 0.5  # Dead-end errors self-expire after this

RESTORE_RETRY_DELAY_SECONDS = 0.1  # Wait between focus-memory restore attempts
RESTORE_MAX_ATTEMPTS = 10  # Give up restoring after this many retries

KEYBOARD_HOVER_COOLDOWN_SECONDS = 1.0  # Pointer hover ignored after a key move

# =============================================================================
# REGISTRY
# =============================================================================

DUPLICATE_POLICY_ERROR = "error"
DUPLICATE_POLICY_REPLACE = "replace"
DUPLICATE_POLICIES = (DUPLICATE_POLICY_ERROR, DUPLICATE_POLICY_REPLACE)

GENERATED_ID_LENGTH = 9  # Random suffix for region-xxx / zone-xxx ids

# =============================================================================
# ENVIRONMENT VARIABLES
# =============================================================================

ENV_VAR_DEFINITIONS = {
    "KEYNAV_DEBUG": {
        "description": "Enable verbose navigation tracing",
        "default": "false",
        "valid_values": ["true", "false", "1", "0"],
    },
    "KEYNAV_MUTED": {
        "description": "Disable audio feedback for move/select/error",
        "default": "false",
        "valid_values": ["true", "false", "1", "0"],
    },
    "KEYNAV_DUPLICATE_POLICY": {
        "description": "What to do when a region/zone id is registered twice",
        "default": DUPLICATE_POLICY_ERROR,
        "valid_values": list(DUPLICATE_POLICIES),
    },
    "KEYNAV_CONFIG": {
        "description": "Path to the navigation settings YAML file",
        "default": None,
        "valid_values": None,
    },
}
