"""Custom exception hierarchy for keynav.

Structural mistakes made by the hosting UI (wiring a zone to a region that
does not exist, registering the same id twice) raise; everything the user
can trigger at runtime (pressing a key at a dead end, restoring a path that
was never saved) is reported through boolean return values instead.

Exception Hierarchy:
    KeynavError (base)
    ├── RegistrationError - region/zone wiring problems
    │   ├── UnknownRegionError
    │   └── DuplicateRegistrationError
    └── ConfigurationError - settings/environment issues
        └── LayoutError - malformed layout description

Usage:
    from keynav.exceptions import UnknownRegionError

    try:
        store.register_zone(config)
    except UnknownRegionError as e:
        logger.error(f"Zone wiring failed: {e}")
"""

from typing import Any, Optional


class KeynavError(Exception):
    """Base exception for all keynav errors.

    Attributes:
        message: Human-readable error description
        context: Additional context about the error (e.g., region/zone ids)
    """

    def __init__(self, message: str, **context: Any) -> None:
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context."""
        if self.context:
            context_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({context_str})"
        return self.message


# =============================================================================
# Registration Errors
# =============================================================================


class RegistrationError(KeynavError):
    """Base exception for region/zone registration problems."""

    pass


class UnknownRegionError(RegistrationError):
    """A zone was registered against a region that does not exist."""

    def __init__(
        self,
        message: str = "Region not found",
        *,
        region_id: Optional[str] = None,
        **context: Any,
    ) -> None:
        if region_id is not None:
            context["region_id"] = region_id
        super().__init__(message, **context)


class DuplicateRegistrationError(RegistrationError):
    """A region or zone id is already registered."""

    def __init__(
        self,
        message: str = "Id already registered",
        *,
        kind: Optional[str] = None,
        item_id: Optional[str] = None,
        **context: Any,
    ) -> None:
        if kind is not None:
            context["kind"] = kind
        if item_id is not None:
            context["id"] = item_id
        super().__init__(message, **context)


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(KeynavError):
    """Invalid settings, environment variable, or config file."""

    def __init__(
        self,
        message: str = "Invalid configuration",
        *,
        setting: Optional[str] = None,
        **context: Any,
    ) -> None:
        if setting is not None:
            context["setting"] = setting
        super().__init__(message, **context)


class LayoutError(ConfigurationError):
    """A layout description could not be parsed into registrations."""

    def __init__(
        self,
        message: str = "Invalid layout",
        *,
        path: Optional[str] = None,
        **context: Any,
    ) -> None:
        if path is not None:
            context["path"] = path
        super().__init__(message, **context)
