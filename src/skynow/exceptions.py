"""Application exception classes."""


class ConfigError(Exception):
    """Raised when configuration is invalid or incomplete."""


class NetworkError(Exception):
    """Raised when a weather service request fails at the HTTP or transport layer."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(Exception):
    """Raised when geocoding returns no results for a place name."""


class PositioningError(Exception):
    """Raised when the device position is denied, unavailable, or unsupported."""

    def __init__(self, message: str, *, reason: str = "unavailable") -> None:
        super().__init__(message)
        self.reason = reason


class PreferenceStoreError(Exception):
    """Raised when persisted preferences cannot be written."""
