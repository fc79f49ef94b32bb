from __future__ import annotations


class WalkifyError(Exception):
    def __init__(self, message: str, status_code: int = 500) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class RouteGenerationError(WalkifyError):
    """Route could not be assembled; the message is shown to the user as is."""

    def __init__(self, message: str, status_code: int = 422) -> None:
        super().__init__(message, status_code=status_code)


class ProviderError(WalkifyError):
    """A single geocoding/directions call failed (network, quota, bad payload)."""

    def __init__(self, message: str, status_code: int = 503) -> None:
        super().__init__(message, status_code=status_code)
