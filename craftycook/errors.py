from typing import Any, Dict, Optional


class CraftyCookError(Exception):
    """Base class for every error raised by the client."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class AuthenticationRequired(CraftyCookError):
    def __init__(self, message: str = "Please log in to continue") -> None:
        super().__init__(message)


class ValidationFailed(CraftyCookError):
    def __init__(self, message: str, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class RemoteError(CraftyCookError):
    """The API answered with a 4xx/5xx or an unusable body."""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        payload: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.payload = payload or {}

    @property
    def server_message(self) -> Optional[str]:
        value = self.payload.get("message")
        return str(value) if value else None


class RequestTimeout(RemoteError):
    def __init__(self, message: str = "Request timed out", timeout: Optional[float] = None) -> None:
        super().__init__(message)
        self.timeout = timeout
