import logging
from typing import Any, Dict, Optional

from .clients import ApiClient, error_message
from .config import ENDPOINTS
from .errors import CraftyCookError
from .notifications import Notifier

logger = logging.getLogger(__name__)


class AuthSession:
    """Holds the signed-in user and the bearer token used by ``ApiClient``."""

    def __init__(self, api: ApiClient, notifier: Notifier) -> None:
        self.api = api
        self.notifier = notifier
        self.user: Optional[Dict[str, Any]] = None

    @property
    def is_authenticated(self) -> bool:
        return self.api.is_authenticated

    def _remember(self, data: Dict[str, Any]) -> Dict[str, Any]:
        token = data.get("token")
        if token:
            self.api.set_token(str(token))
        user = data.get("user") or {k: v for k, v in data.items() if k not in ("token", "success", "message")}
        self.user = user or None
        return user

    def login(self, email: str, password: str) -> Dict[str, Any]:
        try:
            data = self.api.post(ENDPOINTS["auth_login"], json={"email": email, "password": password})
        except CraftyCookError as exc:
            self.notifier.error(error_message(exc, "Failed to login"))
            raise
        user = self._remember(data)
        self.notifier.success("Welcome back to CraftyCook!")
        return user

    def check_auth(self) -> Optional[Dict[str, Any]]:
        if not self.api.is_authenticated:
            self.user = None
            return None
        try:
            data = self.api.get(ENDPOINTS["auth_check"])
        except CraftyCookError as exc:
            logger.info("Session check failed: %s", exc)
            self.user = None
            return None
        return self._remember(data)

    def logout(self) -> None:
        try:
            self.api.post(ENDPOINTS["auth_logout"])
        except CraftyCookError as exc:
            self.notifier.error(error_message(exc, "Failed to logout"))
            raise
        finally:
            self.api.set_token(None)
            self.user = None
        self.notifier.success("Logout successfully")
