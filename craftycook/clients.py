import logging
from typing import Any, Dict, Optional

import requests

from .config import API_BASE_URL, REQUEST_TIMEOUT
from .errors import AuthenticationRequired, RemoteError, RequestTimeout
from .loading import LoadingSignal

logger = logging.getLogger(__name__)


class ApiClient:
    """Thin JSON client for the CraftyCook REST API.

    Every request is bracketed by the loading signal, carries the bearer token
    when one is set and turns transport/HTTP failures into ``RemoteError``.
    """

    def __init__(
        self,
        base_url: str = API_BASE_URL,
        token: Optional[str] = None,
        loading: Optional[LoadingSignal] = None,
        timeout: float = REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.loading = loading
        self.timeout = timeout
        self.session = session or requests.Session()

    @property
    def is_authenticated(self) -> bool:
        return bool(self.token)

    def set_token(self, token: Optional[str]) -> None:
        self.token = token or None

    def require_auth(self) -> None:
        if not self.is_authenticated:
            raise AuthenticationRequired()

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _headers(self, json_body: bool) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if json_body:
            headers["Content-Type"] = "application/json"
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    @staticmethod
    def _decode(resp: requests.Response) -> Dict[str, Any]:
        if not resp.content:
            return {}
        try:
            data = resp.json()
        except ValueError:
            logger.debug("Non-JSON response from %s: %.200s", resp.url, resp.text)
            return {}
        return data if isinstance(data, dict) else {"data": data}

    def request(
        self,
        method: str,
        path: str,
        json: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
        files: Optional[Dict[str, Any]] = None,
        data: Optional[Dict[str, Any]] = None,
        timeout: Optional[float] = None,
        auth: bool = False,
    ) -> Dict[str, Any]:
        if auth:
            self.require_auth()
        url = self._url(path)
        effective_timeout = timeout or self.timeout
        if self.loading:
            self.loading.start()
        try:
            resp = self.session.request(
                method,
                url,
                json=json,
                params=params,
                files=files,
                data=data,
                headers=self._headers(json_body=json is not None),
                timeout=effective_timeout,
            )
        except requests.Timeout as exc:
            logger.error("%s %s timed out after %ss", method, url, effective_timeout)
            raise RequestTimeout(timeout=effective_timeout) from exc
        except requests.RequestException as exc:
            logger.error("%s %s failed: %s", method, url, exc)
            raise RemoteError(f"Network error: {exc}") from exc
        finally:
            if self.loading:
                self.loading.stop()

        body = self._decode(resp)
        if resp.status_code >= 400:
            message = body.get("message") or f"Request failed with status {resp.status_code}"
            logger.error("%s %s -> %s: %s", method, url, resp.status_code, message)
            raise RemoteError(str(message), status=resp.status_code, payload=body)
        return body

    def get(self, path: str, **kwargs: Any) -> Dict[str, Any]:
        return self.request("GET", path, **kwargs)

    def post(self, path: str, **kwargs: Any) -> Dict[str, Any]:
        return self.request("POST", path, **kwargs)

    def put(self, path: str, **kwargs: Any) -> Dict[str, Any]:
        return self.request("PUT", path, **kwargs)

    def patch(self, path: str, **kwargs: Any) -> Dict[str, Any]:
        return self.request("PATCH", path, **kwargs)

    def delete(self, path: str, **kwargs: Any) -> Dict[str, Any]:
        return self.request("DELETE", path, **kwargs)

    def close(self) -> None:
        self.session.close()


def error_message(exc: Exception, fallback: str) -> str:
    """Server message when the API sent one, otherwise the fixed fallback."""
    if isinstance(exc, RemoteError) and exc.server_message:
        return exc.server_message
    if isinstance(exc, AuthenticationRequired):
        return exc.message
    return fallback
