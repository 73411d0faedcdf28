"""
ProjectHub — HTTP Client Wrapper
=================================

What:  Async client for the ProjectHub API, used by frontends and scripts.
How:   Wraps one httpx.AsyncClient per ApiClient. The four verbs return the
       parsed JSON body; any failure (HTTP error status, transport error,
       undecodable body) becomes an ApiClientError whose message was
       normalized by handle_error().
Who:   Callers construct a ClientConfig explicitly; nothing is process-global.

Example:
    async with ApiClient(ClientConfig(base_url="http://localhost:8000")) as api:
        auth = await api.login({"username": "ada", "password": "secret123"})
        await api.update_user("ada", {"bio": "Hi"}, auth["token"])
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)


@dataclass
class ClientConfig:
    base_url: str
    token: Optional[str] = None
    timeout: float = 10.0


class ApiClientError(Exception):
    """A failed API call; `status_code` is None for transport failures."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Any = None):
        self.message = message
        self.status_code = status_code
        self.body = body
        super().__init__(message)


def handle_error(error: Any) -> str:
    """
    Normalize any failure into one human-readable string.

    Priority:
        1. the server's `message` field (from an error response body)
        2. the transport/exception message
        3. the raw value itself
    """
    if isinstance(error, httpx.Response):
        try:
            body = error.json()
        except ValueError:
            body = None
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
        return error.reason_phrase or f"HTTP {error.status_code}"
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    if isinstance(error, BaseException):
        return str(error) or type(error).__name__
    return str(error)


class ApiClient:
    """Thin async wrapper over the ProjectHub REST API."""

    def __init__(self, config: ClientConfig, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.config = config
        self._http = httpx.AsyncClient(
            base_url=config.base_url.rstrip("/"),
            timeout=config.timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    # ── Generic verbs ─────────────────────────────────────────────────────

    async def get(self, path: str, params: Optional[Dict[str, Any]] = None, token: Optional[str] = None) -> Any:
        return await self._request("GET", path, params=params, token=token)

    async def post(self, path: str, data: Any = None, token: Optional[str] = None) -> Any:
        return await self._request("POST", path, json=data, token=token)

    async def put(self, path: str, data: Any = None, token: Optional[str] = None) -> Any:
        return await self._request("PUT", path, json=data, token=token)

    async def delete(self, path: str, token: Optional[str] = None) -> Any:
        return await self._request("DELETE", path, token=token)

    # ── Convenience calls ─────────────────────────────────────────────────

    async def create_user(self, user: Dict[str, Any]) -> Dict[str, Any]:
        """POST /auth/signup → {"user": ..., "token": ...}"""
        return await self.post("/auth/signup", user)

    async def login(self, credentials: Dict[str, Any]) -> Dict[str, Any]:
        """POST /auth/login → {"user": ..., "token": ...}"""
        return await self.post("/auth/login", credentials)

    async def update_user(self, username: str, changes: Dict[str, Any], token: str) -> Dict[str, Any]:
        """PUT /users/{username} as that user."""
        return await self.put(f"/users/{username}", changes, token=token)

    # ── Internals ─────────────────────────────────────────────────────────

    def _headers(self, token: Optional[str]) -> Dict[str, str]:
        token = token or self.config.token
        if token:
            return {"Authorization": f"Bearer {token}"}
        return {}

    async def _request(
        self,
        method: str,
        path: str,
        token: Optional[str] = None,
        **kwargs: Any,
    ) -> Any:
        try:
            response = await self._http.request(method, path, headers=self._headers(token), **kwargs)
        except httpx.HTTPError as e:
            message = handle_error(e)
            logger.warning("%s %s failed: %s", method, path, message)
            raise ApiClientError(message) from e

        if response.is_error:
            message = handle_error(response)
            logger.info("%s %s returned %d: %s", method, path, response.status_code, message)
            raise ApiClientError(message, status_code=response.status_code, body=_safe_json(response))

        if not response.content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise ApiClientError("Response body is not valid JSON", status_code=response.status_code) from e


def _safe_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None
