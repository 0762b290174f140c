from __future__ import annotations

import logging
from typing import Any, Callable

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from checklist_app.constants import REQUEST_TIMEOUT_SECONDS
from checklist_app.errors import Conflict, NotFound, StoreError, StoreUnavailable

logger = logging.getLogger(__name__)


def _build_session():
    session = requests.Session()
    # Fail fast: callers report the failure, nothing is retried underneath them.
    retry = Retry(total=0, raise_on_status=False)
    adapter = HTTPAdapter(max_retries=retry, pool_connections=10, pool_maxsize=10)
    session.mount("https://", adapter)
    session.mount("http://", adapter)
    return session


def _is_success(response) -> bool:
    return 200 <= int(response.status_code) < 300


def _error_detail(response):
    try:
        payload = response.json()
    except ValueError:
        return response.text
    if isinstance(payload, dict) and "detail" in payload:
        return payload["detail"]
    return payload


class ApiClient:
    """Thin HTTP client for the checklist store.

    ``session`` is anything exposing ``request(method, url, **kwargs)`` with
    requests-style keyword arguments; tests hand in the FastAPI test client.
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        user_id_getter: Callable[[], str | None] | None = None,
        session=None,
        timeout: int = REQUEST_TIMEOUT_SECONDS,
    ):
        self.base_url = str(base_url or "").rstrip("/")
        self.token = str(token or "")
        self.user_id_getter = user_id_getter
        self.session = session if session is not None else _build_session()
        self.timeout = timeout

    def is_enabled(self) -> bool:
        return bool(self.base_url and self.token)

    def _headers(self) -> dict:
        headers = {"X-Backend-Token": self.token}
        user_id = self.user_id_getter() if self.user_id_getter else None
        if user_id:
            headers["X-User-Id"] = user_id
        return headers

    def request(
        self,
        method: str,
        path: str,
        params: dict | None = None,
        json: dict | None = None,
        files: dict | None = None,
    ) -> Any:
        if not self.base_url:
            raise StoreUnavailable("API_BASE_URL not configured")
        if not self.token:
            raise StoreUnavailable("BACKEND_SESSION_SECRET not configured")
        url = f"{self.base_url}{path}"
        kwargs: dict = {"headers": self._headers(), "timeout": self.timeout}
        if params:
            kwargs["params"] = {k: v for k, v in params.items() if v is not None}
        if json is not None:
            kwargs["json"] = json
        if files is not None:
            kwargs["files"] = files
        try:
            response = self.session.request(method, url, **kwargs)
        except (requests.ConnectionError, requests.Timeout) as exc:
            raise StoreUnavailable(f"Store unreachable: {method} {path}", detail=str(exc)) from exc
        except requests.RequestException as exc:
            raise StoreError(f"Store request failed: {method} {path}", detail=str(exc)) from exc

        if not _is_success(response):
            detail = _error_detail(response)
            message = f"API error {response.status_code} on {method} {path}: {detail}"
            if response.status_code == 404:
                raise NotFound(message, detail=detail, status_code=404)
            if response.status_code == 409:
                raise Conflict(message, detail=detail, status_code=409)
            if response.status_code in (502, 503, 504):
                raise StoreUnavailable(message, detail=detail, status_code=response.status_code)
            raise StoreError(message, detail=detail, status_code=response.status_code)
        if response.status_code == 204:
            return None
        return response.json()
