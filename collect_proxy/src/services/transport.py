"""Transporte HTTP hacia el API de datos usando requests."""

from __future__ import annotations

from typing import Any, Dict, Optional

import requests

from ..errors import UnauthorizedError, UpstreamError
from .base import Transport


class HttpTransport(Transport):
    def __init__(self, base_url: str, timeout: float = 20, session: Optional[requests.Session] = None):
        self.base_url = (base_url or "").rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _headers(self, extra: Optional[Dict[str, str]]) -> Dict[str, str]:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        headers.update(extra or {})
        return headers

    def get(self, path: str, params: Optional[Dict[str, Any]] = None, headers: Optional[Dict[str, str]] = None) -> Any:
        return self._send("GET", path, params=params, headers=headers)

    def post(self, path: str, json: Any = None, headers: Optional[Dict[str, str]] = None) -> Any:
        return self._send("POST", path, json=json, headers=headers)

    def _send(self, method: str, path: str, *, params=None, json=None, headers=None) -> Any:
        try:
            resp = self.session.request(
                method,
                self._url(path),
                params=params,
                json=json,
                headers=self._headers(headers),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise UpstreamError(f"{method} {path} failed: {exc}") from exc

        if resp.status_code == 401:
            raise UnauthorizedError(body=resp.text)
        if resp.status_code >= 400:
            raise UpstreamError(
                f"{method} {path} returned {resp.status_code}: {resp.text}",
                status_code=resp.status_code,
                body=resp.text,
            )
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as exc:
            raise UpstreamError(
                f"{method} {path} returned a non-JSON body", status_code=resp.status_code, body=resp.text
            ) from exc
