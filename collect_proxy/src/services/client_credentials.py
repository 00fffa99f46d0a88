"""OAuth client credentials token lifecycle for the data API."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Dict, Optional

import requests

from ..config import Environment
from ..errors import AuthError, ConfigurationError

logger = logging.getLogger(__name__)

DEV_PLACEHOLDER_TOKEN = "dev-mock-token"


@dataclass(frozen=True)
class Credentials:
    client_id: str
    client_secret: str

    def __repr__(self) -> str:
        return "Credentials(client_id=***, client_secret=***)"


@dataclass(frozen=True)
class Token:
    value: str
    environment: Environment


class TokenManager:
    """Owns the bearer token used for upstream calls.

    The token carries no expiry: staleness shows up as a 401 from the data
    API, after which the caller invokes ``refresh``. Refreshes are serialized;
    a caller passing the token it saw as ``stale`` skips the exchange when
    somebody else already replaced it.
    """

    def __init__(
        self,
        environment: Environment | str,
        credentials: Optional[Credentials] = None,
        token: Optional[str] = None,
        timeout: float = 20,
    ):
        self.environment = environment if isinstance(environment, Environment) else Environment.parse(environment)
        if self.environment.authenticated and not (
            credentials and credentials.client_id and credentials.client_secret
        ):
            raise ConfigurationError(
                f"API_CLIENT_ID and API_CLIENT_SECRET are required for the {self.environment.value} environment"
            )
        self.credentials = credentials
        self.token_url = self.environment.token_endpoint
        self.scope = self.environment.scope
        self.timeout = timeout
        self._token: Optional[Token] = Token(token, self.environment) if token else None
        self._lock = threading.Lock()

    def current_token(self) -> str:
        return self._token.value if self._token else ""

    def acquire(self) -> str:
        if not self.environment.authenticated:
            logger.info("Development environment: skipping token acquisition")
            return DEV_PLACEHOLDER_TOKEN
        with self._lock:
            return self._exchange()

    def refresh(self, stale: Optional[str] = None) -> str:
        if not self.environment.authenticated:
            return DEV_PLACEHOLDER_TOKEN
        with self._lock:
            current = self.current_token()
            if stale is not None and current and current != stale:
                logger.debug("Token already refreshed by a concurrent request")
                return current
            return self._exchange()

    def auth_header(self, token: Optional[str] = None) -> Dict[str, str]:
        if not self.environment.authenticated:
            return {}
        return {"Authorization": f"Bearer {token if token is not None else self.current_token()}"}

    def _exchange(self) -> str:
        payload = {"grant_type": "client_credentials", "scope": self.scope}
        try:
            resp = requests.post(
                self.token_url,
                data=payload,
                auth=(self.credentials.client_id, self.credentials.client_secret),
                headers={"Content-Type": "application/x-www-form-urlencoded"},
                timeout=self.timeout,
            )
            resp.raise_for_status()
            data = resp.json() or {}
        except requests.RequestException as exc:
            logger.error("Error getting OAuth token: %s", exc)
            raise AuthError(f"Token exchange failed: {exc}") from exc
        except ValueError as exc:
            logger.error("Token endpoint returned a non-JSON body")
            raise AuthError("Token endpoint returned a non-JSON body") from exc

        value = data.get("access_token") if isinstance(data, dict) else None
        if not value:
            raise AuthError("Token response did not return an access token")
        self._token = Token(value, self.environment)
        logger.info("Obtained OAuth token for %s environment", self.environment.value)
        return value
