"""Cliente del API de datos (plan / collect).

Valida cada petición antes de tocar la red y delega el envío al transporte
con el token vigente. No reintenta: el reintento tras un 401 lo decide la
capa HTTP que lo envuelve.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, Optional

from ..config import Config
from ..errors import ProxyError, UnauthorizedError
from ..validation import RequestValidator
from .base import Transport
from .client_credentials import Credentials, TokenManager
from .transport import HttpTransport

logger = logging.getLogger(__name__)


def _query(params: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in params.items() if v is not None}


class DataClient:
    PLAN_PATH = "/data/plan"
    COLLECT_PATH = "/data/collect"

    def __init__(
        self,
        token_manager: TokenManager,
        transport: Transport,
        validator: Optional[RequestValidator] = None,
    ):
        self.token_manager = token_manager
        self.transport = transport
        self.validator = validator or RequestValidator()

    @classmethod
    def from_config(cls, config: Any = Config) -> "DataClient":
        credentials = None
        if config.API_CLIENT_ID or config.API_CLIENT_SECRET:
            credentials = Credentials(config.API_CLIENT_ID or "", config.API_CLIENT_SECRET or "")
        token_manager = TokenManager(
            config.API_ENVIRONMENT,
            credentials=credentials,
            token=config.API_TOKEN,
            timeout=config.API_TIMEOUT_SECONDS,
        )
        transport = HttpTransport(config.API_BASE_URL, timeout=config.API_TIMEOUT_SECONDS)
        return cls(token_manager, transport)

    @property
    def environment(self):
        return self.token_manager.environment

    def _authorized(self, send: Callable[[Dict[str, str]], Any]) -> Any:
        # read the token once so a 401 names exactly the bearer that was sent
        token = self.token_manager.current_token()
        try:
            return send(self.token_manager.auth_header(token))
        except UnauthorizedError as exc:
            exc.token = token
            raise

    def get_plan_data(self, params: Mapping[str, Any]) -> Any:
        try:
            self.validator.validate_plan_query(params)
            return self._authorized(
                lambda headers: self.transport.get(self.PLAN_PATH, params=_query(params), headers=headers)
            )
        except ProxyError as exc:
            logger.error("Error fetching plan data: %s", exc)
            raise

    def get_collect_data(self, params: Mapping[str, Any]) -> Any:
        try:
            self.validator.validate_collect_query(params)
            return self._authorized(
                lambda headers: self.transport.get(self.COLLECT_PATH, params=_query(params), headers=headers)
            )
        except ProxyError as exc:
            logger.error("Error fetching collect data: %s", exc)
            raise

    def create_collect_data(self, body: Any) -> Any:
        try:
            self.validator.validate_collect_request(body)
            return self._authorized(
                lambda headers: self.transport.post(self.COLLECT_PATH, json=body, headers=headers)
            )
        except ProxyError as exc:
            logger.error("Error creating collect data: %s", exc)
            raise
