from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class Transport(ABC):
    """Interfaz mínima para hablar con el API de datos.

    Implementations raise ``UpstreamError`` (``UnauthorizedError`` on 401)
    and return the decoded JSON body otherwise.
    """

    @abstractmethod
    def get(self, path: str, params: Optional[Dict[str, Any]] = None, headers: Optional[Dict[str, str]] = None) -> Any:
        raise NotImplementedError

    @abstractmethod
    def post(self, path: str, json: Any = None, headers: Optional[Dict[str, str]] = None) -> Any:
        raise NotImplementedError
