from datetime import datetime, timezone
from unittest.mock import MagicMock

import pytest

from collect_proxy import create_app
from collect_proxy.src.config import Config
from collect_proxy.src.services.base import Transport
from collect_proxy.src.services.client_credentials import Credentials, TokenManager
from collect_proxy.src.services.data_client import DataClient
from collect_proxy.src.validation import RequestValidator


NOW = datetime(2026, 1, 15, 0, 0, 0, tzinfo=timezone.utc)


class TestConfig(Config):
    __test__ = False

    DEBUG = False
    APP_ENV = "test"
    API_ENVIRONMENT = "dev"
    API_BASE_URL = "http://upstream.test/dep-webapi"
    API_CLIENT_ID = None
    API_CLIENT_SECRET = None
    API_TOKEN = None


class StagingConfig(TestConfig):
    API_ENVIRONMENT = "stg"


@pytest.fixture
def validator():
    return RequestValidator(clock=lambda: NOW)


@pytest.fixture
def transport():
    fake = MagicMock(spec=Transport)
    fake.get.return_value = {"data": []}
    fake.post.return_value = {"result": "ok"}
    return fake


@pytest.fixture
def dev_client(transport, validator):
    return DataClient(TokenManager("dev"), transport, validator=validator)


@pytest.fixture
def staging_tokens():
    return TokenManager("staging", credentials=Credentials("client-id", "client-secret"), token="initial-token")


@pytest.fixture
def staging_client(transport, validator, staging_tokens):
    return DataClient(staging_tokens, transport, validator=validator)


@pytest.fixture
def app(dev_client):
    return create_app(TestConfig, client=dev_client)


@pytest.fixture
def http(app):
    return app.test_client()


def collect_body(values=None, cycle=1, attribute="123456"):
    """Minimal valid POST /api/collect body relative to NOW."""
    if values is None:
        values = [
            {"datetime": "2026-01-14T10:00:00+09:00", "value": "1.5"},
            {"datetime": "2026-01-14T11:00:00+09:00", "value": "2.0"},
        ]
    return {
        "cycle": cycle,
        "resources": [
            {
                "resourceId": "res-001",
                "attributes": [{"attribute": attribute, "dataType1": 5, "values": values}],
            }
        ],
    }


@pytest.fixture
def make_body():
    return collect_body
