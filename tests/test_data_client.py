import copy
from unittest.mock import patch

import pytest

from collect_proxy.src.config import Environment
from collect_proxy.src.errors import UnauthorizedError, UpstreamError, ValidationError
from collect_proxy.src.services.data_client import DataClient
from collect_proxy.src.services.transport import HttpTransport

from conftest import TestConfig


PLAN_PARAMS = {
    "from": "2024-01-01T00:00:00+09:00",
    "to": "2024-01-01T01:00:00+09:00",
    "intervalType": 1,
    "resources": ["r1", "r2"],
    "attributes": None,
}


def test_plan_data_is_proxied_without_auth_in_dev(dev_client, transport):
    assert dev_client.get_plan_data(PLAN_PARAMS) == {"data": []}
    transport.get.assert_called_once_with(
        "/data/plan",
        params={
            "from": "2024-01-01T00:00:00+09:00",
            "to": "2024-01-01T01:00:00+09:00",
            "intervalType": 1,
            "resources": ["r1", "r2"],
        },
        headers={},
    )


def test_invalid_plan_query_never_reaches_transport(dev_client, transport):
    with pytest.raises(ValidationError, match="Invalid intervalType"):
        dev_client.get_plan_data({**PLAN_PARAMS, "intervalType": 7})
    transport.get.assert_not_called()


def test_collect_query_attaches_bearer_token(staging_client, transport):
    params = {"from": "2024-01-01T00:00:00+09:00", "to": "2024-01-01T01:00:00+09:00", "cycle": 1}
    staging_client.get_collect_data(params)
    _, kwargs = transport.get.call_args
    assert kwargs["headers"] == {"Authorization": "Bearer initial-token"}


def test_collect_query_window_short_circuits(staging_client, transport):
    params = {"from": "2024-01-01T00:00:00+09:00", "to": "2024-01-01T03:00:00+09:00", "cycle": 1}
    with pytest.raises(ValidationError, match="For cycle 1, maximum time period is 2 hours"):
        staging_client.get_collect_data(params)
    transport.get.assert_not_called()


def test_create_collect_data_sends_body_unmodified(dev_client, transport, make_body):
    body = make_body()
    snapshot = copy.deepcopy(body)

    assert dev_client.create_collect_data(body) == {"result": "ok"}

    _, kwargs = transport.post.call_args
    assert kwargs["json"] is body
    assert body == snapshot


def test_create_collect_data_rejects_before_io(dev_client, transport, make_body):
    with pytest.raises(ValidationError, match="attribute must be a 6-digit number string"):
        dev_client.create_collect_data(make_body(attribute="12345"))
    transport.post.assert_not_called()


def test_upstream_errors_surface_unchanged(staging_client, transport, make_body):
    error = UnauthorizedError()
    transport.post.side_effect = error
    with pytest.raises(UnauthorizedError) as exc:
        staging_client.create_collect_data(make_body())
    assert exc.value is error
    assert transport.post.call_count == 1

    transport.get.side_effect = UpstreamError("boom", status_code=502)
    with pytest.raises(UpstreamError, match="boom"):
        staging_client.get_plan_data(PLAN_PARAMS)


def test_from_config_builds_dev_client():
    client = DataClient.from_config(TestConfig)
    assert client.environment is Environment.DEV
    assert isinstance(client.transport, HttpTransport)
    assert client.transport.base_url == "http://upstream.test/dep-webapi"


def test_from_config_injects_explicit_token():
    class Production(TestConfig):
        API_ENVIRONMENT = "service"
        API_CLIENT_ID = "id"
        API_CLIENT_SECRET = "secret"
        API_TOKEN = "preset"

    with patch("collect_proxy.src.services.client_credentials.requests.post") as mock_post:
        client = DataClient.from_config(Production)
    mock_post.assert_not_called()
    assert client.environment is Environment.PRODUCTION
    assert client.token_manager.current_token() == "preset"


def test_unauthorized_error_names_the_rejected_token(staging_client, staging_tokens, transport):
    transport.get.side_effect = UnauthorizedError()
    with pytest.raises(UnauthorizedError) as exc:
        staging_client.get_collect_data(
            {"from": "2024-01-01T00:00:00+09:00", "to": "2024-01-01T01:00:00+09:00", "cycle": 1}
        )
    assert exc.value.token == "initial-token"
    assert transport.get.call_args.kwargs["headers"] == {"Authorization": "Bearer initial-token"}
