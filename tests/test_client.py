"""Tests for the HTTP client."""

import asyncio

import pytest
from conftest import CONNECT_ERROR, PROTOTYPE_URL, SERVICE_URL, TOKEN

from wpro_publish.api import PublishRequest, WproClient, describe_status
from wpro_publish.errors import ApiError


@pytest.fixture
def request_payload():
    return PublishRequest(group_data={"a": 1}, group_id="g1", type="PAGE_COMPONENT_PROTOTYPE")


@pytest.mark.parametrize(
    "status, prefix",
    [
        (400, "Bad Request"),
        (401, "Unauthorized"),
        (403, "Forbidden"),
        (404, "Not Found"),
        (500, "Internal Server Error"),
        (503, "Service Unavailable"),
    ],
)
def test_describe_known_status(status, prefix):
    assert describe_status(status).startswith(prefix)


@pytest.mark.parametrize("status", [402, 418, 502, None])
def test_describe_unknown_status(status):
    assert describe_status(status) == "An unknown error occurred."


def test_create_sends_bearer_auth_and_json(settings, fake_api, request_payload):
    fake_api.routes[("POST", PROTOTYPE_URL)] = 201

    async def _run():
        async with WproClient(settings, transport=fake_api.transport) as client:
            return await client.create_component(request_payload)

    response = asyncio.run(_run())

    assert response.status_code == 201
    sent = fake_api.requests[0]
    assert sent.headers["Authorization"] == f"Bearer {TOKEN}"
    assert fake_api.body(0) == {
        "groupData": {"a": 1},
        "groupId": "g1",
        "type": "PAGE_COMPONENT_PROTOTYPE",
    }


def test_update_targets_component_resource(settings, fake_api, request_payload):
    fake_api.routes[("PUT", f"{PROTOTYPE_URL}g1")] = 200

    async def _run():
        async with WproClient(settings, transport=fake_api.transport) as client:
            await client.update_component(request_payload)

    asyncio.run(_run())

    assert fake_api.calls() == [("PUT", f"{PROTOTYPE_URL}g1")]


def test_publish_service_sends_empty_body(settings, fake_api):
    fake_api.routes[("POST", SERVICE_URL)] = 204

    async def _run():
        async with WproClient(settings, transport=fake_api.transport) as client:
            return await client.publish_service()

    response = asyncio.run(_run())

    assert response.status_code == 204
    assert fake_api.requests[0].content == b""


def test_error_status_raises_api_error(settings, fake_api, request_payload):
    fake_api.routes[("POST", PROTOTYPE_URL)] = 500

    async def _run():
        async with WproClient(settings, transport=fake_api.transport) as client:
            await client.create_component(request_payload)

    with pytest.raises(ApiError) as exc_info:
        asyncio.run(_run())
    assert exc_info.value.status_code == 500


def test_transport_error_has_no_status(settings, fake_api, request_payload):
    fake_api.routes[("POST", PROTOTYPE_URL)] = CONNECT_ERROR

    async def _run():
        async with WproClient(settings, transport=fake_api.transport) as client:
            await client.create_component(request_payload)

    with pytest.raises(ApiError, match="No response from server") as exc_info:
        asyncio.run(_run())
    assert exc_info.value.status_code is None


def test_close_is_idempotent(settings, fake_api):
    async def _run():
        client = WproClient(settings, transport=fake_api.transport)
        assert not client.client.is_closed
        await client.close()
        await client.close()

    asyncio.run(_run())
