import httpx
import pytest

from push_demo.clients import BaseClient
from push_demo.exceptions import PushAPIError


def _counting_transport(responses):
    calls = []

    def handler(request):
        calls.append(request)
        return responses[min(len(calls), len(responses)) - 1]

    return httpx.MockTransport(handler), calls


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [429, 502, 503, 504])
async def test_transient_status_is_not_retried(status):
    transport, calls = _counting_transport([httpx.Response(status), httpx.Response(200, json={})])
    client = BaseClient("https://api.test", transport=transport)

    with pytest.raises(PushAPIError) as exc:
        await client.get("/thing")

    assert exc.value.status_code == status
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_connect_error_is_raised_after_one_attempt():
    calls = []

    def handler(request):
        calls.append(request)
        raise httpx.ConnectError("refused", request=request)

    client = BaseClient("https://api.test", transport=httpx.MockTransport(handler))

    with pytest.raises(httpx.ConnectError):
        await client.get("/thing")
    assert len(calls) == 1


@pytest.mark.asyncio
async def test_error_detail_in_message():
    transport, _ = _counting_transport([httpx.Response(400, json={"error": "bad channel"})])
    client = BaseClient("https://api.test", transport=transport)

    with pytest.raises(PushAPIError, match="bad channel"):
        await client.post("/thing", json={})


@pytest.mark.asyncio
async def test_empty_body_is_none():
    transport, _ = _counting_transport([httpx.Response(204)])
    client = BaseClient("https://api.test", transport=transport)

    assert await client.post("/thing", json={"a": 1}) is None

    response = await client.post_raw("/thing", json={"a": 1})
    assert response.status_code == 204
    await client.close()


@pytest.mark.asyncio
async def test_json_content_type_header():
    transport, calls = _counting_transport([httpx.Response(200, json={})])
    client = BaseClient("https://api.test", transport=transport)

    await client.get("/thing")

    assert calls[0].headers["content-type"] == "application/json"


@pytest.mark.asyncio
async def test_client_is_recreated_after_close():
    transport, calls = _counting_transport([httpx.Response(200, json={"ok": True})])
    client = BaseClient("https://api.test", transport=transport)

    await client.get("/thing")
    await client.close()

    assert await client.get("/thing") == {"ok": True}
    assert len(calls) == 2
    await client.close()
