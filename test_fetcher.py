"""
Tests for the HTTP transport and the typed menu fetcher.
"""

import json
from unittest.mock import AsyncMock

import pytest
from aiohttp import web
from aiohttp import test_utils

from core.errors import DecodeError, TransportError
from core.infra.http import HttpClient
from plugins.dineoncampus.fetcher import MenuFetcher
from plugins.dineoncampus.schemas import DiningHallResponse, OperationHoursResponse


MENU_PAYLOAD = {
    "status": "success",
    "menu": {
        "id": "abc",
        "date": "2024-10-18",
        "periods": {
            "name": "Lunch",
            "categories": [
                {"name": "Grill", "items": [{"name": "Burger", "description": "beef", "calories": 540}]},
            ],
        },
    },
}


def fake_http(body) -> AsyncMock:
    http = AsyncMock(spec=HttpClient)
    http.get_bytes.return_value = body if isinstance(body, bytes) else json.dumps(body).encode()
    return http


@pytest.mark.asyncio
async def test_fetch_menu_decodes_payload_and_ignores_unknown_fields():
    http = fake_http(MENU_PAYLOAD)
    fetcher = MenuFetcher(http)

    response = await fetcher.fetch_menu("http://menu.test/loc/periods/svc")

    http.get_bytes.assert_awaited_once_with("http://menu.test/loc/periods/svc")
    assert isinstance(response, DiningHallResponse)
    assert response.menu.date == "2024-10-18"
    category = response.menu.periods.categories[0]
    assert category.name == "Grill"
    assert category.items[0].description == "beef"


@pytest.mark.asyncio
async def test_fetch_operation_hours_keeps_extra_location_fields():
    payload = {"locations": [{"id": "5b33", "name": "Allison", "week": [{"day": 0}], "status": "open"}]}
    fetcher = MenuFetcher(fake_http(payload))

    response = await fetcher.fetch_operation_hours("http://menu.test/weekly_schedule/")

    assert isinstance(response, OperationHoursResponse)
    location = response.locations[0]
    assert location.name == "Allison"
    assert location.model_dump()["status"] == "open"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        b"<html>Service Unavailable</html>",
        b"",
        {"menu": {"date": "2024-10-18"}},
        {"unexpected": []},
    ],
)
async def test_malformed_or_mismatched_body_raises_decode_error(body):
    fetcher = MenuFetcher(fake_http(body))

    with pytest.raises(DecodeError) as exc_info:
        await fetcher.fetch_menu("http://menu.test/bad")

    assert exc_info.value.url == "http://menu.test/bad"


@pytest.mark.asyncio
async def test_transport_errors_pass_through_fetcher():
    http = AsyncMock(spec=HttpClient)
    http.get_bytes.side_effect = TransportError("http://menu.test/x", "connection reset")
    fetcher = MenuFetcher(http)

    with pytest.raises(TransportError):
        await fetcher.fetch_menu("http://menu.test/x")


@pytest.mark.asyncio
async def test_fetcher_context_manager_closes_transport():
    http = AsyncMock(spec=HttpClient)

    async with MenuFetcher(http):
        pass

    http.close.assert_awaited_once()


# --------------------------------------------------------------------------- #
# HttpClient against a local server
# --------------------------------------------------------------------------- #


def _app() -> web.Application:
    async def menu(request):
        return web.json_response(MENU_PAYLOAD)

    async def headers(request):
        return web.json_response({"ua": request.headers.get("User-Agent"), "x": request.headers.get("X-Test")})

    async def broken(request):
        raise web.HTTPServiceUnavailable()

    app = web.Application()
    app.router.add_get("/menu", menu)
    app.router.add_get("/headers", headers)
    app.router.add_get("/broken", broken)
    return app


@pytest.mark.asyncio
async def test_http_client_returns_body():
    async with test_utils.TestServer(_app()) as server:
        async with HttpClient() as http:
            body = await http.get_bytes(str(server.make_url("/menu")))

    assert json.loads(body) == MENU_PAYLOAD


@pytest.mark.asyncio
async def test_http_client_merges_default_and_request_headers():
    async with test_utils.TestServer(_app()) as server:
        async with HttpClient(default_headers={"User-Agent": "menu-bot"}) as http:
            body = await http.get_bytes(str(server.make_url("/headers")), headers={"X-Test": "1"})

    assert json.loads(body) == {"ua": "menu-bot", "x": "1"}


@pytest.mark.asyncio
async def test_http_client_error_status_is_transport_error():
    async with test_utils.TestServer(_app()) as server:
        url = str(server.make_url("/broken"))
        async with HttpClient() as http:
            with pytest.raises(TransportError) as exc_info:
                await http.get_bytes(url)

    assert "503" in str(exc_info.value)
    assert exc_info.value.url == url


@pytest.mark.asyncio
async def test_http_client_connection_failure_is_transport_error():
    async with HttpClient(timeout=5) as http:
        with pytest.raises(TransportError):
            await http.get_bytes("http://127.0.0.1:1/menu")
