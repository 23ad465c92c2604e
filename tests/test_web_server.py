from unittest import mock

import pytest
from backlight_bridge.models.config import Config
from backlight_bridge.models.config import HttpConfig
from backlight_bridge.models.state import BrokerState
from backlight_bridge.translator import ColorTranslator
from backlight_bridge.webserver import WebServer


@pytest.fixture
def publisher():
    publisher = mock.Mock()
    publisher.publish_async = mock.AsyncMock()
    return publisher


def _webserver(publisher, http_config: HttpConfig):
    config = Config()
    translator = ColorTranslator(publisher, config.mqtt.topic, config.colors)
    return WebServer(translator, BrokerState(), http_config)


@pytest.mark.asyncio
async def test_routes_with_cors(aiohttp_client, publisher):
    webserver = _webserver(publisher, HttpConfig())
    client = await aiohttp_client(webserver.app)
    response = await client.post(
        "/sandbox/api/set/red",
        headers={"Origin": "http://localhost:3000"},
    )
    assert response.status == 200
    assert response.headers["Access-Control-Allow-Origin"] == "http://localhost:3000"
    publisher.publish_async.assert_awaited_once_with("cmd/backlight1", "set/1020/0/0")


@pytest.mark.asyncio
async def test_custom_prefix(aiohttp_client, publisher):
    webserver = _webserver(publisher, HttpConfig(prefix="/backlight/"))
    client = await aiohttp_client(webserver.app)
    response = await client.post("/backlight/webhook", json={"color": "blue"})
    assert response.status == 200
    response = await client.post("/sandbox/api/webhook", json={"color": "blue"})
    assert response.status == 404
    publisher.publish_async.assert_awaited_once_with("cmd/backlight1", "set/0/0/1020")


def test_not_running_before_process(publisher):
    assert not _webserver(publisher, HttpConfig()).running
