import asyncio
from unittest import mock

import pytest
from backlight_bridge.bridge import Bridge
from backlight_bridge.errors import MqttConnectionError
from backlight_bridge.models.color_request import ColorRequest
from backlight_bridge.models.config import Config


@pytest.fixture
def mock_publisher():
    with mock.patch("backlight_bridge.bridge.MqttPublisher") as MockPublisher:
        publisher = MockPublisher.return_value
        publisher.publish_async = mock.AsyncMock()
        yield publisher


@pytest.fixture
def mock_webserver():
    with mock.patch("backlight_bridge.bridge.WebServer") as MockWebServer:
        webserver = MockWebServer.return_value
        webserver.process = mock.AsyncMock()
        webserver.stop = mock.AsyncMock()
        yield webserver


@pytest.fixture
def bridge(mock_publisher, mock_webserver):
    return Bridge(Config())


@pytest.mark.asyncio
async def test_process_runs_until_stopped(bridge, mock_publisher, mock_webserver):
    task = asyncio.create_task(bridge.process())
    await asyncio.sleep(0.05)
    mock_publisher.connect.assert_called_once()
    mock_webserver.process.assert_awaited_once()
    assert not task.done()

    bridge.trigger_stop()
    await asyncio.wait_for(task, 1)
    mock_webserver.stop.assert_awaited_once()
    mock_publisher.disconnect.assert_called_once()


@pytest.mark.asyncio
async def test_process_connect_failure(bridge, mock_publisher, mock_webserver):
    mock_publisher.connect.side_effect = MqttConnectionError("refused")
    with pytest.raises(MqttConnectionError):
        await bridge.process()
    mock_webserver.process.assert_not_awaited()


@pytest.mark.asyncio
async def test_translator_uses_configured_topic(mock_publisher, mock_webserver):
    config = Config(mqtt={"topic": "cmd/backlight2"})
    bridge = Bridge(config)
    await bridge.translator.apply(ColorRequest(color="off"))
    mock_publisher.publish_async.assert_awaited_once_with("cmd/backlight2", "set/0/0/0")
