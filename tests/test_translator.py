# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Matthias Bilger matthias@bilger.info
from unittest import mock

import pytest
from backlight_bridge.errors import MalformedColorRequest
from backlight_bridge.errors import PublishError
from backlight_bridge.models.color_request import ColorRequest
from backlight_bridge.models.config import Config
from backlight_bridge.models.config import RgbValue
from backlight_bridge.translator import ColorTranslator

TOPIC = "cmd/backlight1"


@pytest.fixture
def publisher():
    publisher = mock.Mock()
    publisher.publish_async = mock.AsyncMock()
    return publisher


@pytest.fixture
def translator(publisher):
    config = Config()
    return ColorTranslator(publisher, TOPIC, config.colors, config.command_template)


@pytest.mark.parametrize(
    "color, command",
    [
        ("red", "set/1020/0/0"),
        ("green", "set/0/1020/0"),
        ("blue", "set/0/0/1020"),
        ("purple", "set/1000/0/800"),
        ("off", "set/0/0/0"),
    ],
)
def test_command_for_table_colors(translator, color, command):
    assert translator.command_for(ColorRequest(color=color)) == command


def test_command_for_custom_uses_values_verbatim(translator):
    request = ColorRequest(color="custom", rgb=["10", "20", "30"])
    assert translator.command_for(request) == "set/10/20/30"


def test_command_for_custom_does_not_check_numbers(translator):
    request = ColorRequest(color="custom", rgb=["abc", "-1", "99999"])
    assert translator.command_for(request) == "set/abc/-1/99999"


def test_command_for_custom_uses_first_three_values(translator):
    request = ColorRequest(color="custom", rgb=["1", "2", "3", "4"])
    assert translator.command_for(request) == "set/1/2/3"


@pytest.mark.parametrize("rgb", [None, [], ["1"], ["1", "2"]])
def test_command_for_custom_missing_values(translator, rgb):
    with pytest.raises(MalformedColorRequest):
        translator.command_for(ColorRequest(color="custom", rgb=rgb))


def test_command_for_unknown_color(translator):
    assert translator.command_for(ColorRequest(color="magenta")) is None


def test_command_for_is_case_sensitive(translator):
    assert translator.command_for(ColorRequest(color="RED")) is None


def test_configured_color_and_template(publisher):
    translator = ColorTranslator(
        publisher,
        TOPIC,
        {"warm": RgbValue(red=1020, green=400, blue=100)},
        "rgb {red} {green} {blue}",
    )
    assert translator.command_for(ColorRequest(color="warm")) == "rgb 1020 400 100"
    assert translator.colors == ["warm"]


@pytest.mark.asyncio
async def test_apply_publishes_command(translator, publisher):
    command = await translator.apply(ColorRequest(color="red"))
    assert command == "set/1020/0/0"
    publisher.publish_async.assert_awaited_once_with(TOPIC, "set/1020/0/0")


@pytest.mark.asyncio
async def test_apply_unknown_color_does_not_publish(translator, publisher, caplog):
    assert await translator.apply(ColorRequest(color="magenta")) is None
    publisher.publish_async.assert_not_awaited()
    assert "Ignoring unknown color: magenta" in caplog.text


@pytest.mark.asyncio
async def test_apply_propagates_publish_error(translator, publisher):
    publisher.publish_async.side_effect = PublishError("no connection")
    with pytest.raises(PublishError):
        await translator.apply(ColorRequest(color="off"))


@pytest.mark.asyncio
async def test_apply_repeated_requests_publish_each_time(translator, publisher):
    for _ in range(3):
        await translator.apply(ColorRequest(color="blue"))
    assert publisher.publish_async.await_args_list == [
        mock.call(TOPIC, "set/0/0/1020"),
    ] * 3
