# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Matthias Bilger matthias@bilger.info
import logging

from aiohttp import web
from backlight_bridge.errors import MalformedColorRequest
from backlight_bridge.errors import PublishError
from backlight_bridge.models.color_request import ColorRequest
from backlight_bridge.models.state import BrokerState
from backlight_bridge.translator import ColorTranslator
from backlight_bridge.webserver.model import HealthResponse
from backlight_bridge.webserver.model import WebhookRequest
from pydantic import ValidationError


_logger = logging.getLogger(__name__)


class APIHandler:
    def __init__(self, translator: ColorTranslator, broker_state: BrokerState):
        self._translator = translator
        self._broker_state = broker_state

    async def handle_set_color(self, request: web.Request):
        color = request.match_info["color"]
        color_request = ColorRequest.from_rgb_string(color, request.query.get("rgb"))
        if color_request.is_custom and len(color_request.rgb or []) != 3:
            _logger.error("Invalid custom color: %s", request.query.get("rgb"))
            return web.json_response("not enough parameters", status=400)
        try:
            await self._translator.apply(color_request)
        except PublishError as e:
            _logger.error("Failed to set color %s: %s", color, e)
            return web.json_response(str(e), status=500)
        return web.json_response("done")

    async def handle_webhook(self, request: web.Request):
        _logger.info("Webhook activated")
        try:
            data = WebhookRequest.model_validate_json(await request.read())
        except ValidationError as e:
            _logger.error("Webhook body error: %s", e)
            data = WebhookRequest()
        try:
            await self._translator.apply(
                ColorRequest.from_rgb_string(data.color, data.action),
            )
        except MalformedColorRequest as e:
            _logger.error("Invalid webhook action %r: %s", data.action, e)
            return web.json_response(str(e), status=400)
        except PublishError as e:
            _logger.error("Webhook failed to set color %s: %s", data.color, e)
            return web.json_response(str(e), status=500)
        _logger.info("Webhook succeeded")
        return web.json_response("OK")

    async def handle_health(self, request: web.Request):
        health = HealthResponse(
            status="ok",
            mqtt_connected=bool(self._broker_state.connection_status),
            topic=self._translator.topic,
        )
        return web.json_response(health.model_dump())

    def setup_routes(self, app: web.Application, prefix: str = "/sandbox/api"):
        app.router.add_route("POST", f"{prefix}/set/{{color}}", self.handle_set_color)
        app.router.add_route(
            "GET",
            f"{prefix}/change/{{color}}",
            self.handle_set_color,
        )
        app.router.add_route("POST", f"{prefix}/webhook", self.handle_webhook)
        app.router.add_route("GET", f"{prefix}/health", self.handle_health)
