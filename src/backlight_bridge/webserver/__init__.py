import logging

from aiohttp import web
from backlight_bridge.models.config import HttpConfig
from backlight_bridge.models.state import BrokerState
from backlight_bridge.translator import ColorTranslator
from backlight_bridge.webserver.api import APIHandler
from backlight_bridge.webserver.cors import cors_middleware

_logger = logging.getLogger(__name__)


class WebServer:
    def __init__(
        self,
        translator: ColorTranslator,
        broker_state: BrokerState,
        config: HttpConfig,
    ):
        self._host = config.bind_address
        self._port = config.bind_port
        self._prefix = config.prefix.rstrip("/")
        self._translator = translator
        self._broker_state = broker_state
        self._runner: web.AppRunner | None = None
        self._running = False
        self.app = web.Application(middlewares=[cors_middleware()])
        self._setup_handlers()
        self._setup_routes()

    def _setup_handlers(self):
        self.api_handler = APIHandler(self._translator, self._broker_state)

    def _setup_routes(self):
        self.api_handler.setup_routes(self.app, self._prefix)

    async def process(self):  # pragma: no cover
        try:
            self._runner = web.AppRunner(self.app, access_log=None)
            await self._runner.setup()
            _logger.info("WebServer setup complete")
            site = web.TCPSite(self._runner, self._host, self._port)
            _logger.debug("Starting WebServer at http://%s:%s", self._host, self._port)
            await site.start()
            _logger.info("LISTENING ON %s:%s", self._host, self._port)
            self._running = True
        except OSError as e:
            _logger.error("Error starting WebServer: %s", e)
            self._running = False
            raise

    async def stop(self):  # pragma: no cover
        if self._runner is not None:
            await self._runner.cleanup()
        self._running = False
        _logger.info("WebServer stopped")

    @property
    def running(self) -> bool:
        return self._running
