"""HTTP surface serving the RequireJS setup and webjar assets using aiohttp."""

from __future__ import annotations

import asyncio
import logging
import mimetypes
import signal
from dataclasses import dataclass
from typing import Any, Optional

from aiohttp import web

from constants import Constants
from requirejs import RequireJS

logger = logging.getLogger(__name__)

_JAVASCRIPT_CONTENT_TYPE = "application/javascript"


@dataclass
class ServerConfig:
    """Configuration for the webjars server."""

    host: str = Constants.SERVER_HOST
    port: int = Constants.SERVER_PORT
    mount: str = Constants.SERVER_MOUNT
    cdn_prefix: Optional[str] = None
    include_version: bool = True

    @property
    def url_prefix(self) -> str:
        """Local URL prefix handed to the RequireJS config."""
        return self.mount.rstrip("/") + "/"

    @classmethod
    def from_settings(cls, settings: Any) -> "ServerConfig":
        return cls(
            host=settings.host,
            port=settings.port,
            cdn_prefix=settings.cdn_prefix,
            include_version=settings.include_version,
        )


class WebJarsServer:
    """Serves ``requirejs.js``/``requirejs.json`` and the webjar files under one mount.

    Resolution is blocking (file and archive reads), so it runs in the
    loop's default executor; the result is cached by ``RequireJS``.
    """

    def __init__(self, requirejs: RequireJS, config: ServerConfig):
        self._requirejs = requirejs
        self._config = config
        self._app: Optional[web.Application] = None
        self._runner: Optional[web.AppRunner] = None

    def _create_app(self) -> web.Application:
        """Create the aiohttp application."""
        mount = self._config.mount.rstrip("/")
        app = web.Application()
        app.router.add_get("/_webjars/health", self._health_check)
        app.router.add_get(f"{mount}/requirejs.js", self._setup_javascript)
        app.router.add_get(f"{mount}/requirejs.json", self._setup_json)
        app.router.add_get(mount + "/{path:.+}", self._static_resource)
        app.on_startup.append(self._on_startup)
        app.on_cleanup.append(self._on_cleanup)
        return app

    async def _health_check(self, request: web.Request) -> web.Response:
        """Health check endpoint."""
        return web.json_response({
            "status": "ok",
            "cached": len(self._requirejs.cache),
        })

    async def _on_startup(self, app: web.Application) -> None:
        logger.info("Webjars server starting on %s:%s", self._config.host, self._config.port)

    async def _on_cleanup(self, app: web.Application) -> None:
        logger.info("Webjars server stopped")

    async def _setup_javascript(self, request: web.Request) -> web.Response:
        loop = asyncio.get_running_loop()
        script = await loop.run_in_executor(
            None, self._requirejs.setup_javascript,
            self._config.url_prefix, self._config.cdn_prefix, self._config.include_version,
        )
        return web.Response(text=script, content_type=_JAVASCRIPT_CONTENT_TYPE)

    async def _setup_json(self, request: web.Request) -> web.Response:
        loop = asyncio.get_running_loop()
        configs = await loop.run_in_executor(
            None, self._requirejs.setup_json,
            self._config.url_prefix, self._config.cdn_prefix, self._config.include_version,
        )
        return web.json_response(configs)

    async def _static_resource(self, request: web.Request) -> web.Response:
        """Serve a file from ``META-INF/resources/webjars`` on the classpath."""
        relative = request.match_info["path"]
        resource = f"{Constants.WEBJARS_PATH_PREFIX}/{relative}"
        loop = asyncio.get_running_loop()
        data = await loop.run_in_executor(None, self._requirejs.store.read_bytes, resource)
        if data is None:
            raise web.HTTPNotFound(text=f"No webjar resource: {relative}")
        content_type, _ = mimetypes.guess_type(relative)
        if relative.endswith(".js"):
            content_type = _JAVASCRIPT_CONTENT_TYPE
        return web.Response(body=data, content_type=content_type or "application/octet-stream")

    async def start(self) -> None:
        """Start the server."""
        self._app = self._create_app()
        self._runner = web.AppRunner(self._app)
        await self._runner.setup()

        site = web.TCPSite(self._runner, self._config.host, self._config.port)
        await site.start()

        logger.info(
            "Webjars server listening on http://%s:%s%s",
            self._config.host, self._config.port, self._config.mount,
        )
        if self._config.cdn_prefix:
            logger.info("CDN prefix: %s", self._config.cdn_prefix)

    async def stop(self) -> None:
        """Stop the server."""
        if self._runner:
            await self._runner.cleanup()
            self._runner = None
            self._app = None


def run_server_sync(requirejs: RequireJS, config: ServerConfig) -> None:
    """Run the server until SIGTERM or SIGINT."""
    server = WebJarsServer(requirejs, config)
    loop = asyncio.new_event_loop()

    async def run():
        await server.start()
        stop_event = asyncio.Event()
        running_loop = asyncio.get_running_loop()
        for sig in (signal.SIGTERM, signal.SIGINT):
            running_loop.add_signal_handler(sig, stop_event.set)
        await stop_event.wait()
        logger.info("Shutdown signal received, stopping...")
        await server.stop()

    try:
        loop.run_until_complete(run())
    except KeyboardInterrupt:
        # signal handlers are unavailable on Windows
        loop.run_until_complete(server.stop())
    finally:
        loop.close()
        logger.info("Webjars server shutdown complete")
