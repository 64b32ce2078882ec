"""HTTP server for RequireJS setup and webjar assets."""

from .app import ServerConfig, WebJarsServer, run_server_sync

__all__ = ["ServerConfig", "WebJarsServer", "run_server_sync"]
