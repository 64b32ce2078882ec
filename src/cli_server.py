"""CLI entry point for the webjars HTTP server.

Serves the generated RequireJS setup next to the webjar assets, so a page
can load ``/webjars/requirejs.js`` and then any module it configures.
"""

from __future__ import annotations

import ipaddress
import logging
import sys
from typing import Any

from constants import ExitCodes

logger = logging.getLogger(__name__)


def _is_local_bind_host(host: str) -> bool:
    """Return True if host is a loopback/local bind target."""
    if not host:
        return False
    host_lower = host.strip().lower()
    if host_lower in ("localhost",):
        return True
    try:
        return ipaddress.ip_address(host_lower).is_loopback
    except ValueError:
        # Non-IP hostnames are treated as non-local unless explicitly allowed.
        return False


def _enforce_local_binding(host: str, allow_external: bool) -> None:
    """Enforce local-only binding unless explicitly allowed."""
    if _is_local_bind_host(host):
        return
    if not allow_external:
        sys.stderr.write(
            "ERROR: Non-local bindings require --allow-external.\n"
        )
        sys.exit(ExitCodes.CONFIG_ERROR.value)
    logger.warning(
        "Binding server to non-local address (%s). Ensure network controls are in place.",
        host,
    )


def run_server(args: Any, settings: Any) -> None:
    """Entry point for the ``serve`` command.

    Args:
        args: Parsed CLI arguments namespace.
        settings: Merged ``settings.Settings``.
    """
    # Lazy import to avoid loading aiohttp for other commands
    from requirejs import RequireJS
    from server import ServerConfig, run_server_sync

    config = ServerConfig.from_settings(settings)
    _enforce_local_binding(config.host, bool(getattr(args, "ALLOW_EXTERNAL", False)))

    requirejs = RequireJS.from_settings(settings)
    webjars = requirejs.webjars()
    logger.info("Found %d webjar(s) on the classpath", len(webjars))

    print(
        f"\n"
        f"  WebJars RequireJS Server\n"
        f"  ========================\n"
        f"  Listening: http://{config.host}:{config.port}{config.mount}\n"
        f"  Setup script: http://{config.host}:{config.port}{config.url_prefix}requirejs.js\n"
        f"\n"
        f"  Press Ctrl+C to stop\n"
    )

    try:
        run_server_sync(requirejs, config)
    finally:
        requirejs.close()
