"""Serve a router with pounce.

Pounce's ``run()`` takes an import string, but a router is a live object,
so ``pounce.Server`` is driven directly with the ASGI callable.
"""

from __future__ import annotations

import logging

logger = logging.getLogger("perch.server")


def run_server(
    app: object,
    host: str,
    port: int,
    *,
    reload: bool = False,
) -> None:
    """Start a single-worker pounce server for *app*.

    Raises ``ConfigurationError`` when pounce is not installed.
    """
    try:
        from pounce.config import ServerConfig
        from pounce.server import Server
    except ImportError as exc:
        from perch.errors import ConfigurationError

        msg = "Router.run() requires pounce: pip install perch[server]"
        raise ConfigurationError(msg) from exc

    logger.info("serving %r on http://%s:%d", app, host, port)
    config = ServerConfig(host=host, port=port, workers=1, reload=reload)
    Server(config, app).run()
