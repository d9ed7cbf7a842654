"""Server startup for ``perch serve``.

Starts a pounce ASGI server with a live StaticFilter object.
"""

from perch._internal.asgi import ASGIApp


def run_server(app: ASGIApp, host: str, port: int) -> None:
    """Start a single-worker pounce server for *app*.

    Pounce's ``run()`` takes an import string, but ``perch serve`` builds
    the filter at runtime, so ``pounce.Server`` is used directly with the
    ASGI callable.

    Args:
        app: ASGI callable (usually a StaticFilter).
        host: Bind host address.
        port: Bind port number.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(host=host, port=port, workers=1)
    Server(config, app).run()
