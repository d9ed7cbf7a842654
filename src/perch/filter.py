"""Static filter — the ASGI front controller.

Wraps a dynamic application. Every HTTP request is first rewritten so the
path is relative to the filter's mount path, then offered to the static
asset dispatcher. Anything it declines goes to the route matcher, then to
the downstream ASGI app, and finally gets a plain 404.

The inbound ASGI scope is never modified: downstream consumers receive a
copy carrying the effective path.
"""

from __future__ import annotations

import logging
from typing import Any

import anyio

from perch._internal.asgi import ASGIApp, Receive, Scope, Send, shadow_scope
from perch.application import Application, RouteMatcher, call_hook, resolve_application
from perch.config import FilterConfig
from perch.errors import ApplicationError, ConfigurationError
from perch.http.paths import relative_path
from perch.http.request import Request
from perch.http.response import not_found
from perch.server.sender import send_response
from perch.staticfiles.dispatcher import StaticAssetDispatcher
from perch.staticfiles.registry import StaticResourceRegistry

logger = logging.getLogger("perch.filter")


class StaticFilter:
    """ASGI application serving static resources ahead of a dynamic app.

    Usage::

        registry = StaticResourceRegistry()
        static = StaticFilter(
            FilterConfig(mount_path="/app", static_resources="myapp:public"),
            registry=registry,
            app=downstream_asgi_app,
        )

    Startup (static configuration and ``Application.init()``) runs on the
    ASGI lifespan startup event, or on the first request when the server
    does not speak lifespan.
    """

    __slots__ = (
        "_app",
        "_application",
        "_config",
        "_dispatcher",
        "_registry",
        "_route_matcher",
        "_start_lock",
        "_started",
    )

    def __init__(
        self,
        config: FilterConfig | None = None,
        *,
        registry: StaticResourceRegistry | None = None,
        application: Application | None = None,
        route_matcher: RouteMatcher | None = None,
        app: ASGIApp | None = None,
    ) -> None:
        self._config: FilterConfig = config or FilterConfig()
        self._registry: StaticResourceRegistry = registry or StaticResourceRegistry(
            welcome_file=self._config.welcome_file
        )
        self._dispatcher = StaticAssetDispatcher(self._registry, chunk_size=self._config.chunk_size)
        self._application: Application | None = application
        self._route_matcher: RouteMatcher | None = route_matcher
        self._app: ASGIApp | None = app
        self._started: bool = False
        self._start_lock: anyio.Lock | None = None  # Created lazily on first use

    @property
    def config(self) -> FilterConfig:
        return self._config

    @property
    def registry(self) -> StaticResourceRegistry:
        return self._registry

    @property
    def dispatcher(self) -> StaticAssetDispatcher:
        return self._dispatcher

    @property
    def application(self) -> Application | None:
        return self._application

    @property
    def started(self) -> bool:
        return self._started

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        if scope["type"] == "websocket":
            if self._app is not None:
                await self._app(self._mounted_scope(scope), receive, send)
            return

        if scope["type"] != "http":
            if self._app is not None:
                await self._app(scope, receive, send)
            return

        await self._ensure_started()
        await self.handle(scope, receive, send)

    async def handle(self, scope: Scope, receive: Receive, send: Send) -> None:
        """Process a single HTTP request through static, routing, downstream."""
        request = Request.from_asgi(scope, receive)
        path = relative_path(request.path, request.root_path, self._config.filter_path)
        logger.debug("%s %s -> %s", request.method, request.original_path, path)
        request = request.with_path(path)

        if await self._dispatcher.dispatch(request, send):
            return

        if self._route_matcher is not None and await self._route_matcher.handle(request, send):
            return

        if self._app is not None:
            await self._app(request.scope, request.receive, send)
            return

        await send_response(not_found(), send)

    def _mounted_scope(self, scope: Scope) -> dict[str, Any]:
        """Copy of a websocket scope carrying the mount-relative path."""
        path = relative_path(scope.get("path") or "/", scope.get("root_path", ""), self._config.filter_path)
        return shadow_scope(scope, path)

    # -- Lifecycle --

    async def start(self) -> None:
        """Configure static sources and initialize the application.

        Raises:
            ConfigurationError: If the config is invalid or the application
                cannot be resolved.
            ApplicationError: If ``Application.init()`` fails.
        """
        config = self._config
        config.validate()

        if self._application is None and config.application:
            try:
                self._application = resolve_application(config.application)
            except (ImportError, AttributeError, TypeError) as exc:
                msg = f"Cannot load application {config.application!r}: {exc}"
                raise ConfigurationError(msg) from exc

        if self._route_matcher is None and isinstance(self._application, RouteMatcher):
            self._route_matcher = self._application

        if config.static_resources:
            self._registry.configure_static_resources(config.static_resources)
        if config.external_static_resources:
            self._registry.configure_external_static_resources(config.external_static_resources)

        if self._application is not None:
            try:
                await call_hook(self._application.init)
            except Exception as exc:
                msg = f"Application init() failed: {exc}"
                raise ApplicationError(msg) from exc

        self._started = True
        logger.info("Static filter started (mount path %r)", config.filter_path or "/")

    async def stop(self) -> None:
        """Run ``Application.destroy()`` if the filter was started."""
        if not self._started:
            return
        self._started = False
        if self._application is not None:
            await call_hook(self._application.destroy)

    async def _ensure_started(self) -> None:
        """Start once, even when several requests arrive before lifespan."""
        if self._started:
            return
        if self._start_lock is None:
            self._start_lock = anyio.Lock()
        async with self._start_lock:
            if self._started:
                return
            await self.start()

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        The downstream app's own lifespan is not forwarded.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await self._ensure_started()
                except Exception as exc:
                    logger.exception("Static filter failed to start")
                    await send(
                        {
                            "type": "lifespan.startup.failed",
                            "message": str(exc),
                        }
                    )
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await self.stop()
                await send({"type": "lifespan.shutdown.complete"})
                return
