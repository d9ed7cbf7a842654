"""Static asset dispatch — serve the first matching resource, or decline.

The dispatcher walks the registry in priority order. The first handler
that resolves the request path wins: its bytes are streamed to the client
and the request is *consumed*. When nothing matches the caller carries on
with dynamic routing.
"""

from perch._internal.asgi import Send
from perch.http.content_types import content_type_for
from perch.http.request import Request
from perch.server.sender import DEFAULT_CHUNK_SIZE, send_resource
from perch.staticfiles.registry import StaticResourceRegistry

# Methods the static layer answers; everything else falls through.
SERVED_METHODS = frozenset({"GET", "HEAD"})


class StaticAssetDispatcher:
    """Serves registered static resources ahead of the route matcher.

    Stateless between requests: the registry is the only shared state and
    is only read here.
    """

    __slots__ = ("_chunk_size", "_registry")

    def __init__(
        self,
        registry: StaticResourceRegistry,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        self._registry = registry
        self._chunk_size = chunk_size

    @property
    def registry(self) -> StaticResourceRegistry:
        return self._registry

    async def dispatch(self, request: Request, send: Send) -> bool:
        """Serve *request* from the first matching handler.

        Returns True when the response has been sent. The content type
        comes from the request path, not the resolved file, so a welcome
        file served for ``/`` goes out without one. I/O errors while
        streaming propagate to the caller.
        """
        if request.method not in SERVED_METHODS:
            return False

        handlers = self._registry.handlers()
        if handlers is None:
            return False

        for handler in handlers:
            resource = handler.resolve(request.path)
            if resource is None:
                continue
            await send_resource(
                resource,
                send,
                content_type=content_type_for(request.path),
                chunk_size=self._chunk_size,
                include_body=request.method != "HEAD",
            )
            return True
        return False
