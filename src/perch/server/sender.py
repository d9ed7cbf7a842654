"""ASGI response sending — translates perch responses to ASGI messages.

Handles the filter's own single-body replies and the chunked streaming
of static resources.
"""

import logging

import anyio.to_thread

from perch._internal.asgi import Send
from perch.http.response import Response
from perch.resources.resource import Resource

logger = logging.getLogger("perch.server")

DEFAULT_CHUNK_SIZE = 64 * 1024


def _start_message(status: int, headers: list[tuple[bytes, bytes]]) -> dict[str, object]:
    return {
        "type": "http.response.start",
        "status": status,
        "headers": headers,
    }


async def send_response(response: Response, send: Send) -> None:
    """Translate a perch Response into ASGI send() calls."""
    raw_headers: list[tuple[bytes, bytes]] = []
    if response.content_type is not None:
        raw_headers.append((b"content-type", response.content_type.encode("latin-1")))
    for name, value in response.headers:
        raw_headers.append((name.lower().encode("latin-1"), value.encode("latin-1")))

    body = response.body_bytes
    raw_headers.append((b"content-length", str(len(body)).encode("latin-1")))

    await send(_start_message(response.status, raw_headers))
    await send({"type": "http.response.body", "body": body})


async def send_resource(
    resource: Resource,
    send: Send,
    *,
    content_type: str | None = None,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
    include_body: bool = True,
) -> None:
    """Stream *resource* to the client as a 200 response.

    The Content-Type header is only sent when *content_type* is given.
    Blocking opens and reads run in a worker thread. The stream is closed
    on every exit path; a failure mid-copy propagates and leaves the
    response truncated.
    """
    raw_headers: list[tuple[bytes, bytes]] = []
    if content_type is not None:
        raw_headers.append((b"content-type", content_type.encode("latin-1")))

    stream = await anyio.to_thread.run_sync(resource.open)
    with stream:
        await send(_start_message(200, raw_headers))
        if include_body:
            while chunk := await anyio.to_thread.run_sync(stream.read, chunk_size):
                await send(
                    {
                        "type": "http.response.body",
                        "body": chunk,
                        "more_body": True,
                    }
                )

    # End of body
    await send(
        {
            "type": "http.response.body",
            "body": b"",
            "more_body": False,
        }
    )
    logger.debug("Served %s", resource.name)
