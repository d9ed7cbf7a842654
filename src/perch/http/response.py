"""Immutable HTTP response value.

Used for the filter's own fallback replies and for responses captured
by the test client.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Response:
    """An immutable HTTP response.

    ``content_type`` may be ``None``: static resources with an unknown
    extension are sent without a Content-Type header.
    """

    body: str | bytes = b""
    status: int = 200
    content_type: str | None = "text/plain; charset=utf-8"
    headers: tuple[tuple[str, str], ...] = ()

    # -- Body helpers --

    @property
    def body_bytes(self) -> bytes:
        """Body as bytes."""
        if isinstance(self.body, str):
            return self.body.encode("utf-8")
        return self.body

    @property
    def text(self) -> str:
        """Body as string."""
        if isinstance(self.body, bytes):
            return self.body.decode("utf-8")
        return self.body


def not_found() -> Response:
    """The filter's reply when nothing downstream handled the request."""
    return Response(body="Not Found", status=404)
