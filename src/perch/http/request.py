"""Immutable per-request view.

The filter never edits the inbound ASGI scope. Instead it builds a frozen
``Request`` carrying the effective (mount-relative) path, together with a
copied scope for anything downstream that speaks raw ASGI.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from perch._internal.asgi import Receive, Scope, shadow_scope


@dataclass(frozen=True, slots=True)
class Request:
    """An immutable HTTP request as seen by perch.

    ``path`` and ``request_uri`` both hold the effective path used for
    resource resolution, content-type inference, and routing.
    ``original_path`` is the path the client sent, before any mount
    prefix was stripped.
    """

    method: str
    path: str
    request_uri: str
    original_path: str
    query_string: bytes
    root_path: str

    # Private: ASGI plumbing for downstream consumers
    _scope: Scope = field(repr=False, compare=False)
    _receive: Receive = field(repr=False, compare=False)

    @property
    def scope(self) -> dict[str, Any]:
        """A copy of the ASGI scope reporting the effective path."""
        return shadow_scope(self._scope, self.path)

    @property
    def receive(self) -> Receive:
        return self._receive

    def with_path(self, path: str) -> Request:
        """Return a new Request whose path, request URI, and downstream
        scope all report *path*.
        """
        return replace(self, path=path, request_uri=path)

    # -- Factory --

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Create a Request from an ASGI scope and receive callable."""
        path = scope.get("path") or "/"
        return cls(
            method=scope.get("method", "GET").upper(),
            path=path,
            request_uri=path,
            original_path=path,
            query_string=scope.get("query_string", b""),
            root_path=scope.get("root_path", ""),
            _scope=scope,
            _receive=receive,
        )
