"""Typed ASGI definitions.

Aliases for the raw ASGI callables plus helpers for building the
per-request scope copy handed to downstream consumers.
"""

from collections.abc import Awaitable, Callable, MutableMapping
from typing import Any, TypeAlias
from urllib.parse import quote

# Raw ASGI 3.0 callables
Scope: TypeAlias = MutableMapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[MutableMapping[str, Any]]]
Send: TypeAlias = Callable[[MutableMapping[str, Any]], Awaitable[None]]
ASGIApp: TypeAlias = Callable[[Scope, Receive, Send], Awaitable[None]]


def shadow_scope(scope: Scope, path: str) -> dict[str, Any]:
    """Return a shallow copy of *scope* that reports *path* as its path.

    Both ``path`` and ``raw_path`` are overridden. The inbound scope is
    left untouched so the server's own view of the request is unchanged.
    """
    shadowed = dict(scope)
    shadowed["path"] = path
    shadowed["raw_path"] = _shadow_raw_path(scope, path)
    return shadowed


def _shadow_raw_path(scope: Scope, path: str) -> bytes:
    """Strip the same prefix from the inbound ``raw_path`` bytes.

    The server's percent-encoding is kept as sent. When the inbound
    ``raw_path`` is missing or does not start with the encoded prefix,
    *path* is percent-encoded instead.
    """
    raw = scope.get("raw_path")
    full = scope.get("path") or "/"
    if raw:
        if full.endswith(path):
            prefix = full[: len(full) - len(path)]
        elif path == "/":
            prefix = full
        else:
            prefix = None
        if prefix is not None:
            encoded = quote(prefix).encode("ascii")
            if raw.startswith(encoded):
                rest = raw[len(encoded) :]
                if not rest:
                    return b"/"
                if rest.startswith(b"/"):
                    return rest
    return quote(path).encode("ascii")
