"""Static resource registry — ordered handlers, configured once per source.

Holds at most one package-bundle handler and at most one external
directory handler. Insertion order is priority order: the dispatcher
scans from the first entry and stops at the first hit.

Configuration problems never raise. A missing, empty, or non-directory
location is logged and the call is a no-op, so the app keeps running
without that source.

Thread safety:
    Configuration normally happens once at startup, but several filter
    instances may start concurrently. The configured-check and the append
    happen under one ``threading.Lock``. Reads take a snapshot tuple and
    need no lock.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from pathlib import Path

from perch.resources.handlers import (
    DEFAULT_WELCOME_FILE,
    DirectoryResourceHandler,
    PackageResourceHandler,
    ResourceHandler,
    SourceKind,
)

logger = logging.getLogger("perch.static")

_HANDLER_TYPES: dict[SourceKind, type[ResourceHandler]] = {
    SourceKind.PACKAGE: PackageResourceHandler,
    SourceKind.EXTERNAL: DirectoryResourceHandler,
}


class StaticResourceRegistry:
    """Ordered, explicitly owned set of static resource handlers.

    Usage::

        registry = StaticResourceRegistry()
        registry.configure_static_resources("myapp:public")
        registry.configure_external_static_resources("/srv/uploads")

        dispatcher = StaticAssetDispatcher(registry)
    """

    __slots__ = ("_configured", "_handlers", "_lock", "_welcome_file")

    def __init__(self, *, welcome_file: str = DEFAULT_WELCOME_FILE) -> None:
        self._welcome_file = welcome_file
        self._handlers: tuple[ResourceHandler, ...] = ()
        self._configured: set[SourceKind] = set()
        self._lock = threading.Lock()

    # -- Configuration --

    def configure(self, kind: SourceKind | str, base_path: str | Path | None) -> bool:
        """Register a handler for *kind* rooted at *base_path*.

        Returns True when a handler was added. Each kind can be configured
        once; later calls are ignored until ``clear()``.
        """
        kind = SourceKind(kind)
        if base_path is None or not str(base_path).strip():
            logger.error("%s static resource location must not be empty", kind.capitalize())
            return False

        with self._lock:
            if kind in self._configured:
                logger.debug(
                    "%s static resources already configured, ignoring %s",
                    kind.capitalize(),
                    base_path,
                )
                return False

            try:
                handler = _HANDLER_TYPES[kind](base_path, self._welcome_file)
            except (ImportError, TypeError, ValueError, OSError) as exc:
                logger.error("Error when creating %s static resource handler: %s", kind, exc)
                self._configured.add(kind)
                return False

            if not handler.base_is_dir():
                logger.error("%s static resource location must be a folder: %s", kind.capitalize(), base_path)
                return False

            self._handlers = (*self._handlers, handler)
            self._configured.add(kind)

        logger.info("%s static resource handler configured with folder = %s", kind.capitalize(), base_path)
        return True

    def configure_static_resources(self, location: str | None) -> bool:
        """Serve files bundled in a package, e.g. ``"myapp:public"``."""
        return self.configure(SourceKind.PACKAGE, location)

    def configure_external_static_resources(self, folder: str | Path | None) -> bool:
        """Serve files from a directory outside the package."""
        return self.configure(SourceKind.EXTERNAL, folder)

    def clear(self) -> None:
        """Drop every handler and forget which kinds were configured."""
        with self._lock:
            self._handlers = ()
            self._configured.clear()

    # -- Lookup --

    def handlers(self) -> tuple[ResourceHandler, ...] | None:
        """The handlers in priority order, or ``None`` if none are configured."""
        return self._handlers or None

    def is_configured(self, kind: SourceKind | str) -> bool:
        return SourceKind(kind) in self._configured

    def __iter__(self) -> Iterator[ResourceHandler]:
        return iter(self._handlers)

    def __len__(self) -> int:
        return len(self._handlers)

    def __repr__(self) -> str:
        return f"StaticResourceRegistry({list(self._handlers)!r})"
