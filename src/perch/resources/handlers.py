"""Resource handlers — resolve request paths inside one static source.

A handler is bound to a single base location (a package directory or an
external folder) and a welcome file. ``resolve()`` maps a request path to
a readable resource below that base, or returns ``None``. Not finding
something is an ordinary outcome here, never an exception.

Security: request paths are normalized before joining and any path that
would climb above the base is rejected. External handlers also resolve
symlinks and re-check containment.
"""

from __future__ import annotations

import logging
import posixpath
from enum import StrEnum
from pathlib import Path
from typing import ClassVar

from perch.resources.resource import (
    FileResource,
    PackageResource,
    Resource,
    file_resource,
    package_resource,
)

logger = logging.getLogger("perch.static")

DEFAULT_WELCOME_FILE = "index.html"


class SourceKind(StrEnum):
    """Where a handler reads its bytes from."""

    PACKAGE = "package"
    EXTERNAL = "external"


def clean_path(request_path: str) -> str | None:
    """Normalize *request_path* to a relative path below a base.

    Returns ``""`` for the base itself and ``None`` for anything that
    would escape it::

        clean_path("/css/site.css")      # "css/site.css"
        clean_path("/a/../b.css")        # "b.css"
        clean_path("/../../etc/passwd")  # None
    """
    if "\x00" in request_path or "\\" in request_path:
        return None
    stripped = request_path.lstrip("/")
    if not stripped:
        return ""
    normalized = posixpath.normpath(stripped)
    if normalized == ".":
        return ""
    if normalized == ".." or normalized.startswith(("../", "/")):
        return None
    return normalized


class ResourceHandler:
    """Base class: resolves request paths against one source.

    Subclasses set ``kind`` and implement ``_locate()``. Instances are
    immutable after construction.
    """

    __slots__ = ("_base_path", "_root", "_welcome_file")

    kind: ClassVar[SourceKind]

    def __init__(self, base_path: str, welcome_file: str = DEFAULT_WELCOME_FILE) -> None:
        self._base_path = base_path
        self._welcome_file = welcome_file

    @property
    def base_path(self) -> str:
        return self._base_path

    @property
    def welcome_file(self) -> str:
        return self._welcome_file

    def base_is_dir(self) -> bool:
        """Whether the base location exists and is a directory."""
        try:
            return self._root.is_dir()
        except OSError:
            return False

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._base_path!r}, welcome_file={self._welcome_file!r})"

    def resolve(self, request_path: str) -> Resource | None:
        """Return a readable resource for *request_path*, or ``None``.

        A directory hit is retried against the welcome file.
        """
        relative = clean_path(request_path)
        if relative is None:
            logger.debug("Rejected path outside %s: %r", self._base_path, request_path)
            return None

        try:
            resource = self._locate(relative)
            if resource is None:
                return None
            if resource.is_dir():
                resource = self._contain(resource.child(self._welcome_file))
                if resource is None:
                    return None
            if not resource.is_readable():
                return None
        except (OSError, RuntimeError) as exc:  # RuntimeError: symlink loop before 3.13
            logger.debug("Could not resolve %r in %s: %s", request_path, self._base_path, exc)
            return None
        return resource

    def _locate(self, relative: str) -> Resource | None:
        raise NotImplementedError

    def _contain(self, resource: Resource) -> Resource | None:
        """Re-check a derived resource against the base. Default: accept."""
        return resource


class PackageResourceHandler(ResourceHandler):
    """Serves files bundled inside an importable package.

    *base_path* is a package location such as ``"myapp:public"``.
    """

    __slots__ = ()

    kind = SourceKind.PACKAGE

    def __init__(self, base_path: str, welcome_file: str = DEFAULT_WELCOME_FILE) -> None:
        super().__init__(base_path, welcome_file)
        self._root: PackageResource = package_resource(base_path)

    def _locate(self, relative: str) -> Resource | None:
        resource = self._root
        for segment in relative.split("/") if relative else ():
            resource = resource.child(segment)
        return resource


class DirectoryResourceHandler(ResourceHandler):
    """Serves files from an external directory on disk."""

    __slots__ = ()

    kind = SourceKind.EXTERNAL

    def __init__(self, base_path: str | Path, welcome_file: str = DEFAULT_WELCOME_FILE) -> None:
        super().__init__(str(base_path), welcome_file)
        self._root: FileResource = file_resource(base_path)

    def _locate(self, relative: str) -> Resource | None:
        target = self._root.path / relative if relative else self._root.path
        return self._contain(FileResource(target))

    def _contain(self, resource: Resource) -> Resource | None:
        if not isinstance(resource, FileResource):
            return None
        resolved = resource.path.resolve()
        if not resolved.is_relative_to(self._root.path):
            logger.debug("Rejected symlink escape from %s: %s", self._base_path, resolved)
            return None
        return FileResource(resolved)
