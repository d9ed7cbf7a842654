"""Resource handles for the two static sources.

``PackageResource`` reads data bundled inside an installed Python package
(via ``importlib.resources``). ``FileResource`` reads from an external
directory on disk. Both expose the same small surface so handlers and the
dispatcher never care which one they hold.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from importlib.resources import files
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import BinaryIO, Protocol


class Resource(Protocol):
    """A resolvable location inside a static source."""

    @property
    def name(self) -> str: ...

    def is_dir(self) -> bool: ...

    def is_readable(self) -> bool: ...

    def child(self, name: str) -> Resource: ...

    def open(self) -> BinaryIO: ...


@dataclass(frozen=True, slots=True)
class FileResource:
    """A file or directory on the local filesystem."""

    path: Path

    @property
    def name(self) -> str:
        return str(self.path)

    def is_dir(self) -> bool:
        return self.path.is_dir()

    def is_readable(self) -> bool:
        return self.path.is_file() and os.access(self.path, os.R_OK)

    def child(self, name: str) -> FileResource:
        return FileResource(self.path / name)

    def open(self) -> BinaryIO:
        return self.path.open("rb")


@dataclass(frozen=True, slots=True)
class PackageResource:
    """A file or directory bundled inside an importable package."""

    traversable: Traversable
    location: str

    @property
    def name(self) -> str:
        return self.location

    def is_dir(self) -> bool:
        return self.traversable.is_dir()

    def is_readable(self) -> bool:
        return self.traversable.is_file()

    def child(self, name: str) -> PackageResource:
        return PackageResource(self.traversable.joinpath(name), f"{self.location}/{name}")

    def open(self) -> BinaryIO:
        return self.traversable.open("rb")


def split_package_location(location: str) -> tuple[str, str]:
    """Split a package location into ``(package, subpath)``.

    Accepts ``"pkg"``, ``"pkg:public"``, ``"pkg.sub:assets/web"`` and the
    slash form ``"pkg/public"`` where the first segment names the package::

        split_package_location("myapp:public")   # ("myapp", "public")
        split_package_location("/myapp/public")  # ("myapp", "public")
    """
    location = location.strip()
    if ":" in location:
        package, _, subpath = location.partition(":")
    else:
        package, _, subpath = location.lstrip("/").partition("/")
    return package.strip(), subpath.strip("/")


def package_resource(location: str) -> PackageResource:
    """Open the bundled directory named by *location*.

    Raises:
        ModuleNotFoundError: If the package cannot be imported.
        ValueError: If *location* names no package.
    """
    package, subpath = split_package_location(location)
    if not package:
        msg = f"Package location {location!r} does not name a package"
        raise ValueError(msg)
    root = files(package)
    traversable = root.joinpath(subpath) if subpath else root
    return PackageResource(traversable, location)


def file_resource(folder: str | Path) -> FileResource:
    """Open the external directory *folder* (``~`` is expanded)."""
    return FileResource(Path(folder).expanduser().resolve())
