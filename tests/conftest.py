"""Shared fixtures: an external static directory and a bundled package."""

import importlib
import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

from perch.staticfiles.registry import StaticResourceRegistry

BUNDLE_PACKAGE = "perch_test_bundle"


@pytest.fixture(scope="session")
def bundle_package(tmp_path_factory: pytest.TempPathFactory) -> Iterator[str]:
    """Create an importable package with bundled static files.

    Layout::

        perch_test_bundle/
            __init__.py
            secret.txt
            notes.txt
            public/
                index.html
                shared.css
                logo.PNG
                css/site.css
                docs/index.html
                empty/
    """
    root = tmp_path_factory.mktemp("bundles")
    package = root / BUNDLE_PACKAGE
    public = package / "public"
    (public / "css").mkdir(parents=True)
    (public / "docs").mkdir()
    (public / "empty").mkdir()

    (package / "__init__.py").write_text("")
    (package / "secret.txt").write_text("outside public")
    (package / "notes.txt").write_text("not a folder")
    (public / "index.html").write_text("<h1>Bundled</h1>")
    (public / "shared.css").write_text("/* bundled */")
    (public / "logo.PNG").write_bytes(b"\x89PNG\r\n\x1a\n")
    (public / "css" / "site.css").write_text("body { color: blue; }")
    (public / "docs" / "index.html").write_text("<h1>Bundled docs</h1>")

    sys.path.insert(0, str(root))
    importlib.invalidate_caches()
    yield BUNDLE_PACKAGE
    sys.path.remove(str(root))
    sys.modules.pop(BUNDLE_PACKAGE, None)


@pytest.fixture
def static_dir(tmp_path: Path) -> Path:
    """Create an external static directory next to a file it must not expose."""
    static = tmp_path / "static"
    static.mkdir()

    (static / "style.css").write_text("body { color: red; }")
    (static / "app.js").write_text("console.log('hello');")
    (static / "image.png").write_bytes(b"\x89PNG\r\n\x1a\n")
    (static / "data.bin").write_bytes(b"\x00\x01\x02\x03")
    (static / "index.html").write_text("<h1>Home</h1>")
    (static / "shared.css").write_text("/* external */")

    sub = static / "css"
    sub.mkdir()
    (sub / "main.css").write_text("h1 { font-size: 2em; }")

    docs = static / "docs"
    docs.mkdir()
    (docs / "index.html").write_text("<h1>Docs</h1>")

    (static / "empty").mkdir()

    (tmp_path / "secret.txt").write_text("top secret")
    return static


@pytest.fixture
def registry() -> StaticResourceRegistry:
    return StaticResourceRegistry()
