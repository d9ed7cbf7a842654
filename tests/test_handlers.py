"""Tests for perch.resources — handlers, resources, path cleaning."""

import os
from pathlib import Path

import pytest

from perch.resources.handlers import (
    DirectoryResourceHandler,
    PackageResourceHandler,
    SourceKind,
    clean_path,
)
from perch.resources.resource import FileResource, PackageResource, split_package_location


def _read(resource: object) -> bytes:
    with resource.open() as stream:  # type: ignore[attr-defined]
        return stream.read()


class TestCleanPath:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("/", ""),
            ("", ""),
            ("/css/site.css", "css/site.css"),
            ("//css//site.css", "css/site.css"),
            ("/a/../b.css", "b.css"),
            ("/./index.html", "index.html"),
            ("/docs/", "docs"),
        ],
    )
    def test_normalizes(self, raw: str, expected: str) -> None:
        assert clean_path(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        [
            "/../../etc/passwd",
            "../secret.txt",
            "/a/../../b",
            "/..",
            "/css/..\\..\\secret.txt",
            "/index.html\x00.css",
        ],
    )
    def test_rejects_escapes(self, raw: str) -> None:
        assert clean_path(raw) is None


class TestDirectoryResourceHandler:
    def test_kind(self, static_dir: Path) -> None:
        assert DirectoryResourceHandler(static_dir).kind is SourceKind.EXTERNAL

    def test_resolves_file(self, static_dir: Path) -> None:
        handler = DirectoryResourceHandler(static_dir)
        resource = handler.resolve("/style.css")
        assert isinstance(resource, FileResource)
        assert _read(resource) == b"body { color: red; }"

    def test_resolves_nested_file(self, static_dir: Path) -> None:
        resource = DirectoryResourceHandler(static_dir).resolve("/css/main.css")
        assert resource is not None
        assert _read(resource) == b"h1 { font-size: 2em; }"

    def test_root_serves_welcome_file(self, static_dir: Path) -> None:
        resource = DirectoryResourceHandler(static_dir).resolve("/")
        assert resource is not None
        assert _read(resource) == b"<h1>Home</h1>"

    def test_subdirectory_serves_welcome_file(self, static_dir: Path) -> None:
        handler = DirectoryResourceHandler(static_dir)
        for path in ("/docs", "/docs/"):
            resource = handler.resolve(path)
            assert resource is not None
            assert _read(resource) == b"<h1>Docs</h1>"

    def test_custom_welcome_file(self, static_dir: Path) -> None:
        (static_dir / "docs" / "default.htm").write_text("default")
        handler = DirectoryResourceHandler(static_dir, welcome_file="default.htm")
        resource = handler.resolve("/docs/")
        assert resource is not None
        assert _read(resource) == b"default"

    def test_directory_without_welcome_file(self, static_dir: Path) -> None:
        assert DirectoryResourceHandler(static_dir).resolve("/empty") is None

    def test_missing_file(self, static_dir: Path) -> None:
        assert DirectoryResourceHandler(static_dir).resolve("/nope.css") is None

    def test_traversal_is_not_found(self, static_dir: Path) -> None:
        handler = DirectoryResourceHandler(static_dir)
        assert handler.resolve("/../secret.txt") is None
        assert handler.resolve("../../etc/passwd") is None
        assert handler.resolve("/css/../../secret.txt") is None

    def test_symlink_escape_is_not_found(self, static_dir: Path) -> None:
        link = static_dir / "leak.txt"
        os.symlink(static_dir.parent / "secret.txt", link)
        assert DirectoryResourceHandler(static_dir).resolve("/leak.txt") is None

    @pytest.mark.skipif(os.geteuid() == 0, reason="root can read any file")
    def test_unreadable_file(self, static_dir: Path) -> None:
        target = static_dir / "locked.css"
        target.write_text("locked")
        target.chmod(0)
        try:
            assert DirectoryResourceHandler(static_dir).resolve("/locked.css") is None
        finally:
            target.chmod(0o644)

    def test_overlong_name_is_not_found(self, static_dir: Path) -> None:
        assert DirectoryResourceHandler(static_dir).resolve("/" + "a" * 5000) is None

    def test_base_is_dir(self, static_dir: Path) -> None:
        assert DirectoryResourceHandler(static_dir).base_is_dir() is True
        assert DirectoryResourceHandler(static_dir / "style.css").base_is_dir() is False
        assert DirectoryResourceHandler(static_dir / "missing").base_is_dir() is False

    def test_expands_user(self, static_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HOME", str(static_dir.parent))
        handler = DirectoryResourceHandler("~/static")
        assert handler.resolve("/style.css") is not None

    def test_rejects_non_file_resource(self, static_dir: Path, bundle_package: str) -> None:
        handler = DirectoryResourceHandler(static_dir)
        foreign = PackageResourceHandler(f"{bundle_package}:public").resolve("/")
        assert foreign is not None
        assert handler._contain(foreign) is None

    def test_repr(self, static_dir: Path) -> None:
        assert "DirectoryResourceHandler" in repr(DirectoryResourceHandler(static_dir))


class TestPackageResourceHandler:
    def test_kind(self, bundle_package: str) -> None:
        assert PackageResourceHandler(f"{bundle_package}:public").kind is SourceKind.PACKAGE

    def test_root_serves_welcome_file(self, bundle_package: str) -> None:
        resource = PackageResourceHandler(f"{bundle_package}:public").resolve("/")
        assert isinstance(resource, PackageResource)
        assert resource.name == f"{bundle_package}:public/index.html"
        assert _read(resource) == b"<h1>Bundled</h1>"

    def test_resolves_nested_file(self, bundle_package: str) -> None:
        resource = PackageResourceHandler(f"{bundle_package}:public").resolve("/css/site.css")
        assert resource is not None
        assert _read(resource) == b"body { color: blue; }"

    def test_subdirectory_serves_welcome_file(self, bundle_package: str) -> None:
        resource = PackageResourceHandler(f"{bundle_package}:public").resolve("/docs")
        assert resource is not None
        assert _read(resource) == b"<h1>Bundled docs</h1>"

    def test_slash_location_form(self, bundle_package: str) -> None:
        resource = PackageResourceHandler(f"/{bundle_package}/public").resolve("/css/site.css")
        assert resource is not None

    def test_missing_file(self, bundle_package: str) -> None:
        assert PackageResourceHandler(f"{bundle_package}:public").resolve("/missing.js") is None

    def test_directory_without_welcome_file(self, bundle_package: str) -> None:
        assert PackageResourceHandler(f"{bundle_package}:public").resolve("/empty/") is None

    def test_traversal_is_not_found(self, bundle_package: str) -> None:
        handler = PackageResourceHandler(f"{bundle_package}:public")
        assert handler.resolve("/../secret.txt") is None
        assert handler.resolve("/../../etc/passwd") is None

    def test_missing_package_raises(self) -> None:
        with pytest.raises(ModuleNotFoundError):
            PackageResourceHandler("no_such_package_xyz:public")

    def test_base_is_dir(self, bundle_package: str) -> None:
        assert PackageResourceHandler(f"{bundle_package}:public").base_is_dir() is True
        assert PackageResourceHandler(f"{bundle_package}:notes.txt").base_is_dir() is False
        assert PackageResourceHandler(f"{bundle_package}:missing").base_is_dir() is False


class TestSplitPackageLocation:
    @pytest.mark.parametrize(
        ("location", "expected"),
        [
            ("myapp", ("myapp", "")),
            ("myapp:public", ("myapp", "public")),
            ("myapp.web:assets/dist/", ("myapp.web", "assets/dist")),
            ("myapp/public", ("myapp", "public")),
            ("/myapp/public", ("myapp", "public")),
        ],
    )
    def test_split(self, location: str, expected: tuple[str, str]) -> None:
        assert split_package_location(location) == expected
