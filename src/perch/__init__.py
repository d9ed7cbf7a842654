"""Perch — static assets in front of an ASGI application.

Serves pre-registered static resources (bundled in a package or kept in an
external directory) before the request ever reaches dynamic routing, and
presents sub-path mounts to the wrapped app as if mounted at the root.

Basic usage::

    from perch import FilterConfig, StaticFilter

    static = StaticFilter(
        FilterConfig(mount_path="/app", static_resources="myapp:public"),
        app=my_asgi_app,
    )
"""

__version__ = "0.1.0"
__all__ = [
    "Application",
    "ApplicationError",
    "ConfigurationError",
    "FilterConfig",
    "PerchError",
    "Request",
    "Response",
    "RouteMatcher",
    "SourceKind",
    "StaticAssetDispatcher",
    "StaticFilter",
    "StaticResourceRegistry",
    "content_type_for",
    "translate",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` fast while providing a clean top-level API.
    """
    if name == "StaticFilter":
        from perch.filter import StaticFilter

        return StaticFilter

    if name == "FilterConfig":
        from perch.config import FilterConfig

        return FilterConfig

    if name in ("Application", "RouteMatcher"):
        from perch import application as _application

        return getattr(_application, name)

    if name == "Request":
        from perch.http.request import Request

        return Request

    if name == "Response":
        from perch.http.response import Response

        return Response

    if name == "content_type_for":
        from perch.http.content_types import content_type_for

        return content_type_for

    if name == "translate":
        from perch.http.paths import translate

        return translate

    if name == "SourceKind":
        from perch.resources.handlers import SourceKind

        return SourceKind

    if name in ("StaticAssetDispatcher", "StaticResourceRegistry"):
        from perch import staticfiles as _static

        return getattr(_static, name)

    if name in ("ApplicationError", "ConfigurationError", "PerchError"):
        from perch import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
