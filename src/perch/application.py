"""Application collaborators — lifecycle hooks and the dynamic route matcher.

Perch does no routing itself. The filter talks to two small protocols:

- ``Application``: ``init()`` once at startup, ``destroy()`` at shutdown.
- ``RouteMatcher``: ``handle(request, send)`` returns True when it
  answered the request.

An application object may implement both.
"""

import importlib
import inspect
from collections.abc import Callable
from typing import Protocol, runtime_checkable

from perch._internal.asgi import Send
from perch.http.request import Request


@runtime_checkable
class Application(Protocol):
    """Lifecycle hooks of the wrapped application. Either may be async."""

    def init(self) -> object: ...

    def destroy(self) -> object: ...


@runtime_checkable
class RouteMatcher(Protocol):
    """Dynamic routing stage consulted when no static resource matched."""

    async def handle(self, request: Request, send: Send) -> bool: ...


async def call_hook(hook: Callable[[], object]) -> None:
    """Call a sync or async lifecycle hook."""
    result = hook()
    if inspect.isawaitable(result):
        await result


def resolve_application(import_string: str) -> Application:
    """Resolve an import string to an Application instance.

    Accepts ``"module:attribute"`` format. When the attribute portion is
    omitted, defaults to ``"application"``.

    Supports classes and factory functions: if the resolved object is
    callable and not already an Application instance, it is called with
    no arguments.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not an Application.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "application"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if inspect.isclass(obj) or (callable(obj) and not isinstance(obj, Application)):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Application factory {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, Application):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, which has no init()/destroy()"
        raise TypeError(msg)

    return obj
