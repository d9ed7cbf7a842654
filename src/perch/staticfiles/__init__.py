"""Static files — registry of resource handlers and the dispatcher that serves them."""

from perch.staticfiles.dispatcher import StaticAssetDispatcher
from perch.staticfiles.registry import StaticResourceRegistry

__all__ = ["StaticAssetDispatcher", "StaticResourceRegistry"]
