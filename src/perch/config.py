"""Filter configuration.

FilterConfig is a frozen dataclass — immutable after creation, no
string-key dict lookups at request time. ``from_mapping()`` accepts
deployment-descriptor style init parameters as well.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

from perch.errors import ConfigurationError
from perch.http.paths import normalize_mount_path

# Init-parameter names accepted by from_mapping(), beside the field names
_PARAM_ALIASES: dict[str, str] = {
    "mountPath": "mount_path",
    "filterMappingUrlPattern": "mount_path",
    "applicationClass": "application",
    "staticResources": "static_resources",
    "externalStaticResources": "external_static_resources",
    "welcomeFile": "welcome_file",
    "chunkSize": "chunk_size",
}


@dataclass(frozen=True, slots=True)
class FilterConfig:
    """Static filter configuration. Immutable after creation.

    All fields have defaults. Override what you need::

        config = FilterConfig(mount_path="/app", static_resources="myapp:public")
    """

    # Mount path (a URL pattern like "/app/*" is accepted)
    mount_path: str = ""

    # Application: "module:attribute" import string, resolved at startup
    application: str | None = None

    # Static files
    static_resources: str | None = None  # Package location, e.g. "myapp:public"
    external_static_resources: str | Path | None = None  # Directory on disk
    welcome_file: str = "index.html"
    chunk_size: int = 64 * 1024

    # Server (perch serve)
    host: str = "127.0.0.1"
    port: int = 8000

    @property
    def filter_path(self) -> str:
        """The normalized mount prefix (``""`` for a root mount)."""
        return normalize_mount_path(self.mount_path)

    def validate(self) -> None:
        """Raise ConfigurationError for settings that cannot work."""
        if self.chunk_size <= 0:
            msg = f"chunk_size must be positive, got {self.chunk_size}"
            raise ConfigurationError(msg)
        if not self.welcome_file or "/" in self.welcome_file:
            msg = f"welcome_file must be a plain file name, got {self.welcome_file!r}"
            raise ConfigurationError(msg)

    @classmethod
    def from_mapping(cls, params: Mapping[str, Any]) -> FilterConfig:
        """Build a config from init parameters.

        Keys may be field names or the camelCase parameter names used in
        deployment descriptors (``mountPath``, ``applicationClass``, ...).
        Unknown keys raise ConfigurationError.
        """
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in params.items():
            name = _PARAM_ALIASES.get(key, key)
            if name not in known:
                msg = f"Unknown filter parameter: {key!r}"
                raise ConfigurationError(msg)
            values[name] = value

        for name in ("chunk_size", "port"):
            if name in values and isinstance(values[name], str):
                try:
                    values[name] = int(values[name])
                except ValueError:
                    msg = f"Filter parameter {name!r} must be an integer, got {values[name]!r}"
                    raise ConfigurationError(msg) from None

        return cls(**values)
