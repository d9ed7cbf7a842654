"""Static resource sources — package bundles and external directories.

Handlers resolve request paths to resources; resources hand out byte
streams. Neither caches anything between requests.
"""

from perch.resources.handlers import (
    DirectoryResourceHandler,
    PackageResourceHandler,
    ResourceHandler,
    SourceKind,
)
from perch.resources.resource import FileResource, PackageResource, Resource

__all__ = [
    "DirectoryResourceHandler",
    "FileResource",
    "PackageResource",
    "PackageResourceHandler",
    "Resource",
    "ResourceHandler",
    "SourceKind",
]
