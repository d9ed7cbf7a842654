"""Content-type inference for static resources.

A fixed, read-only table keyed by lowercase file extension. Anything not
in the table gets no content type at all, leaving the server default.
"""

from types import MappingProxyType

CONTENT_TYPES = MappingProxyType(
    {
        "svg": "image/svg+xml",
        "css": "text/css",
        "js": "application/x-javascript",
        "png": "image/png",
        "gif": "image/gif",
        "jpg": "image/jpeg",
        "jpeg": "image/jpeg",
    }
)


def content_type_for(path: str) -> str | None:
    """Return the MIME type for *path*'s extension, or ``None``.

    The extension is everything after the last ``.``. A path with no dot,
    or a dot as its last character, has no extension. Lookup is
    case-insensitive.
    """
    dot = path.rfind(".")
    if dot < 0 or dot == len(path) - 1:
        return None
    return CONTENT_TYPES.get(path[dot + 1 :].lower())
