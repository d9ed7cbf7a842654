"""Request-path translation for sub-path mounts.

A filter mounted at ``/app`` presents ``/app/users`` downstream as
``/users``, so the wrapped application can be written as if it were
mounted at the root.
"""


def normalize_mount_path(prefix: str | None) -> str:
    """Normalize a configured mount path or URL pattern.

    Adds the leading slash, drops trailing slashes and a trailing ``/*``
    wildcard. Root mounts (``""``, ``"/"``, ``"/*"``) normalize to ``""``::

        normalize_mount_path("/app/*")  # "/app"
        normalize_mount_path("app/")    # "/app"
        normalize_mount_path("/*")      # ""
    """
    if prefix is None:
        return ""
    normalized = prefix.strip()
    if normalized.endswith("*"):
        normalized = normalized[:-1]
    normalized = normalized.strip("/")
    return f"/{normalized}" if normalized else ""


def translate(full_path: str, mount_prefix: str) -> str:
    """Strip *mount_prefix* from *full_path*.

    Paths outside the mount, and any path when the prefix is empty, come
    back unchanged. The prefix only matches on a segment boundary, so
    ``/app`` covers ``/app`` and ``/app/x`` but not ``/apple``. The
    result always starts with ``/``.
    """
    if not mount_prefix:
        return full_path

    prefix = mount_prefix.rstrip("/")
    if not prefix:
        return full_path if full_path.startswith("/") else "/" + full_path

    if full_path != prefix and not full_path.startswith(prefix + "/"):
        return full_path

    return full_path[len(prefix) :] or "/"


def relative_path(path: str, root_path: str, mount_path: str) -> str:
    """Compute the effective path for a request seen by the filter.

    The server's ``root_path`` (the context the whole ASGI app lives
    under) is removed first, then the filter's own mount path.
    """
    return translate(translate(path, root_path), mount_path)
