"""Asset path conventions for page images and hotspot audio clips."""

import re
from pathlib import PurePosixPath

_URL_SCHEME = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://")
_WINDOWS_DRIVE = re.compile(r"^[a-zA-Z]:[\\/]")


def normalize_slashes(path: str) -> str:
    """Replace backslash separators with forward slashes."""
    return path.replace("\\", "/")


def join_location(root: str, *parts: str) -> str:
    """Join a root and relative parts with forward slashes."""
    root = normalize_slashes(root).rstrip("/")
    tail = "/".join(part.strip("/") for part in parts if part)
    if not root:
        return tail
    return f"{root}/{tail}" if tail else root


def is_absolute_reference(identifier: str) -> bool:
    """True for data URIs, URLs and absolute filesystem paths."""
    return (
        identifier.startswith("data:")
        or bool(_URL_SCHEME.match(identifier))
        or identifier.startswith("/")
        or bool(_WINDOWS_DRIVE.match(identifier))
    )


def image_base_name(image_id: str) -> str:
    """File name of an image reference without directories and extension.

    "pages/3.png" -> "3", "scan.v2.png" -> "scan.v2". Falls back to the
    file name when there is no extension to strip.
    """
    name = normalize_slashes(image_id).split("/")[-1]
    stem, dot, _ = name.rpartition(".")
    return stem if dot and stem else name


def resolve_image_source(identifier: str, asset_root: str, app_root: str) -> str:
    """
    Resolve a page image identifier to a loadable location.

    - data URIs, URLs and absolute paths are returned verbatim
    - bare file names live in ``<asset_root>/pages/``
    - ``pages/...`` is migrated under ``<asset_root>/``
    - any other relative path is taken relative to ``app_root``
    """
    if not identifier or is_absolute_reference(identifier):
        return identifier

    relative = normalize_slashes(identifier)
    if relative.startswith("./"):
        relative = relative[2:]

    if "/" not in relative:
        return join_location(asset_root, "pages", relative)
    if relative.startswith("pages/"):
        return join_location(asset_root, relative)
    return join_location(app_root, str(PurePosixPath(relative)))
