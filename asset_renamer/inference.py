"""Guess a texture descriptor and an asset-type prefix from a filename."""
from __future__ import annotations

from .constants import IMAGE_EXTENSIONS, MESH_EXTENSIONS, TEXTURE_TYPE_MAPPING


def file_extension(file_name: str) -> str:
    """Return the text after the last dot, or an empty string when there is none."""
    if "." not in file_name:
        return ""
    return file_name.rsplit(".", 1)[1]


def detect_texture_type(file_name: str) -> str:
    """Return the descriptor of the first keyword (in mapping order) found in the name."""
    lower_name = file_name.lower()
    for keyword, descriptor in TEXTURE_TYPE_MAPPING.items():
        if keyword in lower_name:
            return descriptor
    return ""


def detect_asset_type_prefix(file_name: str) -> str:
    ext = file_extension(file_name).lower()
    if ext in IMAGE_EXTENSIONS:
        return "T"
    if ext in MESH_EXTENSIONS:
        return "SM"
    return ""
