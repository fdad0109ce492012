"""Naming tables shared by inference, the rule editor and the preview table."""
from __future__ import annotations

from typing import Dict, List, Tuple

SEPARATOR = "_"

ASSET_TYPE_PREFIXES: List[str] = ["T", "SM", "SK", "AS", "DA", "DT", "S", "Cur"]

ASSET_TYPE_PREFIX_LABELS: Dict[str, str] = {
    "T": "Texture",
    "SM": "StaticMesh",
    "SK": "SkeletalMesh",
    "AS": "AnimationSequence",
    "DA": "DataAsset",
    "DT": "DataTable",
    "S": "Sound",
    "Cur": "Curve",
}

VARIANT_OPTIONS: List[str] = ["", "01", "02", "03", "04", "05", "A", "B", "C", "D", "E", "F"]

# Order matters: the first keyword found in the filename wins.
TEXTURE_TYPE_MAPPING: Dict[str, str] = {
    "basecolor": "BC",
    "diffuse": "BC",
    "roughness": "R",
    "metalness": "M",
    "metalic": "M",
    "normal": "N",
    "height": "H",
    "ambient": "AO",
}

IMAGE_EXTENSIONS = frozenset(
    ("png", "jpg", "jpeg", "tga", "bmp", "psd", "exr", "hdr", "dds", "tif", "tiff")
)

MESH_EXTENSIONS = frozenset(
    ("fbx", "obj", "gltf", "glb", "abc", "usd", "usda", "usdc", "blend", "max", "ma", "mb")
)

# (value, label) pairs for the per-file descriptor combo box.
DESCRIPTOR_OPTIONS: List[Tuple[str, str]] = [
    ("", "None"),
    ("BC", "BC"),
    ("RMA", "RMA"),
    ("RMAH", "RMAH"),
    ("N", "N"),
    ("R", "R"),
    ("M", "M"),
    ("AO", "AO"),
    ("E", "E"),
    ("H", "H"),
    ("Dsp", "Dsp"),
    ("MaskA", "MaskA"),
    ("MaskB", "MaskB"),
    ("MaskC", "MaskC"),
    ("Alpha", "Alpha"),
    ("Spec", "Spec"),
    ("Cur", "Cur"),
    ("ID", "ID"),
    ("Dif", "Dif"),
]

# Placeholder text a manual descriptor starts with until the user types one.
MANUAL_DESCRIPTOR_PLACEHOLDER = "Descriptor"

DEFAULT_PREFIX = "T"
DEFAULT_ASSET_NAME = "name"
DEFAULT_VARIANT = "01"

OUTPUT_MODE_ORIGINAL = "original"
OUTPUT_MODE_CUSTOM = "custom"
OUTPUT_MODES = (OUTPUT_MODE_ORIGINAL, OUTPUT_MODE_CUSTOM)

STYLE_GUIDE_URL = "https://github.com/thejinchao/ue5-style-guide"
