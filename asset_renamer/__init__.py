"""Batch renamer for game-engine assets following the Prefix_Name_Descriptor_Variant convention."""
from __future__ import annotations

from .errors import (
    DirectoryUnreadable,
    DuplicateTargetName,
    EmptyAssetName,
    EmptySelection,
    MissingOutputPath,
    RenameFailed,
    RenamerError,
    SessionBusy,
    ValidationError,
)
from .executor import BatchResult, execute
from .fs import FileEntry, FileLister, RenameExecutor, RenameOperation, RenameOutcome
from .inference import detect_asset_type_prefix, detect_texture_type
from .naming import NamingRule, changed_indices, compose_name
from .overrides import OverrideEntry, OverrideStore
from .preview import GlobalToggles, OutputConfig, PreviewRow, generate_preview, update_row
from .session import RenameSession

__version__ = "1.0.0"

__all__ = [
    "BatchResult",
    "DirectoryUnreadable",
    "DuplicateTargetName",
    "EmptyAssetName",
    "EmptySelection",
    "FileEntry",
    "FileLister",
    "GlobalToggles",
    "MissingOutputPath",
    "NamingRule",
    "OutputConfig",
    "OverrideEntry",
    "OverrideStore",
    "PreviewRow",
    "RenameExecutor",
    "RenameFailed",
    "RenameOperation",
    "RenameOutcome",
    "RenameSession",
    "RenamerError",
    "SessionBusy",
    "ValidationError",
    "changed_indices",
    "compose_name",
    "detect_asset_type_prefix",
    "detect_texture_type",
    "execute",
    "generate_preview",
    "update_row",
]
