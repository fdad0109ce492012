"""Old-name/new-name preview rows for a folder of files.

Full regeneration and single-row updates both go through :func:`derive_row`
so the two paths cannot disagree about a file's new name.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import AbstractSet, Iterable, List, Optional, Sequence

from .constants import OUTPUT_MODE_CUSTOM, OUTPUT_MODE_ORIGINAL, OUTPUT_MODES
from .fs import FileEntry
from .inference import detect_asset_type_prefix, detect_texture_type, file_extension
from .naming import NamingRule, compose_name, with_extension
from .overrides import OverrideEntry, OverrideStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GlobalToggles:
    use_manual_descriptor: bool = False
    force_auto_prefix: bool = False


@dataclass(frozen=True)
class OutputConfig:
    """Where renamed files go: next to the original, or into ``path``."""

    mode: str = OUTPUT_MODE_ORIGINAL
    path: str = ""

    def __post_init__(self) -> None:
        if self.mode not in OUTPUT_MODES:
            raise ValueError(f"Unknown output mode {self.mode!r}")

    @property
    def is_custom(self) -> bool:
        return self.mode == OUTPUT_MODE_CUSTOM

    def target_path(self, original_path: str, new_name: str) -> str:
        if self.is_custom and self.path:
            return os.path.join(self.path, new_name)
        return os.path.join(os.path.dirname(original_path), new_name)


@dataclass(frozen=True)
class PreviewRow:
    original_name: str
    new_name: str
    original_path: str
    new_path: str
    auto_descriptor: str
    descriptor: str
    manual_descriptor: str
    auto_prefix: str
    has_prefix_conflict: bool
    selected: bool

    @property
    def will_rename(self) -> bool:
        return self.original_name != self.new_name

    @property
    def file(self) -> FileEntry:
        return FileEntry(name=self.original_name, path=self.original_path)


def effective_prefix(auto_prefix: str, rule: NamingRule, toggles: GlobalToggles) -> str:
    if toggles.force_auto_prefix and auto_prefix:
        return auto_prefix
    return rule.asset_type_prefix


def has_prefix_conflict(auto_prefix: str, rule: NamingRule, toggles: GlobalToggles) -> bool:
    return not toggles.force_auto_prefix and bool(auto_prefix) and auto_prefix != rule.asset_type_prefix


def derive_row(
    file: FileEntry,
    rule: NamingRule,
    entry: Optional[OverrideEntry],
    toggles: GlobalToggles,
    output: OutputConfig,
) -> PreviewRow:
    """Compute every derived field of one file's preview row."""
    entry = entry or OverrideEntry()
    auto_descriptor = detect_texture_type(file.name)
    if entry.descriptor is not None:
        descriptor = entry.descriptor
    else:
        descriptor = auto_descriptor or rule.descriptor
    final_descriptor = entry.manual_descriptor if toggles.use_manual_descriptor else descriptor

    auto_prefix = detect_asset_type_prefix(file.name)
    prefix = effective_prefix(auto_prefix, rule, toggles)

    new_name = with_extension(compose_name(rule, final_descriptor, prefix), file_extension(file.name))
    return PreviewRow(
        original_name=file.name,
        new_name=new_name,
        original_path=file.path,
        new_path=output.target_path(file.path, new_name),
        auto_descriptor=auto_descriptor,
        descriptor=descriptor,
        manual_descriptor=entry.manual_descriptor,
        auto_prefix=auto_prefix,
        has_prefix_conflict=has_prefix_conflict(auto_prefix, rule, toggles),
        selected=entry.selected,
    )


def generate_preview(
    files: Iterable[FileEntry],
    rule: NamingRule,
    overrides: OverrideStore,
    toggles: GlobalToggles,
    output: OutputConfig,
    *,
    reset_selection: bool = False,
    reset_descriptors: bool = False,
) -> List[PreviewRow]:
    """Build a brand-new row for every file.

    Overrides of paths already in the store are kept unless a reset flag is
    passed; unseen paths get default entries.
    """
    files = list(files)
    overrides.sync(files, reset_selection=reset_selection, reset_descriptors=reset_descriptors)
    rows = [derive_row(f, rule, overrides.get(f.path), toggles, output) for f in files]
    logger.debug("Generated preview for %d files", len(rows))
    return rows


def refresh_rows(
    rows: Sequence[PreviewRow],
    paths: AbstractSet[str],
    rule: NamingRule,
    overrides: OverrideStore,
    toggles: GlobalToggles,
    output: OutputConfig,
) -> List[PreviewRow]:
    """Re-derive the rows whose path is in ``paths``; all other row objects are reused."""
    return [
        derive_row(row.file, rule, overrides.get(row.original_path), toggles, output)
        if row.original_path in paths else row
        for row in rows
    ]


def update_row(
    rows: Sequence[PreviewRow],
    path: str,
    rule: NamingRule,
    overrides: OverrideStore,
    toggles: GlobalToggles,
    output: OutputConfig,
) -> List[PreviewRow]:
    """Re-derive the single row for ``path`` after one of its overrides changed."""
    return refresh_rows(rows, {path}, rule, overrides, toggles, output)
