"""Working state for one folder: rule, toggles, per-file overrides and preview rows."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from dataclasses import replace
from typing import Iterator, List, Optional

from .errors import DirectoryUnreadable, SessionBusy
from .executor import BatchResult, execute
from .fs import FileEntry, FileLister, OsFileLister, OsRenameExecutor, RenameExecutor
from .naming import NamingRule
from .overrides import OverrideStore
from .preview import GlobalToggles, OutputConfig, PreviewRow, generate_preview, refresh_rows, update_row

logger = logging.getLogger(__name__)


class RenameSession:
    """Owns everything the preview depends on and keeps the rows up to date.

    Changing the rule, a toggle or the output location regenerates every
    row; editing one file's selection or descriptor rebuilds only that row.
    """

    def __init__(
        self,
        lister: Optional[FileLister] = None,
        renamer: Optional[RenameExecutor] = None,
        rule: Optional[NamingRule] = None,
        toggles: Optional[GlobalToggles] = None,
        output: Optional[OutputConfig] = None,
    ):
        self.lister: FileLister = lister or OsFileLister()
        self.renamer: RenameExecutor = renamer or OsRenameExecutor()
        self.rule = rule or NamingRule()
        self.toggles = toggles or GlobalToggles()
        self.output = output or OutputConfig()
        self.overrides = OverrideStore()
        self.folder_path: Optional[str] = None
        self.files: List[FileEntry] = []
        self.rows: List[PreviewRow] = []
        self.busy = False

    @contextmanager
    def _busy(self) -> Iterator[None]:
        if self.busy:
            raise SessionBusy()
        self.busy = True
        try:
            yield
        finally:
            self.busy = False

    # ----- folder handling ---------------------------------------------------
    def load_folder(
        self,
        folder_path: str,
        *,
        reset_selection: bool,
        reset_descriptors: bool,
    ) -> List[PreviewRow]:
        """List ``folder_path`` and rebuild the preview.

        On :class:`DirectoryUnreadable` the previous folder, files and rows
        stay as they were.
        """
        with self._busy():
            files = self.lister.list(folder_path)
            self.folder_path = folder_path
            self.files = files
            self.rows = generate_preview(
                files, self.rule, self.overrides, self.toggles, self.output,
                reset_selection=reset_selection,
                reset_descriptors=reset_descriptors,
            )
        logger.info("Loaded %d files from %s", len(files), folder_path)
        return self.rows

    def refresh(self, reset: bool = False) -> List[PreviewRow]:
        """Re-list the current folder, keeping per-file choices unless ``reset``."""
        if self.folder_path is None:
            return self.rows
        return self.load_folder(self.folder_path, reset_selection=reset, reset_descriptors=reset)

    def regenerate(self) -> List[PreviewRow]:
        self.rows = generate_preview(
            self.files, self.rule, self.overrides, self.toggles, self.output,
            reset_selection=False,
            reset_descriptors=False,
        )
        return self.rows

    # ----- global settings ---------------------------------------------------
    def set_rule(self, rule: Optional[NamingRule] = None, **changes: str) -> List[PreviewRow]:
        base = rule or self.rule
        self.rule = base.with_changes(**changes) if changes else base
        return self.regenerate()

    def set_toggles(
        self,
        use_manual_descriptor: Optional[bool] = None,
        force_auto_prefix: Optional[bool] = None,
    ) -> List[PreviewRow]:
        changes = {}
        if use_manual_descriptor is not None:
            changes["use_manual_descriptor"] = use_manual_descriptor
        if force_auto_prefix is not None:
            changes["force_auto_prefix"] = force_auto_prefix
        self.toggles = replace(self.toggles, **changes)
        return self.regenerate()

    def set_output(self, mode: Optional[str] = None, path: Optional[str] = None) -> List[PreviewRow]:
        self.output = OutputConfig(
            mode=self.output.mode if mode is None else mode,
            path=self.output.path if path is None else path,
        )
        return self.regenerate()

    # ----- per-file edits ----------------------------------------------------
    def _update(self, path: str) -> List[PreviewRow]:
        self.rows = update_row(self.rows, path, self.rule, self.overrides, self.toggles, self.output)
        return self.rows

    def set_selected(self, path: str, selected: bool) -> List[PreviewRow]:
        self.overrides.set_selected(path, selected)
        return self._update(path)

    def set_all_selected(self, selected: bool) -> List[PreviewRow]:
        paths = {row.original_path for row in self.rows}
        self.overrides.set_all_selected(paths, selected)
        self.rows = refresh_rows(self.rows, paths, self.rule, self.overrides, self.toggles, self.output)
        return self.rows

    def set_descriptor(self, path: str, descriptor: str) -> List[PreviewRow]:
        self.overrides.set_descriptor(path, descriptor)
        return self._update(path)

    def set_manual_descriptor(self, path: str, text: str) -> List[PreviewRow]:
        self.overrides.set_manual_descriptor(path, text)
        return self._update(path)

    # ----- execution ---------------------------------------------------------
    @property
    def selected_count(self) -> int:
        return sum(1 for row in self.rows if row.selected)

    @property
    def can_execute(self) -> bool:
        return bool(self.rows) and bool(self.rule.asset_name) and self.selected_count > 0 and not self.busy

    def execute(self) -> BatchResult:
        """Rename the selected files, then re-list the folder without resetting choices."""
        with self._busy():
            result = execute(self.rows, self.rule, self.overrides, self.toggles, self.output, self.renamer)
        try:
            self.refresh()
        except DirectoryUnreadable as exc:
            logger.error("Reload after rename failed: %s", exc)
        return result
