"""Per-file user choices that survive preview regeneration."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Optional

from .constants import MANUAL_DESCRIPTOR_PLACEHOLDER
from .fs import FileEntry
from .inference import detect_texture_type

logger = logging.getLogger(__name__)


@dataclass
class OverrideEntry:
    """Selection and descriptor choices for one file, keyed by its path."""

    selected: bool = True
    descriptor: Optional[str] = None
    manual_descriptor: str = MANUAL_DESCRIPTOR_PLACEHOLDER


class OverrideStore:
    """Mapping of file path to :class:`OverrideEntry`.

    Entries are never dropped implicitly. :meth:`sync` keeps what is already
    known and only adds defaults for unseen paths, unless a reset flag asks
    for the corresponding fields to be rebuilt.
    """

    def __init__(self) -> None:
        self._entries: Dict[str, OverrideEntry] = {}

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, path: str) -> Optional[OverrideEntry]:
        return self._entries.get(path)

    def entry(self, path: str) -> OverrideEntry:
        """Return the entry for ``path``, creating a default one if needed."""
        found = self._entries.get(path)
        if found is None:
            found = OverrideEntry()
            self._entries[path] = found
        return found

    def clear(self) -> None:
        self._entries.clear()

    def sync(
        self,
        files: Iterable[FileEntry],
        reset_selection: bool = False,
        reset_descriptors: bool = False,
    ) -> None:
        """Make sure every file has an entry, optionally resetting parts of it.

        Resetting selection marks every listed file selected again; resetting
        descriptors re-seeds them from filename inference (``None`` when
        nothing is detected) and clears the
        manual text. Entries for paths no longer listed are discarded only
        when both flags are set (a fresh folder load).
        """
        files = list(files)
        if reset_selection and reset_descriptors:
            self._entries.clear()
        for file in files:
            entry = self.entry(file.path)
            if reset_selection:
                entry.selected = True
            if reset_descriptors or entry.descriptor is None:
                # nothing detected leaves the rule-level descriptor in charge
                entry.descriptor = detect_texture_type(file.name) or None
            if reset_descriptors:
                entry.manual_descriptor = MANUAL_DESCRIPTOR_PLACEHOLDER
        logger.debug(
            "Synced overrides for %d files (reset_selection=%s, reset_descriptors=%s)",
            len(files), reset_selection, reset_descriptors,
        )

    # ----- per-field setters -------------------------------------------------
    def set_selected(self, path: str, selected: bool) -> None:
        self.entry(path).selected = selected

    def set_all_selected(self, paths: Iterable[str], selected: bool) -> None:
        for path in paths:
            self.entry(path).selected = selected

    def set_descriptor(self, path: str, descriptor: str) -> None:
        self.entry(path).descriptor = descriptor

    def set_manual_descriptor(self, path: str, text: str) -> None:
        self.entry(path).manual_descriptor = text
