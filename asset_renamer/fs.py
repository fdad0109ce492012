"""Filesystem collaborators: listing a folder and renaming files on disk."""
from __future__ import annotations

import errno
import logging
import os
from dataclasses import dataclass
from typing import List, Optional, Protocol, Sequence

from .errors import DirectoryUnreadable, RenameFailed

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileEntry:
    """A plain file found in the working folder. Identity is ``path``."""

    name: str
    path: str

    @classmethod
    def from_path(cls, path: str) -> "FileEntry":
        return cls(name=os.path.basename(path), path=path)


@dataclass(frozen=True)
class RenameOperation:
    old_path: str
    new_path: str


@dataclass(frozen=True)
class RenameOutcome:
    success: bool
    old_path: str
    new_path: str
    error: Optional[str] = None


class FileLister(Protocol):
    def list(self, folder_path: str) -> List[FileEntry]:
        ...


class RenameExecutor(Protocol):
    def rename_one(self, old_path: str, new_path: str) -> RenameOutcome:
        ...

    def rename_many(self, operations: Sequence[RenameOperation]) -> List[RenameOutcome]:
        ...


class FolderPicker(Protocol):
    def select(self) -> Optional[str]:
        ...


class OsFileLister:
    """List the plain files directly inside a folder, sorted by name."""

    def list(self, folder_path: str) -> List[FileEntry]:
        if not os.path.isdir(folder_path):
            raise DirectoryUnreadable(folder_path, "not a directory")
        try:
            names = os.listdir(folder_path)
        except OSError as exc:
            raise DirectoryUnreadable(folder_path, exc.strerror or str(exc)) from exc

        entries: List[FileEntry] = []
        for name in sorted(names):
            full_path = os.path.join(folder_path, name)
            if not os.path.isfile(full_path):
                continue
            entries.append(FileEntry(name=name, path=full_path))
        logger.info("Listed %d files in %s", len(entries), folder_path)
        return entries


class OsRenameExecutor:
    """Rename with ``os.rename``; one failing operation never stops the others."""

    def rename_one(self, old_path: str, new_path: str) -> RenameOutcome:
        if old_path == new_path:
            return RenameOutcome(True, old_path, new_path)
        try:
            # os.rename silently replaces an existing target on POSIX.
            if os.path.exists(new_path) and not os.path.samefile(old_path, new_path):
                raise FileExistsError(errno.EEXIST, "A file with the new name already exists", new_path)
            os.rename(old_path, new_path)
        except OSError as exc:
            failure = RenameFailed(old_path, new_path, exc)
            logger.warning("Rename failed: %s", failure)
            return RenameOutcome(False, old_path, new_path, str(failure))
        logger.debug("Renamed %s -> %s", old_path, new_path)
        return RenameOutcome(True, old_path, new_path)

    def rename_many(self, operations: Sequence[RenameOperation]) -> List[RenameOutcome]:
        return [self.rename_one(op.old_path, op.new_path) for op in operations]
