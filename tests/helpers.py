from __future__ import annotations

from typing import Dict, List, Sequence

from asset_renamer.errors import DirectoryUnreadable
from asset_renamer.fs import FileEntry, RenameOperation, RenameOutcome


class FakeLister:
    """In-memory folder listing; folders missing from ``folders`` are unreadable."""

    def __init__(self, folders: Dict[str, List[str]]):
        self.folders = folders
        self.calls: List[str] = []

    def list(self, folder_path: str) -> List[FileEntry]:
        self.calls.append(folder_path)
        if folder_path not in self.folders:
            raise DirectoryUnreadable(folder_path, "not found")
        return [FileEntry(name, f"{folder_path}/{name}") for name in self.folders[folder_path]]


class FakeRenamer:
    """Records every operation; old paths listed in ``failing`` report an error."""

    def __init__(self, failing: Sequence[str] = ()):
        self.failing = set(failing)
        self.calls: List[RenameOperation] = []

    def rename_one(self, old_path: str, new_path: str) -> RenameOutcome:
        self.calls.append(RenameOperation(old_path, new_path))
        if old_path in self.failing:
            return RenameOutcome(False, old_path, new_path, "permission denied")
        return RenameOutcome(True, old_path, new_path)

    def rename_many(self, operations: Sequence[RenameOperation]) -> List[RenameOutcome]:
        return [self.rename_one(op.old_path, op.new_path) for op in operations]


def entries(*names: str, folder: str = "/assets") -> List[FileEntry]:
    return [FileEntry(name, f"{folder}/{name}") for name in names]
