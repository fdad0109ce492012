"""Exceptions raised by the renamer core and its filesystem collaborators."""
from __future__ import annotations

from typing import Iterable, List


class RenamerError(Exception):
    """Base class for every error the renamer reports to the user."""


class DirectoryUnreadable(RenamerError):
    """The folder could not be listed (missing, not a directory, or no permission)."""

    def __init__(self, folder: str, reason: str = ""):
        self.folder = folder
        self.reason = reason
        message = f"Cannot read folder: {folder}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class ValidationError(RenamerError):
    """Pre-flight check failed; no file was touched."""


class EmptySelection(ValidationError):
    def __init__(self) -> None:
        super().__init__("Select at least one file to rename.")


class EmptyAssetName(ValidationError):
    def __init__(self) -> None:
        super().__init__("Asset name must not be empty.")


class MissingOutputPath(ValidationError):
    def __init__(self) -> None:
        super().__init__("Choose an output folder first.")


class DuplicateTargetName(ValidationError):
    """Two or more selected files would end up with the same name."""

    def __init__(self, names: Iterable[str]):
        self.names: List[str] = sorted(set(names))
        super().__init__("Duplicate target names, nothing renamed: " + ", ".join(self.names))


class RenameFailed(RenamerError):
    """A single rename operation failed at the OS level."""

    def __init__(self, old_path: str, new_path: str, cause: BaseException):
        self.old_path = old_path
        self.new_path = new_path
        self.cause = cause
        detail = getattr(cause, "strerror", None) or str(cause)
        super().__init__(f"{old_path} -> {new_path}: {detail}")


class SessionBusy(RenamerError):
    def __init__(self) -> None:
        super().__init__("Another load or rename is still running.")
