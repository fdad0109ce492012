"""Validate the selected preview rows and hand the renames to a RenameExecutor."""
from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import List, Sequence

from .errors import (
    DuplicateTargetName,
    EmptyAssetName,
    EmptySelection,
    MissingOutputPath,
    ValidationError,
)
from .fs import RenameExecutor, RenameOperation, RenameOutcome
from .naming import NamingRule
from .overrides import OverrideStore
from .preview import GlobalToggles, OutputConfig, PreviewRow, derive_row

logger = logging.getLogger(__name__)


@dataclass
class BatchResult:
    outcomes: List[RenameOutcome] = field(default_factory=list)

    @property
    def success_count(self) -> int:
        return sum(1 for o in self.outcomes if o.success)

    @property
    def failure_count(self) -> int:
        return sum(1 for o in self.outcomes if not o.success)

    @property
    def failures(self) -> List[RenameOutcome]:
        return [o for o in self.outcomes if not o.success]

    @property
    def ok(self) -> bool:
        return self.failure_count == 0

    def summary(self) -> str:
        if self.ok:
            return f"Renamed {self.success_count} file(s)."
        return f"Renamed {self.success_count} file(s), {self.failure_count} failed."


def plan_operations(
    rows: Sequence[PreviewRow],
    rule: NamingRule,
    overrides: OverrideStore,
    toggles: GlobalToggles,
    output: OutputConfig,
) -> List[RenameOperation]:
    """Run the pre-flight checks and return the operations to perform, in row order.

    Names are derived again from the current overrides instead of trusting
    the values cached on the rows. Raises a :class:`ValidationError` subclass
    when the batch must not run.
    """
    selected = [
        derived for derived in (
            derive_row(row.file, rule, overrides.get(row.original_path), toggles, output)
            for row in rows
        )
        if derived.selected
    ]
    if not selected:
        raise EmptySelection()
    if not rule.asset_name:
        raise EmptyAssetName()
    if output.is_custom and not output.path:
        raise MissingOutputPath()

    counts = Counter(row.new_name for row in selected)
    duplicates = [name for name, count in counts.items() if count > 1]
    if duplicates:
        raise DuplicateTargetName(duplicates)

    return [RenameOperation(row.original_path, row.new_path) for row in selected]


def execute(
    rows: Sequence[PreviewRow],
    rule: NamingRule,
    overrides: OverrideStore,
    toggles: GlobalToggles,
    output: OutputConfig,
    renamer: RenameExecutor,
) -> BatchResult:
    try:
        operations = plan_operations(rows, rule, overrides, toggles, output)
    except ValidationError as exc:
        logger.warning("Rename refused: %s", exc)
        raise

    logger.info("Renaming %d file(s)", len(operations))
    result = BatchResult(list(renamer.rename_many(operations)))
    for failure in result.failures:
        logger.warning("Could not rename %s: %s", failure.old_path, failure.error)
    logger.info("%s", result.summary())
    return result
