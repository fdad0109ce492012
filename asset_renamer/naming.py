"""Canonical Prefix_Name_Descriptor_Variant names."""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Set

from .constants import (
    ASSET_TYPE_PREFIXES,
    DEFAULT_ASSET_NAME,
    DEFAULT_PREFIX,
    DEFAULT_VARIANT,
    SEPARATOR,
)


@dataclass(frozen=True)
class NamingRule:
    """Global rule shared by every file in the folder.

    ``descriptor`` is only a fallback for files that have no descriptor of
    their own; per-file descriptors live in the override store.
    """

    asset_type_prefix: str = DEFAULT_PREFIX
    asset_name: str = DEFAULT_ASSET_NAME
    descriptor: str = ""
    variant: str = DEFAULT_VARIANT

    def __post_init__(self) -> None:
        if self.asset_type_prefix not in ASSET_TYPE_PREFIXES:
            raise ValueError(
                f"Unknown asset type prefix {self.asset_type_prefix!r}; "
                f"expected one of {', '.join(ASSET_TYPE_PREFIXES)}"
            )

    def with_changes(self, **changes: str) -> "NamingRule":
        return replace(self, **changes)


def compose_name(rule: NamingRule, descriptor: str, prefix: str | None = None) -> str:
    """Join prefix, asset name, descriptor and (if set) variant with underscores.

    An empty descriptor still takes its slot, so ``T_Rock__01`` is a valid
    result. ``prefix`` replaces the rule's prefix when given.
    """
    parts = [rule.asset_type_prefix if prefix is None else prefix, rule.asset_name, descriptor]
    if rule.variant:
        parts.append(rule.variant)
    return SEPARATOR.join(parts)


def with_extension(stem: str, ext: str) -> str:
    return f"{stem}.{ext}"


def changed_indices(old: str, new: str) -> Set[int]:
    """Positions in ``new`` whose character is new or differs from ``old``."""
    return {i for i, ch in enumerate(new) if i >= len(old) or old[i] != ch}


class NameChangeTracker:
    """Remembers the last name shown for each path to highlight what changed."""

    def __init__(self) -> None:
        self._shown: Dict[str, str] = {}

    def __len__(self) -> int:
        return len(self._shown)

    def update(self, path: str, new_name: str) -> Set[int]:
        previous = self._shown.get(path, new_name)
        self._shown[path] = new_name
        return changed_indices(previous, new_name)

    def clear(self) -> None:
        self._shown.clear()
