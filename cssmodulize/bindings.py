"""Allocation of fresh top-level binding names for inserted imports."""

from __future__ import annotations

from typing import Iterable, Optional, Set, Tuple


class BindingAllocator:
    """Hand out names that collide neither with the file nor with each other.

    One allocator is created per migrated file from the names bound in it,
    so no state leaks between files.
    """

    def __init__(self, bound_names: Iterable[str] = ()) -> None:
        self._taken: Set[str] = set(bound_names)

    def is_taken(self, name: str) -> bool:
        return name in self._taken

    def allocate(self, prefix: str) -> str:
        """Return ``prefix``, ``prefix1``, ``prefix2``... whichever is free first."""
        candidate = prefix
        suffix = 0
        while self.is_taken(candidate):
            suffix += 1
            candidate = f"{prefix}{suffix}"
        self._taken.add(candidate)
        return candidate


def merge_binding(
    existing: Optional[str],
    default_name: str,
    allocator: Optional[BindingAllocator] = None,
) -> Tuple[str, bool]:
    """Name of the merge function and whether an import for it must be added."""
    if existing:
        return existing, False
    if allocator is None:
        return default_name, True
    return allocator.allocate(default_name), True


__all__ = ["BindingAllocator", "merge_binding"]
