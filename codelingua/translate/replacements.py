"""
Replacement arena for position-based text surgery.

Every pass of the rewriter records ``Replacement`` objects against byte
offsets of the ORIGINAL source. The arena validates that no two ranges
overlap and then rebuilds the output in a single left-to-right scan, so
no offset is ever shifted by an earlier substitution.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from codelingua.errors import OverlappingReplacements


@dataclass(frozen=True)
class Replacement:
    """Substitute ``new_text`` for the half-open byte range [start, end)."""
    start: int
    end: int
    new_text: str
    old_text: str


class ReplacementArena:
    """Collects replacements and applies them in one linear rebuild."""

    def __init__(self):
        self._items: list[Replacement] = []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Replacement]:
        return iter(self._items)

    def add(self, start: int, end: int, new_text: str, old_text: str) -> None:
        if start > end:
            raise ValueError(f"Replacement range [{start}, {end}) is reversed")
        self._items.append(Replacement(start, end, new_text, old_text))

    def validated(self) -> list[Replacement]:
        """Return the replacements sorted by start offset.

        Raises:
            OverlappingReplacements: if two ranges share any byte
        """
        ordered = sorted(self._items, key=lambda r: (r.start, r.end))
        for previous, current in zip(ordered, ordered[1:]):
            if current.start < previous.end:
                raise OverlappingReplacements(
                    f"[{previous.start}, {previous.end}) {previous.old_text!r} overlaps "
                    f"[{current.start}, {current.end}) {current.old_text!r}"
                )
        return ordered

    def apply(self, source: bytes) -> bytes:
        """Rebuild ``source`` with every replacement applied."""
        parts: list[bytes] = []
        cursor = 0
        for replacement in self.validated():
            if replacement.end > len(source):
                raise OverlappingReplacements(
                    f"[{replacement.start}, {replacement.end}) extends past end of input"
                )
            parts.append(source[cursor:replacement.start])
            parts.append(replacement.new_text.encode("utf-8"))
            cursor = replacement.end
        parts.append(source[cursor:])
        return b"".join(parts)
