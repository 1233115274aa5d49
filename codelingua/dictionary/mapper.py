from __future__ import annotations

from typing import Mapping, Optional


class TokenMapper:
    """Bidirectional English <-> foreign term map.

    Foreign terms need not be unique; when two English terms share one
    translation the reverse direction resolves to the last one added.
    """

    def __init__(self, mapping: Mapping[str, str] | None = None):
        self._forward: dict[str, str] = {}
        self._reverse: dict[str, str] = {}
        for english, foreign in (mapping or {}).items():
            self.add(english, foreign)

    def __len__(self) -> int:
        return len(self._forward)

    def add(self, english: str, foreign: str) -> None:
        previous = self._forward.get(english)
        if previous is not None and previous != foreign and self._reverse.get(previous) == english:
            del self._reverse[previous]
        self._forward[english] = foreign
        self._reverse[foreign] = english

    def remove(self, english: str) -> None:
        foreign = self._forward.pop(english)
        if self._reverse.get(foreign) == english:
            del self._reverse[foreign]

    def to_custom(self, token: str) -> Optional[str]:
        """Translate an English token to its foreign form."""
        return self._forward.get(token)

    def to_english(self, token: str) -> Optional[str]:
        """Translate a foreign token back to English."""
        return self._reverse.get(token)

    def has_custom(self, token: str) -> bool:
        """Whether ``token`` is an English key of the forward map."""
        return token in self._forward

    def has_english(self, token: str) -> bool:
        """Whether ``token`` is a foreign key of the reverse map."""
        return token in self._reverse

    def all_english_tokens(self) -> list[str]:
        return list(self._forward)

    def all_custom_tokens(self) -> list[str]:
        return list(self._reverse)

    def to_dict(self) -> dict[str, str]:
        return dict(self._forward)
