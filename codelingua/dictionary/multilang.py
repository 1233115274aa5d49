"""
Multi-language dictionary (hub model).

Every stored dictionary pairs English with one other language. Translation
between two non-English languages routes through English as an implicit
pivot, so N languages need N dictionaries rather than N² pairs:

    translate(term, A, B):
        A == B     -> term
        A == "en"  -> forward lookup into B
        B == "en"  -> reverse lookup from A
        otherwise  -> reverse lookup from A, then forward lookup into B

Comments use the same scheme with content-hash keys. The primary map is
keyed by the hash of the English text and holds ``{en, langX, langY, ...}``;
a secondary index maps the hash of any translated text back to the English
text, so a comment written in any language can be looked up directly. A third
index is keyed by the folded text (NFKC, whitespace collapsed), so text whose
punctuation was widened or narrowed, or whose lines were joined, still
resolves. All indexes are built once and updated on every mutation.

Example:
    >>> dict_ja = MultiLangDictionary(Dictionary.create("repo", "ja", {"database": "データベース"}))
    >>> dict_ja.get_translation("database", "en", "ja")
    'データベース'
    >>> dict_ja.get_translation("データベース", "ja", "en")
    'database'

Instances are not synchronized; callers serialize mutations.
"""

from __future__ import annotations

import unicodedata
from typing import Mapping, Optional

from codelingua.config import PIVOT_LANG
from codelingua.dictionary.mapper import TokenMapper
from codelingua.dictionary.model import Dictionary, hash_comment


class MultiLangDictionary:
    """Runtime view over one or more dictionaries of the same origin.

    Args:
        dictionary: The primary dictionary; its language is the default for
            mutations.
        *others: Further dictionaries (other languages, same origin) to
            attach, enabling non-English to non-English translation.
    """

    def __init__(self, dictionary: Dictionary, *others: Dictionary):
        self.origin = dictionary.origin
        self.language = dictionary.language
        self._dictionaries: dict[str, Dictionary] = {}
        self._mappers: dict[str, TokenMapper] = {}
        self._comments: dict[str, dict[str, str]] = {}
        self._reverse_comments: dict[str, str] = {}
        self._folded_comments: dict[str, str] = {}
        for d in (dictionary, *others):
            self.attach(d)

    def attach(self, dictionary: Dictionary) -> None:
        """Add (or replace) the dictionary for one more language."""
        if dictionary.origin != self.origin:
            raise ValueError(
                f"Cannot attach dictionary for {dictionary.origin!r} to {self.origin!r}"
            )
        if dictionary.language == PIVOT_LANG:
            raise ValueError("The pivot language has no dictionary of its own")
        self._dictionaries[dictionary.language] = dictionary
        self._mappers[dictionary.language] = TokenMapper(dictionary.terms)
        for key, record in dictionary.comments.items():
            self._index_comment(key, record)

    @property
    def languages(self) -> list[str]:
        return list(self._mappers)

    def dictionary(self, language: str | None = None) -> Dictionary:
        """The backing record for a language (default: the primary one)."""
        return self._dictionaries[language or self.language]

    # ------------------------------------------------------------------
    # Terms
    # ------------------------------------------------------------------

    def get_translation(self, term: str, source_lang: str, target_lang: str) -> Optional[str]:
        """Translate a term between any two loaded languages."""
        if source_lang == target_lang:
            return term
        if source_lang == PIVOT_LANG:
            return self._forward(term, target_lang)
        english = self._reverse(term, source_lang)
        if target_lang == PIVOT_LANG or english is None:
            return english
        return self._forward(english, target_lang)

    def has_term(self, term: str) -> bool:
        """Whether the term is known in any language, either direction."""
        return any(m.has_custom(term) or m.has_english(term) for m in self._mappers.values())

    def has_term_in_language(self, term: str, lang: str) -> bool:
        if lang == PIVOT_LANG:
            return any(m.has_custom(term) for m in self._mappers.values())
        mapper = self._mappers.get(lang)
        return mapper is not None and mapper.has_english(term)

    def get_all_terms(self, lang: str) -> list[str]:
        if lang == PIVOT_LANG:
            return list(dict.fromkeys(t for m in self._mappers.values() for t in m.all_english_tokens()))
        mapper = self._mappers.get(lang)
        return mapper.all_custom_tokens() if mapper else []

    @property
    def term_count(self) -> int:
        return len(self._mappers[self.language])

    def add_terms(self, terms: Mapping[str, str], language: str | None = None) -> None:
        """Add English -> foreign terms, visible to lookups immediately."""
        lang = language or self.language
        if lang not in self._mappers:
            raise KeyError(f"No {lang!r} dictionary attached for {self.origin!r}")
        self._dictionaries[lang].add_terms(terms)
        mapper = self._mappers[lang]
        for english, foreign in terms.items():
            mapper.add(english, foreign)

    def _forward(self, english: str, lang: str) -> Optional[str]:
        mapper = self._mappers.get(lang)
        return mapper.to_custom(english) if mapper else None

    def _reverse(self, foreign: str, lang: str) -> Optional[str]:
        mapper = self._mappers.get(lang)
        return mapper.to_english(foreign) if mapper else None

    # ------------------------------------------------------------------
    # Comments
    # ------------------------------------------------------------------

    def get_comment_translation(self, text: str, target_lang: str) -> Optional[str]:
        """Translate a comment (or human-readable string) written in any language."""
        key = hash_comment(text)
        record = self._comments.get(key)
        if record and record.get(target_lang):
            return record[target_lang]

        english = self._reverse_comments.get(key) or self._folded_comments.get(hash_comment(fold_comment(text)))
        if not english:
            return None
        if target_lang == PIVOT_LANG:
            return english
        record = self._comments.get(hash_comment(english))
        return record.get(target_lang) if record else None

    def add_comment_translation(self, english: str, translated: str, language: str | None = None) -> None:
        lang = language or self.language
        if lang not in self._dictionaries:
            raise KeyError(f"No {lang!r} dictionary attached for {self.origin!r}")
        key = self._dictionaries[lang].add_comment(english, translated, lang)
        self._index_comment(key, {"en": english.strip(), lang: translated.strip()})

    def has_comment(self, text: str) -> bool:
        key = hash_comment(text)
        return (
            key in self._comments
            or key in self._reverse_comments
            or hash_comment(fold_comment(text)) in self._folded_comments
        )

    def raw_comments(self) -> dict[str, dict[str, str]]:
        return {key: dict(record) for key, record in self._comments.items()}

    def _index_comment(self, key: str, record: Mapping[str, str]) -> None:
        merged = {**self._comments.get(key, {}), **record}
        self._comments[key] = merged
        english = merged.get(PIVOT_LANG)
        if not english:
            return
        for text in merged.values():
            if text:
                self._reverse_comments[hash_comment(text)] = english
                self._folded_comments[hash_comment(fold_comment(text))] = english


def fold_comment(text: str) -> str:
    """Comparison form of a comment: full-width forms narrowed, whitespace runs collapsed."""
    return " ".join(unicodedata.normalize("NFKC", text).split())
