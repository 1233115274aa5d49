"""
Term translator interface and dictionary population.

The rewriter never invents translations. New dictionary entries come from
an external term translator (a machine translation service, a model, a
human review tool) through this interface:

- TermTranslator: abstract backend, one batch in, same-shaped batch out
- DummyTermTranslator: deterministic backend for tests
- populate_dictionary(): asks a backend only for the terms and comments a
  dictionary is missing and records the answers

Design Philosophy:
- Translators are stateless: they receive the language pair with each call
- Population is the only caller; translate() never reaches a backend
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Iterable

from codelingua.config import PIVOT_LANG
from codelingua.dictionary.multilang import MultiLangDictionary

logger = logging.getLogger(__name__)


class TermTranslator(ABC):
    """Abstract base class for term and comment translation backends.

    Implementations must provide ``name`` and ``translate``; backends that
    can batch natively should override ``translate_batch``.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the translator name (e.g. 'deepl', 'dummy-upper')."""
        pass

    @abstractmethod
    def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        """Translate a single term or comment."""
        pass

    def translate_batch(self, texts: list[str], source_lang: str, target_lang: str) -> list[str]:
        """Translate multiple texts; the result has the same length and order.

        Default implementation calls translate() in a loop.
        """
        return [self.translate(text, source_lang, target_lang) for text in texts]


class DummyTermTranslator(TermTranslator):
    """A dummy translator for testing.

    Modes:
    - 'echo': Return the input unchanged
    - 'upper': Return uppercase version
    - 'prefix': Prefix with the target language (``ja_calculate``)
    - 'reverse': Reverse the text (for debugging)
    """

    def __init__(self, mode: str = "prefix"):
        self.mode = mode

    @property
    def name(self) -> str:
        return f"dummy-{self.mode}"

    def translate(self, text: str, source_lang: str, target_lang: str) -> str:
        if self.mode == "echo":
            return text
        if self.mode == "upper":
            return text.upper()
        if self.mode == "reverse":
            return text[::-1]
        return f"{target_lang}_{text}"


@dataclass
class PopulateResult:
    """What populate_dictionary() added.

    Attributes:
        terms: English term -> new translation
        comments: English comment -> new translation
        rejected: English terms whose translation is not a usable identifier
    """
    terms: dict[str, str] = field(default_factory=dict)
    comments: dict[str, str] = field(default_factory=dict)
    rejected: list[str] = field(default_factory=list)


def populate_dictionary(
    dictionary: MultiLangDictionary,
    translator: TermTranslator,
    names: Iterable[str],
    comments: Iterable[str] = (),
    language: str | None = None,
) -> PopulateResult:
    """Fill in missing term and comment translations through ``translator``.

    Only entries without a translation into ``language`` (default: the
    dictionary's own language) are sent to the backend.

    Raises:
        ValueError: if the backend returns a batch of a different length
    """
    lang = language or dictionary.language
    result = PopulateResult()

    missing_terms = [
        name for name in dict.fromkeys(names)
        if dictionary.get_translation(name, PIVOT_LANG, lang) is None
    ]
    if missing_terms:
        translated = _checked_batch(translator, missing_terms, lang)
        for english, foreign in zip(missing_terms, translated):
            foreign = foreign.strip()
            if foreign.isidentifier():
                result.terms[english] = foreign
            else:
                result.rejected.append(english)
        if result.rejected:
            logger.warning("%s returned %d unusable identifiers", translator.name, len(result.rejected))
        if result.terms:
            dictionary.add_terms(result.terms, lang)

    missing_comments = [
        text for text in dict.fromkeys(c.strip() for c in comments)
        if text and dictionary.get_comment_translation(text, lang) is None
    ]
    if missing_comments:
        translated = _checked_batch(translator, missing_comments, lang)
        for english, foreign in zip(missing_comments, translated):
            if foreign.strip():
                dictionary.add_comment_translation(english, foreign, lang)
                result.comments[english] = foreign.strip()

    logger.info(
        "Populated %s/%s with %d terms and %d comments via %s",
        dictionary.origin, lang, len(result.terms), len(result.comments), translator.name,
    )
    return result


def _checked_batch(translator: TermTranslator, texts: list[str], lang: str) -> list[str]:
    translated = translator.translate_batch(texts, PIVOT_LANG, lang)
    if len(translated) != len(texts):
        raise ValueError(
            f"{translator.name} returned {len(translated)} translations for {len(texts)} inputs"
        )
    return translated
