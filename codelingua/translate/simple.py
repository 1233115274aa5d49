"""
Mapping-based translator.

A thin convenience layer for callers that have a plain ``{english: custom}``
mapping rather than a stored dictionary:

    >>> translator = Translator({"Calculator": "Calculadora", "add": "sumar"})
    >>> translator.to_custom("class Calculator { add() {} }").code
    'class Calculadora { sumar() {} }'

Keywords stay in English, so the output remains valid code with full
tooling support; ``to_english`` restores the original.
"""

from __future__ import annotations

from typing import Mapping

from codelingua.config import PIVOT_LANG
from codelingua.dictionary.mapper import TokenMapper
from codelingua.dictionary.model import Dictionary
from codelingua.dictionary.multilang import MultiLangDictionary
from codelingua.models import TranslationResult, TranslationScope
from codelingua.translate.unified import UnifiedTranslator

# Placeholder language code for mappings that are not tied to a real language
CUSTOM_LANG = "xx"


class Translator:
    """Bidirectional translator over a flat token mapping.

    Args:
        mapping: English token -> custom token
        target_language: Language code of the custom tokens
        strict: See UnifiedTranslator
    """

    def __init__(self, mapping: Mapping[str, str], target_language: str = CUSTOM_LANG, strict: bool = False):
        self.target_language = target_language
        self.strict = strict
        self._dictionary = MultiLangDictionary(Dictionary.create("local", target_language, mapping))
        self._translator = UnifiedTranslator(self._dictionary, strict=strict)

    @property
    def mapper(self) -> TokenMapper:
        return TokenMapper(self._dictionary.dictionary().terms)

    def set_comment_translations(self, translations: Mapping[str, Mapping[str, str]]) -> None:
        """Load comment translations keyed by hash (``{en: ..., <lang>: ...}``)."""
        for record in translations.values():
            english = record.get(PIVOT_LANG)
            translated = record.get(self.target_language)
            if english and translated:
                self._dictionary.add_comment_translation(english, translated, self.target_language)

    def to_custom(
        self,
        code: str,
        scope: TranslationScope | None = None,
        file_path: str | None = None,
    ) -> TranslationResult:
        """Translate English code to use custom tokens."""
        return self._translator.translate(code, PIVOT_LANG, self.target_language, scope, file_path)

    def to_english(
        self,
        code: str,
        scope: TranslationScope | None = None,
        file_path: str | None = None,
    ) -> TranslationResult:
        """Translate custom-token code back to English."""
        return self._translator.translate(code, self.target_language, PIVOT_LANG, scope, file_path)
