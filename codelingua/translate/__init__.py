"""
Code translation: the tree-guided rewriter and its helpers.

This module provides:
- UnifiedTranslator: bidirectional rewriter for any language pair
- Translator: convenience wrapper over a flat token mapping
- TermTranslator: interface for backends that produce new dictionary entries
"""

from codelingua.translate.base import (
    DummyTermTranslator,
    PopulateResult,
    TermTranslator,
    populate_dictionary,
)
from codelingua.translate.simple import Translator
from codelingua.translate.unified import UnifiedTranslator, translate

__all__ = [
    "DummyTermTranslator",
    "PopulateResult",
    "TermTranslator",
    "Translator",
    "UnifiedTranslator",
    "populate_dictionary",
    "translate",
]
