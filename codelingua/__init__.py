"""
codelingua: Bidirectional translation of source code between human languages

Rewrites the identifiers and comments of a program (optionally its string
literals, reserved words and punctuation) into another human language,
keeping the code valid and the transformation reversible.

Core Components:
1. Extraction of identifiers, comments and markdown prose
2. Hub dictionary: English pivot, any language pair
3. Tree-guided rewriter with position-exact replacements

License: MIT
"""

__version__ = "0.1.0"

from codelingua.dictionary import Dictionary, MultiLangDictionary, load_dictionary, save_dictionary
from codelingua.extract import extract_comments, extract_identifiers, extract_markdown
from codelingua.models import TranslationResult, TranslationScope
from codelingua.translate import Translator, UnifiedTranslator, translate

__all__ = [
    "Dictionary",
    "MultiLangDictionary",
    "TranslationResult",
    "TranslationScope",
    "Translator",
    "UnifiedTranslator",
    "extract_comments",
    "extract_identifiers",
    "extract_markdown",
    "load_dictionary",
    "save_dictionary",
    "translate",
]
