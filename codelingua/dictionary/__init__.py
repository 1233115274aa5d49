"""
Dictionaries: persisted records and the runtime hub-model view.
"""

from codelingua.dictionary.mapper import TokenMapper
from codelingua.dictionary.model import (
    Dictionary,
    DictionaryMetadata,
    hash_comment,
    load_dictionary,
    save_dictionary,
)
from codelingua.dictionary.multilang import MultiLangDictionary

__all__ = [
    "Dictionary",
    "DictionaryMetadata",
    "MultiLangDictionary",
    "TokenMapper",
    "hash_comment",
    "load_dictionary",
    "save_dictionary",
]
