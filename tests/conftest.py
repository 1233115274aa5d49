"""
Shared fixtures: a small English/Japanese calculator dictionary.
"""

import pytest

from codelingua.dictionary import Dictionary, MultiLangDictionary
from codelingua.translate import UnifiedTranslator

ORIGIN = "github.com:acme/calc"

JA_TERMS = {
    "calculate": "計算する",
    "result": "結果",
    "value": "値",
    "sum": "合計",
    "multiply": "掛ける",
    "add": "足す",
    "subtract": "引く",
    "Calculator": "計算機",
}

JA_COMMENTS = {
    "Adds two numbers": "二つの数を足す",
    "Calculator for basic arithmetic": "基本的な算術のための計算機",
    "Hello world": "こんにちは世界",
}


@pytest.fixture
def ja_dictionary():
    """Persisted-form dictionary with terms and comments."""
    dictionary = Dictionary.create(ORIGIN, "ja", JA_TERMS)
    for english, translated in JA_COMMENTS.items():
        dictionary.add_comment(english, translated)
    return dictionary


@pytest.fixture
def hub(ja_dictionary):
    return MultiLangDictionary(ja_dictionary)


@pytest.fixture
def translator(hub):
    return UnifiedTranslator(hub)
