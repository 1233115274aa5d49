"""
Tests for the mapping-based Translator.
"""

import pytest

from codelingua.dictionary import hash_comment
from codelingua.models import TranslationScope
from codelingua.translate import Translator

SPANISH = {"Calculator": "Calculadora", "add": "sumar", "value": "valor", "result": "resultado"}

SOURCE = """\
class Calculator {
  // Adds two numbers
  add(value) {
    const result = value + 1;
    return result;
  }
}
"""

EXPECTED = """\
class Calculadora {
  // Suma dos números
  sumar(valor) {
    const resultado = valor + 1;
    return resultado;
  }
}
"""


@pytest.fixture
def spanish():
    translator = Translator(SPANISH, target_language="es")
    translator.set_comment_translations({
        hash_comment("Adds two numbers"): {"en": "Adds two numbers", "es": "Suma dos números"},
        hash_comment("Unrelated"): {"en": "Unrelated", "ja": "無関係"},
    })
    return translator


class TestTranslator:
    """Test the to_custom / to_english pair."""

    def test_to_custom(self, spanish):
        """Test names and comments are replaced, keywords stay English."""
        result = spanish.to_custom(SOURCE)

        assert result.code == EXPECTED
        assert result.translated_tokens == {"Calculator", "add", "value", "result"}
        assert result.unmapped_tokens == frozenset()

    def test_to_english(self, spanish):
        """Test the reverse direction restores the source."""
        assert spanish.to_english(EXPECTED).code == SOURCE

    def test_scope(self, spanish):
        """Test scopes restrict the rewrite."""
        result = spanish.to_custom(SOURCE, scope=TranslationScope.preset("identifiers"))

        assert "// Adds two numbers" in result.code
        assert "sumar(valor)" in result.code

    def test_unmapped_reported(self):
        """Test unknown names are reported and kept."""
        result = Translator({"add": "sumar"}).to_custom("function add(amount) {}")

        assert result.code == "function sumar(amount) {}"
        assert result.unmapped_tokens == {"amount"}

    def test_default_language_code(self):
        """Test mappings without a language use the placeholder code."""
        translator = Translator({"add": "sumar"})

        assert translator.target_language == "xx"
        assert translator.to_english("sumar();").code == "add();"

    def test_strict_ignores_unknown_names(self):
        """Test strict mode only concerns names the mapping knows."""
        translator = Translator({"add": "sumar"}, strict=True)

        assert translator.to_custom("add(other);").code == "sumar(other);"

    def test_mapper(self, spanish):
        """Test the mapper view reflects the mapping."""
        mapper = spanish.mapper

        assert mapper.to_custom("Calculator") == "Calculadora"
        assert mapper.to_english("sumar") == "add"
        assert len(mapper) == 4
