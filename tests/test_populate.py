"""
Tests for term translator backends and dictionary population.
"""

import pytest

from codelingua.dictionary import Dictionary
from codelingua.translate import DummyTermTranslator, TermTranslator, populate_dictionary


class RecordingTranslator(TermTranslator):
    """Backend that remembers every batch it was asked for."""

    def __init__(self, answers=None):
        self.answers = answers or {}
        self.batches = []

    @property
    def name(self):
        return "recording"

    def translate(self, text, source_lang, target_lang):
        return self.answers.get(text, f"{target_lang}_{text}")

    def translate_batch(self, texts, source_lang, target_lang):
        self.batches.append((list(texts), source_lang, target_lang))
        return super().translate_batch(texts, source_lang, target_lang)


class ShortTranslator(TermTranslator):
    """Backend that drops the last item of each batch."""

    @property
    def name(self):
        return "short"

    def translate(self, text, source_lang, target_lang):
        return text

    def translate_batch(self, texts, source_lang, target_lang):
        return texts[:-1]


class TestDummyTermTranslator:
    """Test the deterministic backend."""

    @pytest.mark.parametrize("mode,expected", [
        ("echo", "value"),
        ("upper", "VALUE"),
        ("reverse", "eulav"),
        ("prefix", "ja_value"),
    ])
    def test_modes(self, mode, expected):
        """Test each mode's output."""
        translator = DummyTermTranslator(mode)

        assert translator.translate("value", "en", "ja") == expected
        assert translator.name == f"dummy-{mode}"

    def test_batch_keeps_order(self):
        """Test the default batch loops in order."""
        assert DummyTermTranslator("upper").translate_batch(["a", "bc"], "en", "ja") == ["A", "BC"]


class TestPopulateDictionary:
    """Test filling in missing entries."""

    def test_only_missing_terms_requested(self, hub):
        """Test known terms never reach the backend."""
        backend = RecordingTranslator()

        result = populate_dictionary(hub, backend, ["value", "divide", "modulo", "divide"])

        assert backend.batches == [(["divide", "modulo"], "en", "ja")]
        assert result.terms == {"divide": "ja_divide", "modulo": "ja_modulo"}
        assert hub.get_translation("divide", "en", "ja") == "ja_divide"
        assert hub.get_translation("ja_modulo", "ja", "en") == "modulo"

    def test_nothing_missing(self, hub):
        """Test a complete dictionary makes no backend calls."""
        backend = RecordingTranslator()
        version = hub.dictionary().metadata.version

        result = populate_dictionary(hub, backend, ["value", "sum"], ["Hello world"])

        assert backend.batches == []
        assert result.terms == {}
        assert result.comments == {}
        assert hub.dictionary().metadata.version == version

    def test_unusable_identifiers_rejected(self, hub):
        """Test translations that are not identifiers are not stored."""
        backend = RecordingTranslator({"divide": "割り 算", "modulo": "剰余"})

        result = populate_dictionary(hub, backend, ["divide", "modulo"])

        assert result.rejected == ["divide"]
        assert result.terms == {"modulo": "剰余"}
        assert hub.get_translation("divide", "en", "ja") is None

    def test_comments(self, hub):
        """Test missing comments are translated and indexed."""
        backend = RecordingTranslator({"Returns the total": "合計を返す"})

        result = populate_dictionary(hub, backend, [], ["  Returns the total ", "Hello world", ""])

        assert backend.batches == [(["Returns the total"], "en", "ja")]
        assert result.comments == {"Returns the total": "合計を返す"}
        assert hub.get_comment_translation("合計を返す", "en") == "Returns the total"

    def test_other_language(self, hub, ja_dictionary):
        """Test population into an attached non-primary language."""
        hub.attach(Dictionary.create(ja_dictionary.origin, "es"))

        result = populate_dictionary(hub, DummyTermTranslator("prefix"), ["value"], language="es")

        assert result.terms == {"value": "es_value"}
        assert hub.get_translation("値", "ja", "es") == "es_value"

    def test_batch_shape_mismatch(self, hub):
        """Test backends must answer every item."""
        with pytest.raises(ValueError):
            populate_dictionary(hub, ShortTranslator(), ["divide", "modulo"])
