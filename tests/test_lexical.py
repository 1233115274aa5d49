"""
Tests for the keyword and punctuation passes.

Tests cover:
- Placeholder registry (register, restore)
- Keyword substitution outside strings and comments
- Longest-match keywords and word boundaries
- Inverse passes
- Languages without tables
"""

from codelingua.translate.lexical import (
    MaskRegistry,
    apply_keywords,
    apply_punctuation,
    has_keyword_table,
    has_punctuation_table,
    mask_protected,
    restore_keywords,
    restore_punctuation,
)


class TestMaskRegistry:
    """Test placeholder bookkeeping."""

    def test_register_numbers_placeholders(self):
        """Test placeholders count up per prefix."""
        registry = MaskRegistry()

        assert registry.register("LIT", "'a'") == "<<LIT_000>>"
        assert registry.register("LIT", "'b'") == "<<LIT_001>>"
        assert registry.mappings["<<LIT_001>>"] == "'b'"

    def test_mask_and_restore(self):
        """Test comments and strings of every style are masked and restored."""
        code = "const a = 'x'; // note\nconst b = \"y\" + `z ${a}`; /* block */"
        registry = MaskRegistry()

        masked = mask_protected(code, registry)

        assert "note" not in masked
        assert "'x'" not in masked
        assert "`z" not in masked
        assert "block" not in masked
        assert len(registry.mappings) == 5
        assert registry.restore(masked) == code


class TestKeywords:
    """Test reserved-word substitution."""

    def test_code_regions_only(self):
        """Test keywords inside strings and comments are untouched."""
        code = "if (ready) { return 'if else'; } // return early"

        assert apply_keywords(code, "ja") == "もし (ready) { 返す 'if else'; } // return early"

    def test_longest_keyword_wins(self):
        """Test longer keywords are not split by shorter ones."""
        assert apply_keywords("x instanceof Y", "ja") == "x インスタンス判定 Y"
        assert apply_keywords("typeof x", "ja") == "型判定 x"

    def test_whole_words_only(self):
        """Test keywords embedded in identifiers are not replaced."""
        code = "const format = iffy + returned + $if;"

        assert apply_keywords(code, "ja") == "定数 format = iffy + returned + $if;"

    def test_restore(self):
        """Test the inverse pass restores English keywords."""
        code = "if (a) { return b; } else { return null; }"

        translated = apply_keywords(code, "ja")

        assert translated == "もし (a) { 返す b; } それ以外 { 返す ヌル; }"
        assert restore_keywords(translated, "ja") == code

    def test_restore_prefers_longest(self):
        """Test '変数宣言' folds back to var, not let."""
        assert restore_keywords("変数宣言 x = 1; 変数 y = 2;", "ja") == "var x = 1; let y = 2;"

    def test_unknown_language_is_noop(self):
        """Test languages without a table return the input."""
        code = "const x = 1;"

        assert apply_keywords(code, "es") == code
        assert restore_keywords(code, "es") == code


class TestPunctuation:
    """Test full-width punctuation."""

    def test_apply_everywhere(self):
        """Test punctuation is replaced in code, strings and comments alike."""
        assert apply_punctuation("a.b(c); // d!", "ja") == "a．b（c）； ／／ d！"

    def test_restore(self):
        """Test the inverse pass restores ASCII."""
        code = "x[0] = {a: 1, b: 'c'};"

        assert restore_punctuation(apply_punctuation(code, "ja"), "ja") == code

    def test_unknown_language_is_noop(self):
        """Test languages without a table return the input."""
        assert apply_punctuation("a.b;", "fr") == "a.b;"


class TestTables:
    """Test table availability."""

    def test_table_lookup(self):
        """Test which languages carry lexical tables."""
        assert has_keyword_table("ja")
        assert has_punctuation_table("ja")
        assert not has_keyword_table("es")
        assert not has_punctuation_table("en")
