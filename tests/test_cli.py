"""
Tests for the command-line interface.
"""

import json

import pytest
from typer.testing import CliRunner

from codelingua import __version__
from codelingua.cli import app
from codelingua.dictionary import Dictionary, load_dictionary, save_dictionary

ORIGIN = "github.com:acme/calc"

runner = CliRunner()


@pytest.fixture
def dict_file(tmp_path):
    path = tmp_path / "calc_ja.json"
    dictionary = Dictionary.create(ORIGIN, "ja", {"calculate": "計算する", "value": "値"})
    dictionary.add_comment("Doubles a value", "値を二倍にする")
    save_dictionary(dictionary, path)
    return path


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "calc.ts"
    path.write_text(
        "// Doubles a value\nfunction calculate(value, factor) {\n  return value * 2;\n}\n",
        encoding="utf-8",
    )
    return path


class TestVersion:
    def test_version(self):
        """Test --version prints the package version."""
        result = runner.invoke(app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output


class TestTranslateCommand:
    """Test the translate command."""

    def test_translate_to_file(self, dict_file, source_file, tmp_path):
        """Test a file is translated and written to --output."""
        out = tmp_path / "calc_ja.ts"

        result = runner.invoke(app, [
            "translate", str(source_file), "--dict", str(dict_file), "-s", "en", "-t", "ja", "-o", str(out),
        ])

        assert result.exit_code == 0
        assert out.read_text(encoding="utf-8") == (
            "// 値を二倍にする\nfunction 計算する(値, factor) {\n  return 値 * 2;\n}\n"
        )
        assert "factor" in result.output

    def test_translate_back(self, dict_file, tmp_path):
        """Test the reverse direction with a scope override."""
        source = tmp_path / "calc_ja.ts"
        source.write_text("// 値を二倍にする\nconst 値 = 1;\n", encoding="utf-8")
        out = tmp_path / "calc_en.ts"

        result = runner.invoke(app, [
            "translate", str(source), "-d", str(dict_file), "-s", "ja", "-t", "en",
            "--no-comments", "-o", str(out),
        ])

        assert result.exit_code == 0
        assert out.read_text(encoding="utf-8") == "// 値を二倍にする\nconst value = 1;\n"

    def test_unknown_scope(self, dict_file, source_file):
        """Test an unknown preset is a usage error."""
        result = runner.invoke(app, [
            "translate", str(source_file), "--dict", str(dict_file), "--scope", "everything",
        ])

        assert result.exit_code == 1

    def test_malformed_dictionary(self, source_file, tmp_path):
        """Test a malformed dictionary file is reported, not raised."""
        bad = tmp_path / "bad.json"
        bad.write_text('{"origin": "x"}', encoding="utf-8")

        result = runner.invoke(app, ["translate", str(source_file), "--dict", str(bad)])

        assert result.exit_code == 1
        assert "Error" in result.output


class TestExtractCommand:
    """Test the extract command."""

    def test_identifiers_json(self, source_file):
        """Test JSON output for identifiers."""
        result = runner.invoke(app, ["extract", str(source_file), "--json"])

        assert result.exit_code == 0
        names = [row["name"] for row in json.loads(result.stdout)]
        assert names == ["calculate", "factor", "value"]

    def test_comments_json(self, source_file):
        """Test JSON output for comments."""
        result = runner.invoke(app, ["extract", str(source_file), "--kind", "comments", "--json"])

        assert result.exit_code == 0
        [row] = json.loads(result.stdout)
        assert row["text"] == "Doubles a value"
        assert row["kind"] == "single-line"

    def test_unknown_kind(self, source_file):
        """Test an unknown kind exits with an error."""
        result = runner.invoke(app, ["extract", str(source_file), "--kind", "strings"])

        assert result.exit_code == 1


class TestDictCommands:
    """Test dictionary management commands."""

    def test_init_add_lookup(self, tmp_path):
        """Test creating a dictionary, adding a term and looking it up."""
        path = tmp_path / "new_ja.json"

        result = runner.invoke(app, ["dict", "init", ORIGIN, "ja", "--path", str(path)])
        assert result.exit_code == 0
        assert load_dictionary(path).terms == {}

        result = runner.invoke(app, ["dict", "add", str(path), "total", "合計"])
        assert result.exit_code == 0
        assert load_dictionary(path).terms == {"total": "合計"}
        assert load_dictionary(path).metadata.version == "1.0.1"

        result = runner.invoke(app, ["dict", "lookup", "合計", "-d", str(path), "-s", "ja", "-t", "en"])
        assert result.exit_code == 0
        assert "total" in result.output

    def test_init_refuses_overwrite(self, dict_file):
        """Test an existing file needs --force."""
        result = runner.invoke(app, ["dict", "init", ORIGIN, "ja", "--path", str(dict_file)])

        assert result.exit_code == 1
        assert load_dictionary(dict_file).terms

    def test_init_refuses_english(self, tmp_path):
        """Test English dictionaries are rejected."""
        result = runner.invoke(app, ["dict", "init", ORIGIN, "en", "--path", str(tmp_path / "en.json")])

        assert result.exit_code == 1

    def test_add_comment(self, dict_file):
        """Test --comment stores a comment translation."""
        result = runner.invoke(app, ["dict", "add", str(dict_file), "Hello world", "こんにちは世界", "--comment"])

        assert result.exit_code == 0
        records = load_dictionary(dict_file).comments.values()
        assert {"en": "Hello world", "ja": "こんにちは世界"} in list(records)

    def test_show(self, dict_file):
        """Test the term table and search filter."""
        result = runner.invoke(app, ["dict", "show", str(dict_file), "--search", "calc"])

        assert result.exit_code == 0
        assert "計算する" in result.output
        assert "2 terms" in result.output

    def test_lookup_missing(self, dict_file):
        """Test an unknown term is reported without failing."""
        result = runner.invoke(app, ["dict", "lookup", "unknown", "-d", str(dict_file), "-t", "ja"])

        assert result.exit_code == 0
        assert "Term not found" in result.output
