"""
Tests for comment reconstruction around translated text.
"""

from codelingua.extract.comments import CommentExtractor
from codelingua.translate.comments import format_comment


def _only_comment(source, file_path=None):
    comments = CommentExtractor().extract_with_positions(source, file_path)
    assert len(comments) == 1
    return comments[0], source.encode("utf-8")


class TestLineComments:
    """Test single-line comment reconstruction."""

    def test_marker_is_kept(self):
        """Test '///' doc markers survive."""
        comment, data = _only_comment("/// Old text\nfn main() {}\n", "lib.rs")

        assert format_comment("新しい文", comment, data) == "/// 新しい文"

    def test_multiline_translation_on_own_line(self):
        """Test a comment on its own line stays one comment."""
        comment, data = _only_comment("function f() {\n    // Old text\n}\n")

        assert format_comment("一行目\n二行目", comment, data) == "// 一行目 二行目"

    def test_trailing_comment_is_flattened(self):
        """Test a comment after code stays on its line."""
        comment, data = _only_comment("call(); // Old text\n")

        assert format_comment("一行目\n二行目", comment, data) == "// 一行目 二行目"


class TestBlockComments:
    """Test block and doc comment reconstruction."""

    def test_inline_block(self):
        """Test a one-line block stays one line."""
        comment, data = _only_comment("/* Old text */\nx();\n")

        assert format_comment("新しい文", comment, data) == "/* 新しい文 */"

    def test_inline_block_multiline_translation(self):
        """Test a one-line block expands to the standard layout."""
        comment, data = _only_comment("/* Old text */\nx();\n")

        assert format_comment("一\n二", comment, data) == "/*\n * 一\n * 二\n */"

    def test_doc_comment_layout(self):
        """Test doc comments keep opener, gutter and closer."""
        source = "class A {\n  /**\n   * Old text\n   */\n  run() {}\n}\n"
        comment, data = _only_comment(source)

        assert format_comment("一\n二", comment, data) == "/**\n   * 一\n   * 二\n   */"

    def test_first_line_text_and_inline_closer(self):
        """Test text on the opener line and a closer on the last text line."""
        comment, data = _only_comment("/* Old line\n   continues */\nx();\n")

        assert format_comment("一\n二", comment, data) == "/* 一\n   二 */"

    def test_crlf_doc_comment(self):
        """Test CRLF line endings inside a block are kept."""
        source = "class A {\r\n  /**\r\n   * Old text\r\n   */\r\n  run() {}\r\n}\r\n"
        comment, data = _only_comment(source)

        assert format_comment("一\n二", comment, data) == "/**\r\n   * 一\r\n   * 二\r\n   */"

    def test_crlf_expanded_inline_block(self):
        """Test an expanded one-line block follows the file's line endings."""
        comment, data = _only_comment("/* Old text */\r\nx();\r\n")

        assert format_comment("一\r\n二", comment, data) == "/*\r\n * 一\r\n * 二\r\n */"


class TestHtmlComments:
    """Test template comments."""

    def test_html_comment(self):
        """Test HTML comments keep their delimiters."""
        comment, data = _only_comment("<template>\n  <!-- Old text -->\n</template>\n", "App.vue")

        assert format_comment("新しい文", comment, data) == "<!-- 新しい文 -->"
