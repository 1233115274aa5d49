"""
Tests for comment extraction.

Tests cover:
- Unique texts for dictionary building
- Byte spans (including multibyte sources) for in-place rewriting
- Gutter stripping in doc blocks
- End-of-file comments
- Rust doc comments and Vue template comments
"""

from codelingua.extract.comments import CommentExtractor, extract_comments
from codelingua.models import CommentKind


class TestExtract:
    """Test the deduplicated text view."""

    def test_unique_in_order(self):
        """Test duplicates are collapsed, first appearance wins."""
        source = "// Beta\nx();\n// Alpha\ny();\n// Beta\n"

        assert extract_comments(source) == ["Beta", "Alpha"]

    def test_empty_comments_dropped(self):
        """Test comments with no text are not reported."""
        assert extract_comments("//\nx();\n/* */\n") == []

    def test_doc_block_gutters_stripped(self):
        """Test '*' gutters and delimiters are removed line by line."""
        source = "/**\n * Line one\n * Line two\n */\nfunction f() {}\n"

        assert extract_comments(source) == ["Line one\nLine two"]


class TestPositions:
    """Test the positioned view used for rewriting."""

    def test_spans_are_byte_offsets(self):
        """Test spans index the UTF-8 bytes of the source."""
        source = "const 値 = 1; // 説明\n"
        data = source.encode("utf-8")

        [comment] = CommentExtractor().extract_with_positions(source)

        assert data[comment.start:comment.end].decode("utf-8") == "// 説明"
        assert comment.full_text == "// 説明"
        assert comment.text == "説明"
        assert comment.kind is CommentKind.SINGLE_LINE

    def test_duplicates_kept_and_sorted(self):
        """Test every occurrence is returned in source order."""
        source = "/* Same */ a();\n// Same\n"

        comments = CommentExtractor().extract_with_positions(source)

        assert [c.kind for c in comments] == [CommentKind.BLOCK, CommentKind.SINGLE_LINE]
        assert [c.text for c in comments] == ["Same", "Same"]
        assert comments[0].start < comments[1].start

    def test_trailing_comment_at_eof(self):
        """Test a comment after the last token without a final newline."""
        source = "run();\n// done"

        [comment] = CommentExtractor().extract_with_positions(source)

        assert comment.text == "done"
        assert comment.end == len(source.encode("utf-8"))

    def test_to_dict(self):
        """Test JSON-ready output."""
        [comment] = CommentExtractor().extract_with_positions("// hi\n")

        assert comment.to_dict() == {
            "text": "hi",
            "full_text": "// hi",
            "start": 0,
            "end": 5,
            "kind": "single-line",
        }


class TestGrammars:
    """Test grammar-specific comment forms."""

    def test_rust_doc_comments(self):
        """Test '//!' and '///' markers are stripped like '//'."""
        source = "//! Crate docs\n/// Adds one\nfn add(v: i32) -> i32 { v + 1 }\n"

        assert extract_comments(source, "lib.rs") == ["Crate docs", "Adds one"]

    def test_rust_block_comment(self):
        """Test Rust block comments."""
        [comment] = CommentExtractor().extract_with_positions("/* note */\nfn main() {}\n", "main.rs")

        assert comment.kind is CommentKind.BLOCK
        assert comment.text == "note"

    def test_vue_spans_are_whole_file_offsets(self):
        """Test template and script comments index the full component."""
        source = (
            "<template>\n"
            "  <!-- Header area -->\n"
            "  <h1>タイトル</h1>\n"
            "</template>\n"
            "<script>\n"
            "// Script note\n"
            "export default {};\n"
            "</script>\n"
        )
        data = source.encode("utf-8")

        comments = CommentExtractor().extract_with_positions(source, "Page.vue")

        assert [c.text for c in comments] == ["Header area", "Script note"]
        assert [c.kind for c in comments] == [CommentKind.HTML, CommentKind.SINGLE_LINE]
        for comment in comments:
            assert data[comment.start:comment.end].decode("utf-8") == comment.full_text

    def test_vue_html_comment_inside_script_ignored(self):
        """Test '<!--' inside a script body is not a template comment."""
        source = "<script>\nconst s = '<!-- not html -->';\n</script>\n"

        assert extract_comments(source, "Odd.vue") == []
