"""
Comment extraction.

Two views of the comments in a file:
- extract(): unique, trimmed comment texts, for building dictionaries
- extract_with_positions(): every comment span with exact byte offsets,
  duplicates kept, for rewriting comments in place

The tree walk collects every comment node the parser attached anywhere in
the tree; a residual scan after the last token picks up end-of-file comments
a recovering parser may have left outside the tree.
"""

from __future__ import annotations

import logging
import re

from codelingua.errors import ParseFailure
from codelingua.grammars import (
    GrammarKind,
    detect_grammar,
    find_script_regions,
    parse,
    ts_dialect,
    walk,
)
from codelingua.models import CommentKind, ExtractedComment

logger = logging.getLogger(__name__)

_COMMENT_NODE_TYPES = {"comment", "line_comment", "block_comment", "html_comment"}

LINE_MARKER_PATTERN = re.compile(r"^//[/!]?[ \t]?")
BLOCK_OPEN_PATTERN = re.compile(r"^/\*[*!]?")
BLOCK_CLOSE_PATTERN = re.compile(r"\*/$")
GUTTER_PATTERN = re.compile(r"^\s*\*(?!/)")
HTML_COMMENT_PATTERN = re.compile(rb"<!--(.*?)-->", re.S)


def comment_kind(full_text: str) -> CommentKind:
    if full_text.startswith("<!--"):
        return CommentKind.HTML
    if full_text.startswith("/*"):
        return CommentKind.BLOCK
    return CommentKind.SINGLE_LINE


def comment_text(full_text: str, kind: CommentKind) -> str:
    """Strip delimiters (and ``*`` gutters for block comments) from a comment."""
    if kind is CommentKind.SINGLE_LINE:
        return LINE_MARKER_PATTERN.sub("", full_text).strip()
    if kind is CommentKind.HTML:
        return full_text[4:-3].strip()
    body = BLOCK_CLOSE_PATTERN.sub("", BLOCK_OPEN_PATTERN.sub("", full_text, count=1), count=1)
    lines = [GUTTER_PATTERN.sub("", line, count=1).strip() for line in body.split("\n")]
    return "\n".join(lines).strip()


class CommentExtractor:
    """Extract comments from TypeScript, JavaScript, Vue and Rust sources."""

    def extract(self, source: str, file_path: str | None = None) -> list[str]:
        """Return unique, non-empty comment texts in order of appearance."""
        unique: dict[str, None] = {}
        for comment in self.extract_with_positions(source, file_path):
            text = comment.text.strip()
            if text:
                unique.setdefault(text, None)
        return list(unique)

    def extract_with_positions(self, source: str, file_path: str | None = None) -> list[ExtractedComment]:
        """Return every comment with its byte span, sorted by start offset.

        Parse failures are logged and yield an empty list.
        """
        data = source.encode("utf-8")
        grammar = detect_grammar(file_path)
        try:
            if grammar is GrammarKind.TEMPLATE:
                comments = self._from_template(data, file_path)
            elif grammar is GrammarKind.OWNERSHIP:
                comments = self._from_tree(data, "rust", file_path)
            else:
                comments = self._from_tree(data, ts_dialect(file_path), file_path)
        except ParseFailure as exc:
            logger.warning("Comment extraction failed for %s: %s", file_path or "<source>", exc)
            return []
        return sorted(comments, key=lambda c: c.start)

    # ------------------------------------------------------------------

    def _from_tree(self, data: bytes, grammar: str, file_path: str | None, offset: int = 0) -> list[ExtractedComment]:
        tree = parse(data, grammar, file_path)
        spans: dict[tuple[int, int], None] = {}
        last_token_end = 0
        for node in walk(tree.root_node):
            if node.type in _COMMENT_NODE_TYPES:
                spans.setdefault(_trim_span(data, node.start_byte, node.end_byte), None)
            elif node.child_count == 0:
                last_token_end = max(last_token_end, node.end_byte)
        for span in _trailing_comment_spans(data, last_token_end):
            spans.setdefault(span, None)
        return [_make_comment(data, start, end, offset) for start, end in spans]

    def _from_template(self, data: bytes, file_path: str | None) -> list[ExtractedComment]:
        comments: list[ExtractedComment] = []
        regions = find_script_regions(data)
        for region in regions:
            script = data[region.start:region.end]
            virtual = region.virtual_path(file_path)
            comments.extend(self._from_tree(script, ts_dialect(virtual), virtual, offset=region.start))
        for match in HTML_COMMENT_PATTERN.finditer(data):
            if any(match.start() < r.end and r.start < match.end() for r in regions):
                continue
            comments.append(_make_comment(data, match.start(), match.end()))
        return comments


def _trim_span(data: bytes, start: int, end: int) -> tuple[int, int]:
    """Drop trailing line breaks some grammars include in line comments."""
    while end > start and data[end - 1:end] in (b"\n", b"\r"):
        end -= 1
    return start, end


def _trailing_comment_spans(data: bytes, pos: int) -> list[tuple[int, int]]:
    """Scan comment trivia after the last real token of a file."""
    spans = []
    length = len(data)
    while pos < length:
        if data[pos:pos + 1].isspace():
            pos += 1
        elif data.startswith(b"//", pos):
            end = data.find(b"\n", pos)
            end = length if end == -1 else end
            spans.append(_trim_span(data, pos, end))
            pos = end
        elif data.startswith(b"/*", pos):
            end = data.find(b"*/", pos + 2)
            if end == -1:
                break
            spans.append((pos, end + 2))
            pos = end + 2
        else:
            break
    return spans


def _make_comment(data: bytes, start: int, end: int, offset: int = 0) -> ExtractedComment:
    full_text = data[start:end].decode("utf-8", errors="replace")
    kind = comment_kind(full_text)
    return ExtractedComment(
        text=comment_text(full_text, kind),
        full_text=full_text,
        start=start + offset,
        end=end + offset,
        kind=kind,
    )


def extract_comments(source: str, file_path: str | None = None) -> list[str]:
    """Module-level convenience wrapper around :class:`CommentExtractor`."""
    return CommentExtractor().extract(source, file_path)
