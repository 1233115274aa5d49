"""
Markdown block extraction.

Pulls translatable prose out of markdown documents: headings, paragraphs,
list items, blockquotes and table cells. Code (fenced, indented, inline),
HTML, images, link targets, YAML front matter and horizontal rules are
skipped. Parsing uses markdown-it-py's CommonMark parser with tables enabled.
"""

from __future__ import annotations

import re

from markdown_it import MarkdownIt
from markdown_it.token import Token

from codelingua.models import MarkdownBlock

# Innermost enclosing block decides the block type of an inline run.
_BLOCK_TYPES = {
    "heading_open": "heading",
    "th_open": "table_cell",
    "td_open": "table_cell",
    "list_item_open": "list_item",
    "blockquote_open": "blockquote",
}

_SKIPPED_INLINE = {"code_inline", "image", "html_inline"}

URL_PATTERN = re.compile(r"^https?://")
FILE_PATH_PATTERN = re.compile(r"^[./~].*\.[a-z]+$", re.IGNORECASE)
CODE_CHAR_PATTERN = re.compile(r"[{}()\[\]<>|&;$@#]")
LETTER_PATTERN = re.compile(r"[^\W\d_]")


class MarkdownExtractor:
    """Extract translatable text blocks from markdown content."""

    def __init__(self):
        self._md = MarkdownIt("commonmark").enable("table")

    def extract(self, content: str) -> list[str]:
        """Return unique translatable texts in document order."""
        unique: dict[str, None] = {}
        for block in self.extract_with_positions(content):
            text = block.text.strip()
            if text and is_translatable_text(text):
                unique.setdefault(text, None)
        return list(unique)

    def extract_with_positions(self, content: str) -> list[MarkdownBlock]:
        tokens = self._md.parse(_blank_front_matter(content))
        blocks: list[MarkdownBlock] = []
        stack: list[Token] = []
        line = 1

        for token in tokens:
            if token.map:
                line = token.map[0] + 1
            if token.nesting == 1:
                stack.append(token)
            elif token.nesting == -1:
                if stack:
                    stack.pop()
            elif token.type == "inline":
                text = _inline_text(token.children or [])
                if text:
                    blocks.append(MarkdownBlock(text=text, type=_block_type(stack), line=line))
        return blocks


def _block_type(stack: list[Token]) -> str:
    for token in reversed(stack):
        if token.type in _BLOCK_TYPES:
            return _BLOCK_TYPES[token.type]
    return "paragraph"


def _inline_text(children: list[Token]) -> str:
    parts: list[str] = []
    in_autolink = False
    for child in children:
        if child.type == "link_open":
            in_autolink = child.markup == "autolink"
        elif child.type == "link_close":
            in_autolink = False
        elif in_autolink or child.type in _SKIPPED_INLINE:
            continue
        elif child.type == "text":
            parts.append(child.content)
        elif child.type in ("softbreak", "hardbreak"):
            parts.append(" ")
    return re.sub(r"\s+", " ", "".join(parts)).strip()


def _blank_front_matter(content: str) -> str:
    """Blank out a leading YAML front matter block, keeping line numbers."""
    lines = content.split("\n")
    if not lines or lines[0].strip() != "---":
        return content
    for index in range(1, len(lines)):
        if lines[index].strip() == "---":
            return "\n".join([""] * (index + 1) + lines[index + 1:])
    return content


def is_translatable_text(text: str) -> bool:
    """Whether a block of markdown text is worth translating."""
    if len(text) < 3:
        return False
    if URL_PATTERN.match(text):
        return False
    if FILE_PATH_PATTERN.match(text):
        return False
    code_chars = CODE_CHAR_PATTERN.findall(text)
    if len(code_chars) > len(text) * 0.1:
        return False
    return bool(LETTER_PATTERN.search(text))


def extract_markdown(content: str) -> list[str]:
    """Module-level convenience wrapper around :class:`MarkdownExtractor`."""
    return MarkdownExtractor().extract(content)
