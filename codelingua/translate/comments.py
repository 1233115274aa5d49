"""
Comment reconstruction.

Rebuilds a comment around translated text while keeping the original's
delimiter style, layout and line endings:

    // text            marker kept (//, /// or //!); always one line
    /* text */         single-line block stays single-line
    /**                doc and plain blocks keep their opener, the
     * line one        continuation prefix of their interior lines and
     * line two        whether the closer sits on its own line
     */
    <!-- text -->      template HTML comments

Multi-line translations of block and HTML comments get one output line per
translated line. Line comments are flattened so that each one still reads
back as a single comment.
"""

from __future__ import annotations

import re

from codelingua.extract.comments import BLOCK_OPEN_PATTERN, LINE_MARKER_PATTERN
from codelingua.models import CommentKind, ExtractedComment

_CONTINUATION_PATTERN = re.compile(r"^[ \t]*(?:\*(?!/)[ \t]?)?")
_INDENT_PATTERN = re.compile(r"^[ \t]*")
DEFAULT_CONTINUATION = " * "


def format_comment(translated: str, comment: ExtractedComment, source: bytes) -> str:
    """Return the full replacement text for ``comment``.

    Args:
        translated: Translated comment text (may contain newlines)
        comment: The comment being replaced
        source: The whole source as UTF-8 bytes (used to read the
            comment's indentation and line endings)
    """
    lines = translated.strip().replace("\r\n", "\n").split("\n")
    newline = _line_ending(source, comment)
    if comment.kind is CommentKind.HTML:
        return "<!-- " + newline.join(lines) + " -->"
    if comment.kind is CommentKind.SINGLE_LINE:
        return _format_line_comment(lines, comment.full_text)
    full_text = comment.full_text.replace("\r\n", "\n")
    indent = _leading_indent(source, comment.start)
    return newline.join(_format_block_comment(lines, full_text, indent))


def _leading_indent(source: bytes, start: int) -> str | None:
    """Whitespace before ``start`` on its line, or None if code precedes it."""
    line_start = source.rfind(b"\n", 0, start) + 1
    prefix = source[line_start:start].decode("utf-8", errors="replace")
    return prefix if not prefix.strip() else None


def _line_ending(source: bytes, comment: ExtractedComment) -> str:
    """CRLF if the comment (or the line it ends on) uses it, else LF."""
    if "\n" in comment.full_text:
        return "\r\n" if "\r\n" in comment.full_text else "\n"
    eol = source.find(b"\n", comment.end)
    return "\r\n" if eol > 0 and source[eol - 1:eol] == b"\r" else "\n"


def _format_line_comment(lines: list[str], full_text: str) -> str:
    marker = LINE_MARKER_PATTERN.match(full_text).group(0).rstrip()
    return f"{marker} {' '.join(line.strip() for line in lines)}".rstrip()


def _format_block_comment(lines: list[str], full_text: str, indent: str | None) -> list[str]:
    opener = BLOCK_OPEN_PATTERN.match(full_text).group(0)
    original = full_text.split("\n")

    if len(original) == 1:
        if len(lines) == 1:
            return [f"{opener} {lines[0]} */"]
        # Single-line original, multi-line translation: standard layout
        base = indent or ""
        body = [f"{base}{DEFAULT_CONTINUATION}{line}".rstrip() for line in lines]
        return [opener, *body, f"{base} */"]

    first_inline = bool(full_text[len(opener):].split("\n", 1)[0].strip())
    closer_own_line = original[-1].strip() == "*/"
    interior = original[1:-1] if closer_own_line else original[1:]
    prefix = next(
        (_CONTINUATION_PATTERN.match(line).group(0) for line in interior if line.strip()),
        (indent or "") + DEFAULT_CONTINUATION,
    )

    out: list[str] = []
    rest = lines
    if first_inline:
        out.append(f"{opener} {lines[0]}")
        rest = lines[1:]
    else:
        out.append(opener)
    out.extend(f"{prefix}{line}".rstrip() for line in rest)

    if closer_own_line:
        out.append(_INDENT_PATTERN.match(original[-1]).group(0) + "*/")
    else:
        out[-1] = f"{out[-1]} */"
    return out
