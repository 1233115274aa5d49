"""
Heuristic for string literals worth translating.

A best-effort filter: it skips strings that are almost certainly machine
facing (URLs, paths, selectors, config keys, colors, MIME types) and keeps
anything that reads like words. Projects with unusual string conventions
may need to tune these patterns.
"""

from __future__ import annotations

import re

_SKIP_PATTERNS = [
    re.compile(r"^https?://"),                            # URLs
    re.compile(r"^[./\\]"),                               # relative / absolute paths
    re.compile(r"\.[a-z]{2,4}$"),                         # file names
    re.compile(r"^[.#][\w-]+"),                           # CSS selectors
    re.compile(r"^[\w-]+(?:\.[\w-]+)+$"),                 # dotted config keys
    re.compile(r"^\$\{"),                                 # template placeholders
    re.compile(r"^#?[0-9a-fA-F]+$"),                      # numbers, hex, colors
    re.compile(r"^(?:application|text|image|audio|video)/"),  # MIME types
]

# Two consecutive letters in any script
_WORD_PATTERN = re.compile(r"[^\W\d_]{2,}")

_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "\\": "\\", "'": "'", '"': '"'}
_ESCAPE_PATTERN = re.compile(r"\\(.)", re.S)


def should_translate_string(text: str) -> bool:
    """Whether a string literal's value looks like human-readable text."""
    if len(text) < 3:
        return False
    if any(p.search(text) for p in _SKIP_PATTERNS):
        return False
    return bool(_WORD_PATTERN.search(text))


def unescape_literal(body: str) -> str:
    """Decode the simple backslash escapes of a quoted literal's body."""
    return _ESCAPE_PATTERN.sub(lambda m: _ESCAPES.get(m.group(1), m.group(0)), body)


def escape_literal(value: str, quote: str) -> str:
    """Encode ``value`` as the body of a literal delimited by ``quote``."""
    value = value.replace("\\", "\\\\").replace(quote, "\\" + quote)
    return value.replace("\n", "\\n").replace("\r", "\\r").replace("\t", "\\t")
