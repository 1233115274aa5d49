"""
Lexical passes: reserved keywords and punctuation.

These passes run on already-rewritten text and work on lexical patterns,
not tree positions.

Keyword pass:
- Only languages with a keyword table take part (non-Latin scripts)
- String literals and comments are masked with placeholders first
  (e.g. <<LIT_001>>) so keywords inside them stay untouched
- Whole-word substitution in the remaining code, longest keyword first

Punctuation pass:
- ASCII punctuation to full-width forms (U+FF00 to U+FF5E)
- Character by character over the entire text, strings and comments
  included; it is a display transliteration, not a semantic rewrite

Both passes have an inverse so immersive output can be read back.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping


@dataclass
class MaskRegistry:
    """Stores mappings between placeholders and protected source text."""
    mappings: dict[str, str] = field(default_factory=dict)  # placeholder -> original
    counters: dict[str, int] = field(default_factory=dict)  # prefix -> count

    def register(self, prefix: str, original: str) -> str:
        """Register content and return a placeholder."""
        count = self.counters.get(prefix, 0)
        self.counters[prefix] = count + 1
        placeholder = f"<<{prefix}_{count:03d}>>"
        self.mappings[placeholder] = original
        return placeholder

    def restore(self, text: str) -> str:
        """Restore all placeholders in text with original content."""
        if not self.mappings:
            return text
        return PLACEHOLDER_PATTERN.sub(lambda m: self.mappings.get(m.group(0), m.group(0)), text)


# ============================================================================
# Pattern Definitions
# ============================================================================

PLACEHOLDER_PATTERN = re.compile(r"<<[A-Z]+_\d{3,}>>")

# Comments of both styles and string literals of every quoting style
PROTECTED_PATTERN = re.compile(
    r"//[^\n]*"
    r"|/\*[\s\S]*?\*/"
    r"|'(?:[^'\\\n]|\\.)*'"
    r'|"(?:[^"\\\n]|\\.)*"'
    r"|`(?:[^`\\]|\\[\s\S])*`"
)


def mask_protected(code: str, registry: MaskRegistry) -> str:
    """Replace comments and string literals with placeholders."""
    return PROTECTED_PATTERN.sub(lambda m: registry.register("LIT", m.group(0)), code)


# ============================================================================
# Tables
# ============================================================================

KEYWORD_TABLES: Mapping[str, Mapping[str, str]] = MappingProxyType({
    "ja": MappingProxyType({
        "const": "定数",
        "let": "変数",
        "var": "変数宣言",
        "function": "関数",
        "return": "返す",
        "if": "もし",
        "else": "それ以外",
        "for": "繰り返し",
        "while": "の間",
        "do": "実行",
        "switch": "分岐",
        "case": "場合",
        "break": "中断",
        "continue": "続行",
        "class": "クラス",
        "extends": "継承",
        "implements": "実装",
        "interface": "インターフェース",
        "type": "型",
        "enum": "列挙",
        "import": "取込",
        "export": "公開",
        "default": "既定",
        "from": "から",
        "as": "として",
        "new": "新規",
        "this": "これ",
        "super": "親",
        "true": "真",
        "false": "偽",
        "null": "ヌル",
        "undefined": "未定義",
        "async": "非同期",
        "await": "待機",
        "try": "試行",
        "catch": "捕捉",
        "finally": "最終",
        "throw": "投げる",
        "typeof": "型判定",
        "instanceof": "インスタンス判定",
        "in": "含む",
        "of": "の",
        "void": "無",
        "delete": "削除",
        "yield": "譲渡",
    }),
})

PUNCTUATION_TABLES: Mapping[str, Mapping[str, str]] = MappingProxyType({
    "ja": MappingProxyType({
        ".": "．", ",": "，", ":": "：", ";": "；", "'": "＇", '"': "＂", "`": "｀",
        "(": "（", ")": "）", "{": "｛", "}": "｝", "[": "［", "]": "］", "<": "＜", ">": "＞",
        "=": "＝", "+": "＋", "-": "－", "*": "＊", "/": "／", "\\": "＼", "|": "｜",
        "&": "＆", "^": "＾", "~": "～", "!": "！", "?": "？", "@": "＠", "#": "＃",
        "$": "＄", "%": "％", "_": "＿",
    }),
})


def has_keyword_table(language: str) -> bool:
    return language in KEYWORD_TABLES


def has_punctuation_table(language: str) -> bool:
    return language in PUNCTUATION_TABLES


@lru_cache(maxsize=None)
def _keyword_pattern(language: str, reverse: bool) -> tuple[re.Pattern, dict[str, str]]:
    table = dict(KEYWORD_TABLES[language])
    if reverse:
        table = {v: k for k, v in table.items()}
    # Longest first so "変数宣言" wins over "変数" and "instanceof" over "in"
    words = sorted(table, key=len, reverse=True)
    pattern = re.compile(r"(?<![\w$])(?:" + "|".join(map(re.escape, words)) + r")(?![\w$])")
    return pattern, table


@lru_cache(maxsize=None)
def _punctuation_map(language: str, reverse: bool) -> dict[int, str]:
    table = PUNCTUATION_TABLES[language]
    if reverse:
        return {ord(v): k for k, v in table.items()}
    return {ord(k): v for k, v in table.items()}


# ============================================================================
# Passes
# ============================================================================

def _substitute_keywords(code: str, language: str, reverse: bool) -> str:
    if language not in KEYWORD_TABLES:
        return code
    pattern, table = _keyword_pattern(language, reverse)
    registry = MaskRegistry()
    masked = mask_protected(code, registry)
    replaced = pattern.sub(lambda m: table[m.group(0)], masked)
    return registry.restore(replaced)


def apply_keywords(code: str, language: str) -> str:
    """Translate English reserved words in code regions to ``language``."""
    return _substitute_keywords(code, language, reverse=False)


def restore_keywords(code: str, language: str) -> str:
    """Fold ``language`` reserved words in code regions back to English."""
    return _substitute_keywords(code, language, reverse=True)


def apply_punctuation(code: str, language: str) -> str:
    """Replace ASCII punctuation with the language's full-width forms."""
    if language not in PUNCTUATION_TABLES:
        return code
    return code.translate(_punctuation_map(language, False))


def restore_punctuation(code: str, language: str) -> str:
    if language not in PUNCTUATION_TABLES:
        return code
    return code.translate(_punctuation_map(language, True))
