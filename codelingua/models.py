"""
Core data models for codelingua.

These models describe what the extractors find in source text and what a
translation call returns. They are plain dataclasses: extraction results are
built per parse and discarded, translation results are frozen once returned.

Design Philosophy:
- Immutable where callers share values (scope, results)
- Positions are UTF-8 byte offsets, matching the parser's coordinates
- Serializable: results convert to plain dicts for the CLI's --json output
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from enum import Enum


class IdentifierCategory(str, Enum):
    """Declaration site an identifier was first seen at."""
    CLASS = "class"
    FUNCTION = "function"
    METHOD = "method"
    VARIABLE = "variable"
    PROPERTY = "property"
    PARAMETER = "parameter"
    INTERFACE = "interface"
    TYPE = "type"
    ENUM = "enum"
    # Ownership-syntax (Rust) declarations
    STRUCT = "struct"
    TRAIT = "trait"
    IMPL = "impl"
    MODULE = "mod"


class CommentKind(str, Enum):
    SINGLE_LINE = "single-line"
    BLOCK = "block"
    HTML = "html"


@dataclass
class ExtractedIdentifier:
    """A user-defined name found in source code.

    Attributes:
        name: The identifier text
        category: Category of the first declaration seen
        line: 1-based line of the first declaration seen
        count: Number of declaration sites using this name
    """
    name: str
    category: IdentifierCategory
    line: int
    count: int = 1

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "category": self.category.value,
            "line": self.line,
            "count": self.count,
        }


@dataclass
class ExtractedComment:
    """A comment span in source code.

    Attributes:
        text: Normalized comment text (delimiters and ``*`` gutters removed)
        full_text: The comment exactly as written, delimiters included
        start: Start byte offset in the source (inclusive)
        end: End byte offset in the source (exclusive)
        kind: Delimiter family of the comment
    """
    text: str
    full_text: str
    start: int
    end: int
    kind: CommentKind

    def to_dict(self) -> dict:
        d = asdict(self)
        d["kind"] = self.kind.value
        return d


@dataclass
class MarkdownBlock:
    """A translatable text block from a markdown document."""
    text: str
    type: str  # heading | paragraph | list_item | blockquote | table_cell
    line: int  # 1-based


@dataclass(frozen=True)
class TranslationScope:
    """Which syntactic categories take part in a translation call.

    Scopes are values: two scopes with the same flags are equal, and
    ``preset_name`` tells which named preset (if any) a scope matches.
    """
    comments: bool = True
    string_literals: bool = False
    identifiers: bool = True
    keywords: bool = False
    punctuation: bool = False
    markdown_files: bool = False

    @classmethod
    def preset(cls, name: str) -> TranslationScope:
        """Return the named preset scope."""
        try:
            return SCOPE_PRESETS[name]
        except KeyError:
            raise ValueError(
                f"Unknown scope preset {name!r}; choose from {', '.join(SCOPE_PRESETS)}"
            ) from None

    @property
    def preset_name(self) -> str | None:
        for name, scope in SCOPE_PRESETS.items():
            if scope == self:
                return name
        return None

    def replace(self, **changes) -> TranslationScope:
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values.update({k: v for k, v in changes.items() if v is not None})
        return TranslationScope(**values)

    def to_dict(self) -> dict:
        return asdict(self)


SCOPE_PRESETS: dict[str, TranslationScope] = {
    "default": TranslationScope(),
    "identifiers": TranslationScope(comments=False),
    "comments": TranslationScope(identifiers=False),
    "code": TranslationScope(string_literals=True),
    "immersive": TranslationScope(keywords=True, punctuation=True),
    "full": TranslationScope(
        string_literals=True, keywords=True, punctuation=True, markdown_files=True,
    ),
}


@dataclass(frozen=True)
class TranslationResult:
    """Result of translating one piece of source code.

    Attributes:
        code: The rewritten source code
        translated_tokens: Source-side names and strings that were replaced
        unmapped_tokens: Identifiers with no dictionary entry (informational)
    """
    code: str
    translated_tokens: frozenset[str] = field(default_factory=frozenset)
    unmapped_tokens: frozenset[str] = field(default_factory=frozenset)

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "translatedTokens": sorted(self.translated_tokens),
            "unmappedTokens": sorted(self.unmapped_tokens),
        }
