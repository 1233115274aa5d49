"""
Grammar families and tree-sitter parsing helpers.

Source files belong to one of three grammar families, chosen by sniffing the
file extension at the boundary (never by inspecting parsed nodes):

    TS_LIKE    TypeScript / JavaScript (tree-sitter-typescript)
    OWNERSHIP  Rust (tree-sitter-rust)
    TEMPLATE   Vue single-file components; only <script> regions are parsed

Each family has an immutable exclusion set of standard-library names and
single letters. Extractors and the rewriter take these sets as injected
configuration so tests can substitute their own.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from pathlib import PurePath
from types import MappingProxyType
from typing import Iterator, Mapping

import tree_sitter_rust
import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

from codelingua.errors import ParseFailure

logger = logging.getLogger(__name__)


class GrammarKind(Enum):
    TS_LIKE = "ts"
    OWNERSHIP = "rust"
    TEMPLATE = "vue"


_EXTENSIONS = {
    ".ts": GrammarKind.TS_LIKE,
    ".tsx": GrammarKind.TS_LIKE,
    ".mts": GrammarKind.TS_LIKE,
    ".cts": GrammarKind.TS_LIKE,
    ".js": GrammarKind.TS_LIKE,
    ".jsx": GrammarKind.TS_LIKE,
    ".mjs": GrammarKind.TS_LIKE,
    ".cjs": GrammarKind.TS_LIKE,
    ".rs": GrammarKind.OWNERSHIP,
    ".vue": GrammarKind.TEMPLATE,
}

# Dialects of the TS-like family that need the TSX grammar (JSX syntax).
_TSX_SUFFIXES = {".tsx", ".js", ".jsx", ".mjs", ".cjs"}


def detect_grammar(file_path: str | None) -> GrammarKind:
    """Pick the grammar family for a path; no path means TypeScript."""
    if not file_path:
        return GrammarKind.TS_LIKE
    return _EXTENSIONS.get(PurePath(file_path).suffix.lower(), GrammarKind.TS_LIKE)


def ts_dialect(file_path: str | None) -> str:
    """Return 'tsx' or 'typescript' for a TS-like (possibly virtual) path."""
    if file_path and PurePath(file_path).suffix.lower() in _TSX_SUFFIXES:
        return "tsx"
    return "typescript"


# ============================================================================
# Exclusion Sets
# ============================================================================

_SINGLE_LETTERS = frozenset("abcdefghijklmnopqrstuvwxyz")

TS_BUILTINS: frozenset[str] = frozenset({
    # Global objects
    "Object", "Array", "String", "Number", "Boolean", "Function",
    "Date", "RegExp", "Error", "Map", "Set", "Promise",
    "console", "window", "document", "Math", "JSON",
    # Common members
    "prototype", "constructor", "toString", "valueOf", "length",
    "push", "pop", "shift", "unshift", "slice", "splice",
    "forEach", "map", "filter", "reduce", "find", "findIndex",
    "indexOf", "includes", "join", "split",
    # TypeScript types
    "any", "unknown", "never", "void",
    # Node.js
    "require", "module", "exports", "process", "Buffer",
    # Framework names that are never user-defined
    "default", "React", "Component", "useState", "useEffect",
    # MongoDB document key
    "_id",
}) | _SINGLE_LETTERS

RUST_BUILTINS: frozenset[str] = frozenset({
    # Primitive types
    "i8", "i16", "i32", "i64", "i128", "isize",
    "u8", "u16", "u32", "u64", "u128", "usize",
    "f32", "f64", "bool", "char", "str",
    # Prelude and std types
    "Self", "self", "Option", "Result", "Vec", "String", "Box", "Rc", "Arc",
    "HashMap", "HashSet", "BTreeMap", "BTreeSet",
    "Ok", "Err", "Some", "None", "true", "false",
    # Common traits
    "Clone", "Copy", "Debug", "Default", "Eq", "PartialEq", "Ord", "PartialOrd",
    "Hash", "Send", "Sync", "Sized", "Drop", "Fn", "FnMut", "FnOnce",
    "Iterator", "IntoIterator", "From", "Into", "TryFrom", "TryInto",
    "AsRef", "AsMut", "Borrow", "BorrowMut", "ToOwned", "ToString",
    "Serialize", "Deserialize",
    # Macros
    "println", "print", "eprintln", "format", "vec", "panic", "assert",
    "assert_eq", "write", "writeln", "derive",
    # Keywords the line scanner may capture
    "pub", "fn", "let", "mut", "const", "static", "struct", "enum", "impl",
    "trait", "type", "mod", "use", "crate", "super", "where", "async", "await",
    "match", "if", "else", "loop", "while", "for", "in", "return", "break", "continue",
    "_",
}) | _SINGLE_LETTERS

DEFAULT_EXCLUSIONS: Mapping[GrammarKind, frozenset[str]] = MappingProxyType({
    GrammarKind.TS_LIKE: TS_BUILTINS,
    GrammarKind.OWNERSHIP: RUST_BUILTINS,
    GrammarKind.TEMPLATE: TS_BUILTINS,
})


# ============================================================================
# Parsing
# ============================================================================

@lru_cache(maxsize=None)
def _language(name: str) -> Language:
    if name == "typescript":
        return Language(tree_sitter_typescript.language_typescript())
    if name == "tsx":
        return Language(tree_sitter_typescript.language_tsx())
    if name == "rust":
        return Language(tree_sitter_rust.language())
    raise ValueError(f"Unknown grammar: {name}")


def parse(source: bytes, grammar: str, file_path: str | None = None) -> Tree:
    """Parse UTF-8 source bytes with the named tree-sitter grammar.

    Raises:
        ParseFailure: if the parser produced no tree at all. Trees with
            error nodes are returned; callers decide how far to trust them.
    """
    parser = Parser(_language(grammar))
    try:
        tree = parser.parse(source)
    except ValueError as exc:
        raise ParseFailure(f"{grammar} parser rejected input: {exc}", file_path) from exc
    if tree is None:
        raise ParseFailure(f"{grammar} parser returned no tree", file_path)
    if tree.root_node.has_error:
        logger.debug("Syntax errors while parsing %s as %s", file_path or "<source>", grammar)
    return tree


def walk(node: Node) -> Iterator[Node]:
    """Yield ``node`` and all its descendants in document order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def node_text(source: bytes, node: Node) -> str:
    return source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")


# ============================================================================
# Template (Vue) script regions
# ============================================================================

SCRIPT_BLOCK_PATTERN = re.compile(rb"<script(?P<attrs>[^>]*)>(?P<body>.*?)</script>", re.S | re.I)
TS_LANG_PATTERN = re.compile(rb"""\slang\s*=\s*["'](?:ts|typescript|tsx)["']""", re.I)


@dataclass(frozen=True)
class ScriptRegion:
    """Byte span of a <script> body inside a template file."""
    start: int
    end: int
    is_typescript: bool

    def virtual_path(self, file_path: str | None) -> str:
        """Virtual file name that selects the script's sub-grammar.

        ``App.vue`` becomes ``App.vue.ts`` or ``App.vue.js`` so that it never
        collides with a sibling ``App.ts``.
        """
        suffix = ".ts" if self.is_typescript else ".js"
        return f"{file_path}{suffix}" if file_path else f"component.vue{suffix}"


def find_script_regions(source: bytes) -> list[ScriptRegion]:
    return [
        ScriptRegion(
            start=m.start("body"),
            end=m.end("body"),
            is_typescript=bool(TS_LANG_PATTERN.search(m.group("attrs"))),
        )
        for m in SCRIPT_BLOCK_PATTERN.finditer(source)
    ]
