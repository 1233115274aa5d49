"""
Identifier extraction.

Lists the user-defined names declared in a source file, with the category
of the first declaration seen and how many declaration sites use the name.
The result feeds dictionary building: every name returned is a candidate
term that may need a translation.

Grammar handling:
- TS-like files are parsed with tree-sitter and declaration nodes visited
- Rust files are parsed with tree-sitter; if the tree has syntax errors the
  extractor falls back to a line-oriented pattern scan
- Vue files contribute only their <script> regions
"""

from __future__ import annotations

import logging
import re

from tree_sitter import Node

from codelingua.errors import ParseFailure
from codelingua.grammars import (
    DEFAULT_EXCLUSIONS,
    GrammarKind,
    detect_grammar,
    find_script_regions,
    node_text,
    parse,
    ts_dialect,
    walk,
)
from codelingua.models import ExtractedIdentifier, IdentifierCategory

logger = logging.getLogger(__name__)

C = IdentifierCategory

# Declaration node type -> (field holding the name, category)
_TS_DECLARATIONS: dict[str, tuple[str, IdentifierCategory]] = {
    "class_declaration": ("name", C.CLASS),
    "abstract_class_declaration": ("name", C.CLASS),
    "class": ("name", C.CLASS),
    "function_declaration": ("name", C.FUNCTION),
    "generator_function_declaration": ("name", C.FUNCTION),
    "function_signature": ("name", C.FUNCTION),
    "method_definition": ("name", C.METHOD),
    "method_signature": ("name", C.METHOD),
    "abstract_method_signature": ("name", C.METHOD),
    "variable_declarator": ("name", C.VARIABLE),
    "public_field_definition": ("name", C.PROPERTY),
    "property_signature": ("name", C.PROPERTY),
    "required_parameter": ("pattern", C.PARAMETER),
    "optional_parameter": ("pattern", C.PARAMETER),
    "arrow_function": ("parameter", C.PARAMETER),
    "interface_declaration": ("name", C.INTERFACE),
    "type_alias_declaration": ("name", C.TYPE),
    "enum_declaration": ("name", C.ENUM),
}

_RUST_DECLARATIONS: dict[str, tuple[str, IdentifierCategory]] = {
    "function_item": ("name", C.FUNCTION),
    "function_signature_item": ("name", C.FUNCTION),
    "struct_item": ("name", C.STRUCT),
    "enum_item": ("name", C.ENUM),
    "trait_item": ("name", C.TRAIT),
    "impl_item": ("type", C.IMPL),
    "type_item": ("name", C.TYPE),
    "mod_item": ("name", C.MODULE),
    "const_item": ("name", C.VARIABLE),
    "static_item": ("name", C.VARIABLE),
    "let_declaration": ("pattern", C.VARIABLE),
    "parameter": ("pattern", C.PARAMETER),
    "field_declaration": ("name", C.PROPERTY),
}

_NAME_NODE_TYPES = {"identifier", "type_identifier", "property_identifier", "field_identifier"}

# Line-scan patterns used when the Rust tree is unusable.
_RUST_LINE_PATTERNS: list[tuple[re.Pattern, IdentifierCategory]] = [
    (re.compile(r"\bfn\s+([a-zA-Z_][a-zA-Z0-9_]*)"), C.FUNCTION),
    (re.compile(r"\bstruct\s+([A-Z][a-zA-Z0-9_]*)"), C.STRUCT),
    (re.compile(r"\benum\s+([A-Z][a-zA-Z0-9_]*)"), C.ENUM),
    (re.compile(r"\btrait\s+([A-Z][a-zA-Z0-9_]*)"), C.TRAIT),
    (re.compile(r"\bimpl(?:\s*<[^>]*>)?\s+(?:[A-Z][a-zA-Z0-9_]*\s+for\s+)?([A-Z][a-zA-Z0-9_]*)"), C.IMPL),
    (re.compile(r"\btype\s+([A-Z][a-zA-Z0-9_]*)"), C.TYPE),
    (re.compile(r"\bmod\s+([a-zA-Z_][a-zA-Z0-9_]*)"), C.MODULE),
    (re.compile(r"\b(?:const|static)\s+([A-Z_][A-Z0-9_]*)"), C.VARIABLE),
    (re.compile(r"\blet\s+(?:mut\s+)?([a-zA-Z_][a-zA-Z0-9_]*)"), C.VARIABLE),
]


class IdentifierExtractor:
    """Extract user-defined identifiers from TypeScript, JavaScript, Vue and Rust.

    Args:
        exclusions: Optional override of the per-grammar exclusion sets.
            Names in the set (built-ins, single letters) are never reported.
    """

    def __init__(self, exclusions: dict[GrammarKind, frozenset[str]] | None = None):
        self.exclusions = dict(DEFAULT_EXCLUSIONS)
        if exclusions:
            self.exclusions.update(exclusions)

    def extract(self, source: str, file_path: str | None = None) -> list[ExtractedIdentifier]:
        """Extract identifiers, sorted by name.

        Never raises on unparsable input: a warning is logged and a
        best-effort (possibly empty) list is returned instead.
        """
        grammar = detect_grammar(file_path)
        found: dict[str, ExtractedIdentifier] = {}
        try:
            if grammar is GrammarKind.TEMPLATE:
                self._extract_template(source, file_path, found)
            elif grammar is GrammarKind.OWNERSHIP:
                self._extract_rust(source, file_path, found)
            else:
                self._extract_ts(source.encode("utf-8"), file_path, found, grammar)
        except ParseFailure as exc:
            logger.warning("Identifier extraction degraded for %s: %s", file_path or "<source>", exc)
            if grammar is GrammarKind.OWNERSHIP:
                self._scan_rust_lines(source, found)
        return sorted(found.values(), key=lambda ident: (ident.name.lower(), ident.name))

    def extract_names(self, source: str, file_path: str | None = None) -> list[str]:
        """Extract unique identifier names (for dictionary building)."""
        return [ident.name for ident in self.extract(source, file_path)]

    def is_builtin(self, name: str, grammar: GrammarKind = GrammarKind.TS_LIKE) -> bool:
        return name in self.exclusions[grammar]

    # ------------------------------------------------------------------
    # Grammar-specific walkers
    # ------------------------------------------------------------------

    def _extract_ts(
        self,
        source: bytes,
        file_path: str | None,
        found: dict[str, ExtractedIdentifier],
        grammar: GrammarKind,
        line_offset: int = 0,
    ) -> None:
        tree = parse(source, ts_dialect(file_path), file_path)
        self._visit(tree.root_node, source, _TS_DECLARATIONS, found, grammar, line_offset)

    def _extract_template(
        self,
        source: str,
        file_path: str | None,
        found: dict[str, ExtractedIdentifier],
    ) -> None:
        data = source.encode("utf-8")
        for region in find_script_regions(data):
            line_offset = data.count(b"\n", 0, region.start)
            self._extract_ts(
                data[region.start:region.end],
                region.virtual_path(file_path),
                found,
                GrammarKind.TEMPLATE,
                line_offset,
            )

    def _extract_rust(
        self,
        source: str,
        file_path: str | None,
        found: dict[str, ExtractedIdentifier],
    ) -> None:
        data = source.encode("utf-8")
        tree = parse(data, "rust", file_path)
        if tree.root_node.has_error:
            logger.info("Rust syntax errors in %s, using line scan", file_path or "<source>")
            self._scan_rust_lines(source, found)
            return
        self._visit(tree.root_node, data, _RUST_DECLARATIONS, found, GrammarKind.OWNERSHIP)

    def _visit(
        self,
        root: Node,
        source: bytes,
        declarations: dict[str, tuple[str, IdentifierCategory]],
        found: dict[str, ExtractedIdentifier],
        grammar: GrammarKind,
        line_offset: int = 0,
    ) -> None:
        for node in walk(root):
            if not node.is_named or node.type not in declarations:
                continue
            field_name, category = declarations[node.type]
            name_node = _resolve_name(node.child_by_field_name(field_name))
            if name_node is None:
                continue
            line = node.start_point[0] + 1 + line_offset
            self._add(found, node_text(source, name_node), category, line, grammar)

    def _scan_rust_lines(self, source: str, found: dict[str, ExtractedIdentifier]) -> None:
        for line_number, line in enumerate(source.split("\n"), start=1):
            stripped = line.strip()
            if stripped.startswith(("//", "/*", "*")):
                continue
            for pattern, category in _RUST_LINE_PATTERNS:
                for match in pattern.finditer(line):
                    self._add(found, match.group(1), category, line_number, GrammarKind.OWNERSHIP)

    def _add(
        self,
        found: dict[str, ExtractedIdentifier],
        name: str,
        category: IdentifierCategory,
        line: int,
        grammar: GrammarKind,
    ) -> None:
        if name in self.exclusions[grammar] or len(name) < 2:
            return
        existing = found.get(name)
        if existing is not None:
            existing.count += 1
        else:
            found[name] = ExtractedIdentifier(name=name, category=category, line=line)


def _resolve_name(node: Node | None) -> Node | None:
    """Return the identifier node a declaration's name field points at."""
    if node is None:
        return None
    if node.type in _NAME_NODE_TYPES:
        return node
    if node.type in ("generic_type", "scoped_type_identifier"):
        return _resolve_name(node.child_by_field_name("type") or node.child_by_field_name("name"))
    return None


def extract_identifiers(source: str, file_path: str | None = None) -> list[ExtractedIdentifier]:
    """Module-level convenience wrapper around :class:`IdentifierExtractor`."""
    return IdentifierExtractor().extract(source, file_path)
