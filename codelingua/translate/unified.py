"""
Tree-guided rewriter.

``UnifiedTranslator.translate(code, source_lang, target_lang)`` works the
same way for every language pair (EN->JA, JA->EN, JA->ES, ...); the hub
dictionary decides the lookup direction.

Pipeline for one call:
1. Reverse lexical passes: if the source language has punctuation or
   keyword tables and the scope enables them, fold them back to ASCII and
   English so the text parses again
2. Tree passes over the ORIGINAL positions, merged into one arena:
   identifiers, string literals, comments
3. Single linear rebuild of the text
4. Keyword pass (code regions only), then punctuation pass (whole text)

Unmapped identifiers are reported, never guessed, and left verbatim.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterator, Mapping, Union

from tree_sitter import Node

from codelingua.dictionary.model import Dictionary
from codelingua.dictionary.multilang import MultiLangDictionary
from codelingua.errors import ParseFailure, StrictModeViolation
from codelingua.extract.comments import CommentExtractor
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
from codelingua.models import TranslationResult, TranslationScope
from codelingua.translate.comments import format_comment
from codelingua.translate.lexical import (
    apply_keywords,
    apply_punctuation,
    has_keyword_table,
    has_punctuation_table,
    restore_keywords,
    restore_punctuation,
)
from codelingua.translate.replacements import ReplacementArena
from codelingua.translate.strings import escape_literal, should_translate_string, unescape_literal

logger = logging.getLogger(__name__)

_IDENTIFIER_NODES = {
    GrammarKind.TS_LIKE: frozenset({
        "identifier",
        "property_identifier",
        "type_identifier",
        "shorthand_property_identifier",
        "shorthand_property_identifier_pattern",
        "statement_identifier",
    }),
    GrammarKind.OWNERSHIP: frozenset({
        "identifier",
        "type_identifier",
        "field_identifier",
        "shorthand_field_identifier",
    }),
}
_IDENTIFIER_NODES[GrammarKind.TEMPLATE] = _IDENTIFIER_NODES[GrammarKind.TS_LIKE]

_STRING_NODES = {"string", "string_literal"}

# Strings under these nodes are syntax, not text
_STRING_BLOCKING_ANCESTORS = {"attribute_item", "inner_attribute_item", "import_require_clause"}

# parent type -> field whose string is syntax
_STRING_BLOCKING_FIELDS = {
    "import_statement": "source",
    "export_statement": "source",
    "pair": "key",
    "module": "name",
}


@dataclass
class _CodeUnit:
    """One parseable piece of a file (the whole file, or a <script> body)."""
    source: bytes
    grammar: str
    file_path: str | None
    offset: int = 0


@dataclass
class _Rewrite:
    source_lang: str
    target_lang: str
    exclusions: frozenset[str]
    arena: ReplacementArena = field(default_factory=ReplacementArena)
    translated: set[str] = field(default_factory=set)
    unmapped: set[str] = field(default_factory=set)


class UnifiedTranslator:
    """Bidirectional translator for any language pair of a hub dictionary.

    Args:
        dictionary: The hub dictionary used for all lookups
        strict: Raise StrictModeViolation when a known source-language term
            has no translation into the target language
        exclusions: Optional override of the per-grammar built-in sets used
            to decide which untranslated names are reported as unmapped

    Example:
        >>> translator = UnifiedTranslator(MultiLangDictionary(d))
        >>> translator.translate("const value = 1;", "en", "ja").code
        'const 値 = 1;'
    """

    def __init__(
        self,
        dictionary: MultiLangDictionary,
        strict: bool = False,
        exclusions: Mapping[GrammarKind, frozenset[str]] | None = None,
    ):
        self.dictionary = dictionary
        self.strict = strict
        self.exclusions = dict(DEFAULT_EXCLUSIONS)
        if exclusions:
            self.exclusions.update(exclusions)
        self._comments = CommentExtractor()

    def translate(
        self,
        code: str,
        source_lang: str,
        target_lang: str,
        scope: TranslationScope | None = None,
        file_path: str | None = None,
    ) -> TranslationResult:
        """Translate ``code`` from ``source_lang`` to ``target_lang``.

        Args:
            code: Source text
            source_lang: Language the code's names and comments are in
            target_lang: Language to translate into
            scope: What to translate (default: identifiers and comments)
            file_path: Path hint selecting the grammar (default TypeScript)

        Raises:
            StrictModeViolation: in strict mode, for an expected-but-missing
                identifier mapping
        """
        if source_lang == target_lang:
            return TranslationResult(code=code)

        scope = scope or TranslationScope()
        grammar = detect_grammar(file_path)
        code = self._restore_lexical(code, source_lang, scope, grammar)
        data = code.encode("utf-8")

        run = _Rewrite(source_lang, target_lang, self.exclusions[grammar])
        if scope.identifiers or scope.string_literals:
            for unit in _code_units(data, grammar, file_path):
                self._collect_tree(unit, grammar, scope, run)
        if scope.comments:
            self._collect_comments(code, data, file_path, run)

        logger.debug(
            "%s -> %s: %d replacements, %d unmapped",
            source_lang, target_lang, len(run.arena), len(run.unmapped),
        )
        rewritten = run.arena.apply(data).decode("utf-8")
        rewritten = self._apply_lexical(rewritten, target_lang, scope, grammar)
        return TranslationResult(
            code=rewritten,
            translated_tokens=frozenset(run.translated),
            unmapped_tokens=frozenset(run.unmapped),
        )

    # ------------------------------------------------------------------
    # Tree passes
    # ------------------------------------------------------------------

    def _collect_tree(self, unit: _CodeUnit, grammar: GrammarKind, scope: TranslationScope, run: _Rewrite) -> None:
        try:
            tree = parse(unit.source, unit.grammar, unit.file_path)
        except ParseFailure as exc:
            logger.warning("Skipping identifiers and strings of %s: %s", unit.file_path or "<source>", exc)
            return
        identifier_nodes = _IDENTIFIER_NODES[grammar]
        for node in walk(tree.root_node):
            if not node.is_named:
                continue
            if scope.identifiers and node.type in identifier_nodes:
                self._translate_identifier(node, unit, run)
            elif scope.string_literals and node.type in _STRING_NODES:
                self._translate_string(node, unit, run)

    def _translate_identifier(self, node: Node, unit: _CodeUnit, run: _Rewrite) -> None:
        name = node_text(unit.source, node)
        translated = self.dictionary.get_translation(name, run.source_lang, run.target_lang)
        if translated:
            if translated != name:
                run.translated.add(name)
                run.arena.add(unit.offset + node.start_byte, unit.offset + node.end_byte, translated, name)
            return
        if self.strict and self.dictionary.has_term_in_language(name, run.source_lang):
            raise StrictModeViolation(name, run.source_lang, run.target_lang)
        if name not in run.exclusions:
            run.unmapped.add(name)

    def _translate_string(self, node: Node, unit: _CodeUnit, run: _Rewrite) -> None:
        if _is_syntax_string(node):
            return
        raw = node_text(unit.source, node)
        quote = raw[:1]
        if len(raw) < 2 or quote not in ("'", '"') or raw[-1] != quote:
            return
        value = unescape_literal(raw[1:-1])
        if not should_translate_string(value):
            return
        translated = self.dictionary.get_comment_translation(value, run.target_lang)
        if translated and translated != value:
            run.translated.add(value)
            run.arena.add(
                unit.offset + node.start_byte,
                unit.offset + node.end_byte,
                f"{quote}{escape_literal(translated, quote)}{quote}",
                raw,
            )

    def _collect_comments(self, code: str, data: bytes, file_path: str | None, run: _Rewrite) -> None:
        for comment in self._comments.extract_with_positions(code, file_path):
            if not comment.text:
                continue
            translated = self.dictionary.get_comment_translation(comment.text, run.target_lang)
            if translated and translated.strip() != comment.text:
                run.arena.add(comment.start, comment.end, format_comment(translated, comment, data), comment.full_text)

    # ------------------------------------------------------------------
    # Lexical passes
    # ------------------------------------------------------------------

    def _apply_lexical(self, code: str, language: str, scope: TranslationScope, grammar: GrammarKind) -> str:
        if scope.keywords and grammar is not GrammarKind.OWNERSHIP and has_keyword_table(language):
            code = _in_code_regions(code, grammar, lambda text: apply_keywords(text, language))
        if scope.punctuation and has_punctuation_table(language):
            code = apply_punctuation(code, language)
        return code

    def _restore_lexical(self, code: str, language: str, scope: TranslationScope, grammar: GrammarKind) -> str:
        if scope.punctuation and has_punctuation_table(language):
            code = restore_punctuation(code, language)
        if scope.keywords and grammar is not GrammarKind.OWNERSHIP and has_keyword_table(language):
            code = _in_code_regions(code, grammar, lambda text: restore_keywords(text, language))
        return code


def _code_units(data: bytes, grammar: GrammarKind, file_path: str | None) -> Iterator[_CodeUnit]:
    if grammar is GrammarKind.TEMPLATE:
        for region in find_script_regions(data):
            virtual = region.virtual_path(file_path)
            yield _CodeUnit(data[region.start:region.end], ts_dialect(virtual), virtual, region.start)
    elif grammar is GrammarKind.OWNERSHIP:
        yield _CodeUnit(data, "rust", file_path)
    else:
        yield _CodeUnit(data, ts_dialect(file_path), file_path)


def _in_code_regions(code: str, grammar: GrammarKind, transform: Callable[[str], str]) -> str:
    """Apply ``transform`` to the whole text, or only to <script> bodies of templates."""
    if grammar is not GrammarKind.TEMPLATE:
        return transform(code)
    data = code.encode("utf-8")
    parts: list[bytes] = []
    cursor = 0
    for region in find_script_regions(data):
        parts.append(data[cursor:region.start])
        parts.append(transform(data[region.start:region.end].decode("utf-8")).encode("utf-8"))
        cursor = region.end
    parts.append(data[cursor:])
    return b"".join(parts).decode("utf-8")


def _is_syntax_string(node: Node) -> bool:
    """Whether a string literal is module syntax (import source, key, attribute)."""
    parent = node.parent
    if parent is None:
        return False
    if parent.type == "literal_type":
        return True
    field_name = _STRING_BLOCKING_FIELDS.get(parent.type)
    if field_name is not None:
        child = parent.child_by_field_name(field_name)
        if child is not None and child.start_byte == node.start_byte:
            return True
    ancestor = parent
    while ancestor is not None:
        if ancestor.type in _STRING_BLOCKING_ANCESTORS:
            return True
        ancestor = ancestor.parent
    return False


def translate(
    code: str,
    source_lang: str,
    target_lang: str,
    dictionary: Union[MultiLangDictionary, Dictionary],
    scope: TranslationScope | None = None,
    file_path: str | None = None,
    strict: bool = False,
) -> TranslationResult:
    """Translate ``code`` with a dictionary (convenience entry point)."""
    if isinstance(dictionary, Dictionary):
        dictionary = MultiLangDictionary(dictionary)
    return UnifiedTranslator(dictionary, strict=strict).translate(
        code, source_lang, target_lang, scope=scope, file_path=file_path,
    )
