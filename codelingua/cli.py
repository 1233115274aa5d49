"""
Command-line interface for codelingua.

Provides commands for:
- Translating source files with one or more dictionaries
- Extracting identifiers, comments and markdown prose
- Creating, inspecting and editing dictionaries

Usage:
    codelingua translate src/app.ts --dict app_ja.json -s en -t ja
    codelingua translate app_ja.ts --dict app_ja.json -s ja -t en --scope immersive
    codelingua extract src/app.ts --kind identifiers --json
    codelingua dict init github.com:acme/app ja
    codelingua dict add app_ja.json calculate 計算する
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from codelingua import __version__
from codelingua.config import (
    APP_NAME,
    DEFAULT_SCOPE_PRESET,
    DEFAULT_SOURCE_LANG,
    DEFAULT_TARGET_LANG,
    PIVOT_LANG,
    dictionary_path,
    ensure_data_dirs,
    log_level,
)
from codelingua.dictionary import Dictionary, MultiLangDictionary, load_dictionary, save_dictionary
from codelingua.errors import CodeLinguaError
from codelingua.extract import CommentExtractor, IdentifierExtractor, MarkdownExtractor
from codelingua.models import SCOPE_PRESETS, TranslationScope
from codelingua.translate import UnifiedTranslator

app = typer.Typer(
    name=APP_NAME,
    help="codelingua: Translate identifiers and comments in source code between human languages",
    add_completion=False,
)
dict_app = typer.Typer(help="Create, inspect and edit dictionaries", add_completion=False)
app.add_typer(dict_app, name="dict")

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool):
    if value:
        console.print(f"codelingua v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(
        False, "--verbose",
        help="Enable debug logging",
    ),
):
    """codelingua: Bidirectional code translation."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else log_level(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _fail(message: str) -> None:
    err_console.print(f"[red]Error:[/] {message}", style="bold")
    raise typer.Exit(1)


def _load_hub(paths: List[Path]) -> MultiLangDictionary:
    dictionaries = [load_dictionary(p) for p in paths]
    return MultiLangDictionary(dictionaries[0], *dictionaries[1:])


# ============================================================================
# translate
# ============================================================================

@app.command()
def translate(
    input_file: Path = typer.Argument(
        ..., exists=True, dir_okay=False,
        help="Source file to translate",
    ),
    dict_paths: List[Path] = typer.Option(
        ..., "--dict", "-d",
        exists=True, dir_okay=False,
        help="Dictionary JSON file (repeat for more languages of the same origin)",
    ),
    source_lang: str = typer.Option(
        DEFAULT_SOURCE_LANG, "--source", "-s",
        help="Source language code",
    ),
    target_lang: str = typer.Option(
        DEFAULT_TARGET_LANG, "--target", "-t",
        help="Target language code",
    ),
    scope_name: str = typer.Option(
        DEFAULT_SCOPE_PRESET, "--scope",
        help=f"Scope preset ({', '.join(SCOPE_PRESETS)})",
    ),
    identifiers: Optional[bool] = typer.Option(
        None, "--identifiers/--no-identifiers",
        help="Override: translate identifiers",
    ),
    comments: Optional[bool] = typer.Option(
        None, "--comments/--no-comments",
        help="Override: translate comments",
    ),
    strings: Optional[bool] = typer.Option(
        None, "--strings/--no-strings",
        help="Override: translate human-readable string literals",
    ),
    keywords: Optional[bool] = typer.Option(
        None, "--keywords/--no-keywords",
        help="Override: translate reserved words",
    ),
    punctuation: Optional[bool] = typer.Option(
        None, "--punctuation/--no-punctuation",
        help="Override: full-width punctuation",
    ),
    strict: bool = typer.Option(
        False, "--strict",
        help="Fail when a known term has no translation into the target language",
    ),
    output_file: Optional[Path] = typer.Option(
        None, "--output", "-o",
        help="Output file path (default: print to stdout)",
    ),
):
    """Translate a source file."""
    try:
        scope = TranslationScope.preset(scope_name).replace(
            identifiers=identifiers,
            comments=comments,
            string_literals=strings,
            keywords=keywords,
            punctuation=punctuation,
        )
    except ValueError as exc:
        _fail(str(exc))

    try:
        hub = _load_hub(dict_paths)
        code = input_file.read_text(encoding="utf-8")
        result = UnifiedTranslator(hub, strict=strict).translate(
            code, source_lang, target_lang, scope=scope, file_path=str(input_file),
        )
    except (CodeLinguaError, ValueError) as exc:
        _fail(str(exc))

    if output_file:
        output_file.write_text(result.code, encoding="utf-8")
        err_console.print(f"[green]Saved to:[/] {output_file}")
    else:
        typer.echo(result.code, nl=False)

    table = Table(title="Translation Statistics")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", style="green")
    table.add_row("Languages", f"{source_lang} → {target_lang}")
    table.add_row("Scope", scope.preset_name or "custom")
    table.add_row("Translated tokens", str(len(result.translated_tokens)))
    table.add_row("Unmapped tokens", str(len(result.unmapped_tokens)))
    err_console.print(table)
    if result.unmapped_tokens:
        err_console.print(f"[yellow]Unmapped:[/] {', '.join(sorted(result.unmapped_tokens))}")


# ============================================================================
# extract
# ============================================================================

@app.command()
def extract(
    input_file: Path = typer.Argument(
        ..., exists=True, dir_okay=False,
        help="Source or markdown file",
    ),
    kind: str = typer.Option(
        "identifiers", "--kind", "-k",
        help="What to extract (identifiers, comments, markdown)",
    ),
    as_json: bool = typer.Option(
        False, "--json",
        help="Print JSON instead of a table",
    ),
):
    """Extract translatable units from a file."""
    content = input_file.read_text(encoding="utf-8")
    path = str(input_file)

    if kind == "identifiers":
        found = IdentifierExtractor().extract(content, path)
        rows = [i.to_dict() for i in found]
        columns = ["name", "category", "line", "count"]
    elif kind == "comments":
        found = CommentExtractor().extract_with_positions(content, path)
        rows = [{k: v for k, v in c.to_dict().items() if k != "full_text"} for c in found]
        columns = ["text", "kind", "start", "end"]
    elif kind == "markdown":
        found = MarkdownExtractor().extract_with_positions(content)
        rows = [{"text": b.text, "type": b.type, "line": b.line} for b in found]
        columns = ["text", "type", "line"]
    else:
        _fail(f"Unknown kind {kind!r}; choose identifiers, comments or markdown")

    if as_json:
        typer.echo(json.dumps(rows, ensure_ascii=False, indent=2))
        return

    table = Table(title=f"{kind.capitalize()} in {input_file.name} ({len(rows)})")
    for column in columns:
        table.add_column(column.capitalize(), style="cyan" if column in ("name", "text") else None)
    for row in rows:
        table.add_row(*(str(row[c]) for c in columns))
    console.print(table)


# ============================================================================
# dict
# ============================================================================

@dict_app.command("init")
def dict_init(
    origin: str = typer.Argument(..., help="Origin, e.g. a repository URL"),
    language: str = typer.Argument(..., help="Language code of the translations"),
    path: Optional[Path] = typer.Option(
        None, "--path", "-p",
        help="Where to write the dictionary (default: data directory)",
    ),
    force: bool = typer.Option(
        False, "--force",
        help="Overwrite an existing dictionary",
    ),
):
    """Create an empty dictionary."""
    if language == PIVOT_LANG:
        _fail("English is the pivot language and has no dictionary")
    if path is None:
        ensure_data_dirs()
        path = dictionary_path(origin, language)
    if path.exists() and not force:
        _fail(f"{path} already exists (use --force to overwrite)")
    save_dictionary(Dictionary.create(origin, language), path)
    console.print(f"[green]Created:[/] {path}")


@dict_app.command("show")
def dict_show(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Dictionary JSON file"),
    search: Optional[str] = typer.Option(
        None, "--search", "-s",
        help="Only show terms containing this text",
    ),
):
    """Show a dictionary's terms and metadata."""
    try:
        dictionary = load_dictionary(path)
    except CodeLinguaError as exc:
        _fail(str(exc))

    terms = dictionary.terms
    if search:
        terms = {en: tr for en, tr in terms.items() if search in en or search in tr}

    table = Table(title=f"{dictionary.origin} [{dictionary.language}] v{dictionary.metadata.version}")
    table.add_column("English", style="cyan")
    table.add_column(dictionary.language, style="green")
    for english in sorted(terms):
        table.add_row(english, terms[english])
    console.print(table)
    console.print(
        f"[dim]{len(dictionary.terms)} terms, {len(dictionary.comments)} comments, "
        f"updated {dictionary.metadata.updated_at}[/]"
    )


@dict_app.command("add")
def dict_add(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Dictionary JSON file"),
    english: str = typer.Argument(..., help="English term or comment"),
    translated: str = typer.Argument(..., help="Translation"),
    comment: bool = typer.Option(
        False, "--comment", "-c",
        help="Add a comment translation instead of a term",
    ),
):
    """Add or overwrite one translation."""
    try:
        dictionary = load_dictionary(path)
    except CodeLinguaError as exc:
        _fail(str(exc))

    if comment:
        key = dictionary.add_comment(english, translated)
        console.print(f"[green]Comment {key[:8]}:[/] {english.strip()} → {translated.strip()}")
    else:
        dictionary.add_terms({english: translated})
        console.print(f"[green]{english}[/] → [cyan]{translated}[/]")
    save_dictionary(dictionary, path)


@dict_app.command("lookup")
def dict_lookup(
    term: str = typer.Argument(..., help="Term to translate"),
    dict_paths: List[Path] = typer.Option(
        ..., "--dict", "-d",
        exists=True, dir_okay=False,
        help="Dictionary JSON file (repeat for more languages of the same origin)",
    ),
    source_lang: str = typer.Option(DEFAULT_SOURCE_LANG, "--source", "-s", help="Source language code"),
    target_lang: str = typer.Option(DEFAULT_TARGET_LANG, "--target", "-t", help="Target language code"),
):
    """Translate a single term through the hub dictionary."""
    try:
        hub = _load_hub(dict_paths)
    except (CodeLinguaError, ValueError) as exc:
        _fail(str(exc))

    translated = hub.get_translation(term, source_lang, target_lang)
    if translated is None:
        console.print(f"[yellow]Term not found:[/] {term}")
    else:
        console.print(f"[green]{term}[/] → [cyan]{translated}[/]")


if __name__ == "__main__":
    app()
