"""
Exception hierarchy for codelingua.

Only StrictModeViolation is meant to escape a translate() call. Parse
failures are caught at the extractor boundary and malformed dictionaries
are rejected when loaded, before any translation happens.
"""

from __future__ import annotations


class CodeLinguaError(Exception):
    """Base class for all codelingua errors."""


class ParseFailure(CodeLinguaError):
    """Source text could not be parsed by the selected grammar."""

    def __init__(self, message: str, file_path: str | None = None):
        super().__init__(message)
        self.file_path = file_path


class MalformedDictionary(CodeLinguaError):
    """A dictionary payload is missing required fields or has the wrong shape."""


class StrictModeViolation(CodeLinguaError):
    """An identifier has no mapping although the dictionary expects one."""

    def __init__(self, token: str, source_lang: str, target_lang: str):
        super().__init__(
            f"No mapping found for token {token!r} ({source_lang} -> {target_lang})"
        )
        self.token = token
        self.source_lang = source_lang
        self.target_lang = target_lang


class OverlappingReplacements(CodeLinguaError):
    """Two replacements in one rewrite pass cover the same bytes."""
