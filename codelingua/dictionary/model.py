"""
Persisted dictionary records.

A Dictionary stores English <-> one foreign language for one origin
(usually a repository URL):

    {
      "origin": "github.com:acme/app",
      "language": "ja",
      "terms": {"calculate": "計算する"},
      "comments": {"<md5 of English text>": {"en": "...", "ja": "..."}},
      "metadata": {"createdAt": ..., "updatedAt": ..., "lastSyncDate": ..., "version": "1.0.3"}
    }

Older payloads store ``comments`` flat as ``{englishText: translatedText}``;
these are normalized to the hash-keyed shape on load. Any other deviation
from the shape is rejected with MalformedDictionary.

Mutations replace the maps wholesale and bump the patch version, so a
reader never sees a half-applied change.
"""

from __future__ import annotations

import hashlib
import json
import os
import re
import tempfile
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Mapping, Optional

from codelingua.config import INITIAL_DICTIONARY_VERSION
from codelingua.errors import MalformedDictionary

VERSION_PATTERN = re.compile(r"^\d+\.\d+\.\d+$")


def hash_comment(text: str) -> str:
    """Content hash used as the comment key (md5 hex of the trimmed text)."""
    return hashlib.md5(text.strip().encode("utf-8")).hexdigest()


def _now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class DictionaryMetadata:
    created_at: str
    updated_at: str
    version: str = INITIAL_DICTIONARY_VERSION
    last_sync_date: Optional[str] = None

    def to_dict(self) -> dict:
        d = {
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
            "version": self.version,
        }
        if self.last_sync_date:
            d["lastSyncDate"] = self.last_sync_date
        return d

    @classmethod
    def from_dict(cls, d: Any) -> DictionaryMetadata:
        if not isinstance(d, Mapping):
            raise MalformedDictionary("metadata must be an object")
        for key in ("createdAt", "updatedAt", "version"):
            if not isinstance(d.get(key), str) or not d.get(key):
                raise MalformedDictionary(f"metadata.{key} is required")
        if not VERSION_PATTERN.match(d["version"]):
            raise MalformedDictionary(f"metadata.version must be major.minor.patch, got {d['version']!r}")
        last_sync = d.get("lastSyncDate")
        if last_sync is not None and not isinstance(last_sync, str):
            raise MalformedDictionary("metadata.lastSyncDate must be a string")
        return cls(
            created_at=d["createdAt"],
            updated_at=d["updatedAt"],
            version=d["version"],
            last_sync_date=last_sync,
        )


@dataclass
class Dictionary:
    """Term and comment translations between English and one language.

    Attributes:
        origin: What the dictionary belongs to (e.g. a repository origin)
        language: The non-English language code
        terms: English term -> foreign term
        comments: md5(English text) -> {"en": text, language: text, ...}
        metadata: Timestamps and semver version
    """
    origin: str
    language: str
    terms: dict[str, str] = field(default_factory=dict)
    comments: dict[str, dict[str, str]] = field(default_factory=dict)
    metadata: DictionaryMetadata = field(default_factory=lambda: DictionaryMetadata(_now(), _now()))

    @classmethod
    def create(
        cls,
        origin: str,
        language: str,
        terms: Mapping[str, str] | None = None,
    ) -> Dictionary:
        """Create a new dictionary at the initial version."""
        now = _now()
        return cls(
            origin=origin,
            language=language,
            terms=dict(terms or {}),
            metadata=DictionaryMetadata(created_at=now, updated_at=now, last_sync_date=now),
        )

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def add_terms(self, new_terms: Mapping[str, str]) -> None:
        """Merge terms (last write wins) and bump the version."""
        if not new_terms:
            return
        self.terms = {**self.terms, **new_terms}
        self._touch()

    def remove_term(self, term: str) -> None:
        if term not in self.terms:
            raise KeyError(f"Term {term!r} not found in dictionary")
        self.terms = {k: v for k, v in self.terms.items() if k != term}
        self._touch()

    def add_comment(self, english: str, translated: str, language: str | None = None) -> str:
        """Store a comment translation; returns the comment's hash key."""
        key = hash_comment(english)
        record = dict(self.comments.get(key, {"en": english.strip()}))
        record[language or self.language] = translated.strip()
        self.comments = {**self.comments, key: record}
        self._touch()
        return key

    def _touch(self) -> None:
        major, minor, patch = self.metadata.version.split(".")
        self.metadata.version = f"{major}.{minor}.{int(patch) + 1}"
        self.metadata.updated_at = _now()

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> dict:
        d: dict[str, Any] = {
            "origin": self.origin,
            "language": self.language,
            "terms": dict(self.terms),
        }
        if self.comments:
            d["comments"] = {k: dict(v) for k, v in self.comments.items()}
        d["metadata"] = self.metadata.to_dict()
        return d

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, indent=indent)

    @classmethod
    def from_dict(cls, d: Any) -> Dictionary:
        """Validate and build a dictionary from its JSON form.

        Raises:
            MalformedDictionary: on missing or ill-typed fields
        """
        if not isinstance(d, Mapping):
            raise MalformedDictionary("dictionary must be a JSON object")
        for key in ("origin", "language"):
            if not isinstance(d.get(key), str) or not d.get(key):
                raise MalformedDictionary(f"{key} is required")
        terms = d.get("terms")
        if not isinstance(terms, Mapping):
            raise MalformedDictionary("terms must be an object")
        for english, foreign in terms.items():
            if not isinstance(foreign, str):
                raise MalformedDictionary(f"term {english!r} must map to a string")
        if "metadata" not in d:
            raise MalformedDictionary("metadata is required")
        return cls(
            origin=d["origin"],
            language=d["language"],
            terms=dict(terms),
            comments=normalize_comments(d.get("comments") or {}, d["language"]),
            metadata=DictionaryMetadata.from_dict(d["metadata"]),
        )

    @classmethod
    def from_json(cls, text: str) -> Dictionary:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            raise MalformedDictionary(f"invalid JSON: {exc}") from exc
        return cls.from_dict(data)


def normalize_comments(raw: Any, language: str) -> dict[str, dict[str, str]]:
    """Convert flat ``{english: translated}`` entries to hash-keyed records."""
    if not isinstance(raw, Mapping):
        raise MalformedDictionary("comments must be an object")
    normalized: dict[str, dict[str, str]] = {}
    for key, value in raw.items():
        if isinstance(value, str):
            normalized[hash_comment(key)] = {"en": key.strip(), language: value}
        elif isinstance(value, Mapping):
            if not all(isinstance(v, str) for v in value.values()):
                raise MalformedDictionary(f"comment {key!r} has non-string translations")
            normalized[key] = dict(value)
        else:
            raise MalformedDictionary(f"comment {key!r} must be a string or an object")
    return normalized


# ============================================================================
# File I/O
# ============================================================================

def load_dictionary(path: str | Path) -> Dictionary:
    """Load a dictionary JSON file."""
    path = Path(path)
    return Dictionary.from_json(path.read_text(encoding="utf-8"))


def save_dictionary(dictionary: Dictionary, path: str | Path) -> Path:
    """Write a dictionary JSON file atomically (temp file + rename)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(dictionary.to_json())
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise
    return path
