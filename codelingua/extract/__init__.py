"""
Extraction of translatable units from source code and markdown.

This module provides:
- IdentifierExtractor: user-defined names with categories and counts
- CommentExtractor: comment texts and exact comment spans
- MarkdownExtractor: prose blocks from markdown documents
"""

from codelingua.extract.comments import CommentExtractor, extract_comments
from codelingua.extract.identifiers import IdentifierExtractor, extract_identifiers
from codelingua.extract.markdown import MarkdownExtractor, extract_markdown

__all__ = [
    "CommentExtractor",
    "IdentifierExtractor",
    "MarkdownExtractor",
    "extract_comments",
    "extract_identifiers",
    "extract_markdown",
]
