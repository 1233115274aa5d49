"""
Entry point for running codelingua as a module.

Usage:
    python -m codelingua --help
    python -m codelingua translate src/app.ts --dict app_ja.json -t ja
    python -m codelingua extract src/app.ts --kind comments
"""
from .cli import app


if __name__ == "__main__":
    app()
