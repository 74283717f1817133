"""
CLI module for the Answer Engine.

Provides command-line interface using Typer:
- search: Answer a query from all providers
- images: Search media files
- config: Configuration management
"""

from answer_engine.cli.main import app

__all__ = ["app"]
