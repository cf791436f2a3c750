"""Template search CLI.

Built with Click and Rich.
"""

from tmplsearch.cli.main import cli

__all__ = ["cli"]
