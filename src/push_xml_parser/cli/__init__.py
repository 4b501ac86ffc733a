"""Command-line interface for the push-style XML parser.

Provides the ``push-xml`` tool: well-formedness checking of files and
directories, and a dump of a document's event stream.
"""

from .main import main

__all__ = ["main"]
