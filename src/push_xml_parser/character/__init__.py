"""Character input layer for the push-style XML parser.

Turns strings, bytes, paths and file objects into forward-only character
streams with ``peek()``/``get()`` access.
"""

from .stream import (
    EOF,
    CharacterStream,
    InputType,
    open_stream,
)

__all__ = [
    "EOF",
    "CharacterStream",
    "InputType",
    "open_stream",
]
