"""Decoding of the five predefined XML entity references.

Numeric character references (``&#NN;``) and user-defined entities are not
supported and are reported as lexical errors.
"""

from typing import Dict, Optional

from push_xml_parser.character.stream import EOF, CharacterStream
from push_xml_parser.shared.errors import LexicalError

from .tokens import LineCounter

PREDEFINED_ENTITIES: Dict[str, str] = {
    "amp": "&",
    "lt": "<",
    "gt": ">",
    "apos": "'",
    "quot": '"',
}


def _is_entity_prefix(prefix: str) -> bool:
    return any(name.startswith(prefix) for name in PREDEFINED_ENTITIES)


def decode_entity(stream: CharacterStream, lines: Optional[LineCounter] = None) -> str:
    """Decode one entity reference from a stream positioned just after ``&``.

    Characters are consumed one at a time and decoding stops at the first one
    that cannot continue a predefined entity name, so nothing past the point
    of failure is read.

    Args:
        stream: Character source
        lines: Line counter, advanced for a newline consumed while decoding

    Returns:
        The character the reference stands for

    Raises:
        LexicalError: If the reference is not one of the predefined entities
    """
    name = ""
    while True:
        ch = stream.get()
        if ch == "\n" and lines is not None:
            lines.newline()
        if ch == EOF:
            raise LexicalError(f"unterminated entity reference '&{name}'")
        if ch == ";":
            if name in PREDEFINED_ENTITIES:
                return PREDEFINED_ENTITIES[name]
            raise LexicalError(f"undefined entity reference '&{name};'")
        if not _is_entity_prefix(name + ch):
            raise LexicalError(f"undefined entity reference '&{name}{ch}'")
        name += ch
