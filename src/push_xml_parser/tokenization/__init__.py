"""Tokenization layer for the push-style XML parser.

Key Components:
    XMLTokenizer: Stateful tokenizer bound to one character stream
    next_token: Pure function reading a single token from a stream
    Token / TokenKind: Classified pieces of input with line numbers
    decode_entity: Decoder for the five predefined entity references
    parse_element / parse_element_end / parse_processing_instruction:
        Parsers for the contents of markup tokens
"""

from .entities import PREDEFINED_ENTITIES, decode_entity
from .structure import (
    parse_element,
    parse_element_end,
    parse_processing_instruction,
)
from .tokenizer import XMLTokenizer, next_token
from .tokens import (
    CHARACTER_KINDS,
    MARKUP_KINDS,
    TRANSPARENT_KINDS,
    WHITESPACE,
    LineCounter,
    Token,
    TokenKind,
)

__all__ = [
    "CHARACTER_KINDS",
    "LineCounter",
    "MARKUP_KINDS",
    "PREDEFINED_ENTITIES",
    "TRANSPARENT_KINDS",
    "Token",
    "TokenKind",
    "WHITESPACE",
    "XMLTokenizer",
    "decode_entity",
    "next_token",
    "parse_element",
    "parse_element_end",
    "parse_processing_instruction",
]
