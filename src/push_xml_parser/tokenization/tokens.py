"""Token model produced by the tokenizer."""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class TokenKind(Enum):
    """Token categories recognized by the tokenizer."""

    ELEMENT_START = auto()           # <name attr="v">
    ELEMENT_END = auto()             # </name>
    EMPTY_ELEMENT = auto()           # <name attr="v"/>
    PROCESSING_INSTRUCTION = auto()  # <?target data?>
    CHARS = auto()                   # Character data, entities decoded
    CHARS_CDATA = auto()             # Content of <![CDATA[ ... ]]>
    COMMENT = auto()                 # <!-- ... -->
    DTD = auto()                     # Any other <! ... > block
    EOF = auto()                     # End of input
    ERROR = auto()                   # Malformed token


# Kinds whose text is delimited by '<' and '>'
MARKUP_KINDS = frozenset({
    TokenKind.ELEMENT_START,
    TokenKind.ELEMENT_END,
    TokenKind.EMPTY_ELEMENT,
    TokenKind.PROCESSING_INSTRUCTION,
})

CHARACTER_KINDS = frozenset({TokenKind.CHARS, TokenKind.CHARS_CDATA})

# Kinds that do not interrupt a run of character data
TRANSPARENT_KINDS = CHARACTER_KINDS | {TokenKind.COMMENT, TokenKind.DTD}

WHITESPACE = frozenset(" \t\r\n")


@dataclass(frozen=True)
class Token:
    """A classified piece of input.

    Attributes:
        kind: Token category
        text: Raw markup for markup kinds, decoded text for character kinds
        line: Line number at the point the token was completed (1-based)
        reason: Why the token is malformed; only set for ERROR tokens
    """

    kind: TokenKind
    text: str
    line: int
    reason: Optional[str] = None

    def __post_init__(self) -> None:
        if self.line < 1:
            raise ValueError("Line number must be >= 1")

    @property
    def is_markup(self) -> bool:
        return self.kind in MARKUP_KINDS

    @property
    def is_whitespace(self) -> bool:
        """True if the text is made only of XML whitespace characters."""
        return all(ch in WHITESPACE for ch in self.text)


@dataclass
class LineCounter:
    """Mutable line number shared between the tokenizer and its caller."""

    line: int = 1

    def newline(self) -> None:
        self.line += 1
