"""Character-level XML tokenizer.

Splits a character stream into markup and character-data tokens. The
tokenizer only checks lexical structure (delimiters, entity references);
tag contents are interpreted later by :mod:`.structure`. A malformed token
does not raise: it comes back as a token of kind ``ERROR`` carrying the
reason, and the caller decides what to do with it.
"""

from typing import Iterator, List, Optional

from push_xml_parser.character.stream import EOF, CharacterStream
from push_xml_parser.shared.errors import LexicalError
from push_xml_parser.shared.logging import get_logger

from .entities import decode_entity
from .tokens import WHITESPACE, LineCounter, Token, TokenKind

CDATA_OPENER = "CDATA["  # Follows "<!["


def _read(stream: CharacterStream, lines: LineCounter) -> str:
    ch = stream.get()
    if ch == "\n":
        lines.newline()
    return ch


def next_token(stream: CharacterStream, lines: LineCounter) -> Token:
    """Read exactly one token from ``stream``.

    Args:
        stream: Character source
        lines: Line counter, advanced for every newline consumed

    Returns:
        The next token; ``EOF`` once the input is exhausted
    """
    try:
        ch = _read(stream, lines)
        if ch == EOF:
            return Token(TokenKind.EOF, "", lines.line)
        if ch == "<":
            return _scan_markup(stream, lines)
        return _scan_chars(ch, stream, lines)
    except LexicalError as e:
        return Token(TokenKind.ERROR, "", lines.line, reason=e.message)


def _scan_markup(stream: CharacterStream, lines: LineCounter) -> Token:
    ch = _read(stream, lines)
    if ch == "!":
        if stream.peek() == "[":
            return _scan_cdata(stream, lines)
        if stream.peek() == "-":
            return _scan_comment(stream, lines)
        return _scan_dtd(stream, lines)
    if ch == "?":
        return _scan_processing_instruction(stream, lines)
    if ch == "/":
        return _scan_element_end(stream, lines)
    if ch == EOF:
        raise LexicalError("'<' at end of input")
    if ch == "<":
        raise LexicalError("unexpected '<' inside tag")
    return _scan_element(ch, stream, lines)


def _scan_cdata(stream: CharacterStream, lines: LineCounter) -> Token:
    stream.get()  # '['
    for expected in CDATA_OPENER:
        if _read(stream, lines) != expected:
            raise LexicalError("malformed CDATA section opener")

    content: List[str] = []
    brackets = 0  # consecutive ']' seen
    while True:
        ch = _read(stream, lines)
        if ch == EOF:
            raise LexicalError("unterminated CDATA section")
        if ch == ">" and brackets >= 2:
            # Drop the "]]" that belongs to the terminator
            return Token(TokenKind.CHARS_CDATA, "".join(content[:-2]), lines.line)
        brackets = brackets + 1 if ch == "]" else 0
        content.append(ch)


def _scan_comment(stream: CharacterStream, lines: LineCounter) -> Token:
    stream.get()  # first '-'
    if _read(stream, lines) != "-":
        raise LexicalError("malformed comment opener")

    text = ["<!--"]
    hyphens = 0  # consecutive '-' seen
    while True:
        ch = _read(stream, lines)
        if ch == EOF:
            raise LexicalError("unterminated comment")
        text.append(ch)
        if hyphens == 2:
            if ch != ">":
                raise LexicalError("'--' not allowed inside a comment")
            return Token(TokenKind.COMMENT, "".join(text), lines.line)
        hyphens = hyphens + 1 if ch == "-" else 0


def _scan_dtd(stream: CharacterStream, lines: LineCounter) -> Token:
    text = ["<!"]
    depth = 1  # '<' seen minus '>' seen
    while depth > 0:
        ch = _read(stream, lines)
        if ch == EOF:
            raise LexicalError("unterminated declaration block")
        if ch == "<":
            depth += 1
        elif ch == ">":
            depth -= 1
        text.append(ch)
    return Token(TokenKind.DTD, "".join(text), lines.line)


def _scan_delimited(
    prefix: str,
    stream: CharacterStream,
    lines: LineCounter,
    what: str
) -> str:
    """Read up to and including the next '>', rejecting '<' and end of input."""
    text = [prefix]
    while True:
        ch = _read(stream, lines)
        if ch == EOF:
            raise LexicalError(f"unterminated {what}")
        if ch == "<":
            raise LexicalError(f"unexpected '<' inside {what}")
        text.append(ch)
        if ch == ">":
            return "".join(text)


def _scan_processing_instruction(stream: CharacterStream, lines: LineCounter) -> Token:
    text = _scan_delimited("<?", stream, lines, "processing instruction")
    if len(text) < 4 or not text.endswith("?>"):
        raise LexicalError("processing instruction must end with '?>'")
    return Token(TokenKind.PROCESSING_INSTRUCTION, text, lines.line)


def _scan_element_end(stream: CharacterStream, lines: LineCounter) -> Token:
    text = _scan_delimited("</", stream, lines, "end tag")
    return Token(TokenKind.ELEMENT_END, text, lines.line)


def _scan_element(first: str, stream: CharacterStream, lines: LineCounter) -> Token:
    if first == ">":
        # "<>" is lexically a tag; the element parser rejects the empty name
        return Token(TokenKind.ELEMENT_START, "<>", lines.line)
    text = _scan_delimited("<" + first, stream, lines, "tag")
    kind = TokenKind.EMPTY_ELEMENT if text[-2] == "/" else TokenKind.ELEMENT_START
    return Token(kind, text, lines.line)


def _scan_chars(first: str, stream: CharacterStream, lines: LineCounter) -> Token:
    text = [decode_entity(stream, lines) if first == "&" else first]
    while stream.peek() not in ("<", EOF):
        ch = _read(stream, lines)
        text.append(decode_entity(stream, lines) if ch == "&" else ch)
    return Token(TokenKind.CHARS, "".join(text), lines.line)


class XMLTokenizer:
    """Stateful tokenizer bound to one stream.

    Iterating over the tokenizer yields tokens up to and including the first
    ``EOF`` or ``ERROR`` token.
    """

    def __init__(
        self,
        stream: CharacterStream,
        correlation_id: Optional[str] = None
    ) -> None:
        self.stream = stream
        self.lines = LineCounter()
        self.token_count = 0
        self.logger = get_logger(__name__, correlation_id, "tokenizer")

    @property
    def line(self) -> int:
        return self.lines.line

    def skip_whitespace(self) -> None:
        """Consume whitespace up to the next significant character."""
        while self.stream.peek() in WHITESPACE:
            _read(self.stream, self.lines)

    def next_token(self) -> Token:
        token = next_token(self.stream, self.lines)
        self.token_count += 1
        if token.kind is TokenKind.ERROR:
            self.logger.debug(
                "Malformed token",
                extra={"line": token.line, "reason": token.reason}
            )
        return token

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            yield token
            if token.kind in (TokenKind.EOF, TokenKind.ERROR):
                return
