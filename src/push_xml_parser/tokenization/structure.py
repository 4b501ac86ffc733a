"""Parsers for the contents of already-delimited markup tokens.

All three functions are pure: they take the raw text of one token, as
produced by the tokenizer, and never touch the input stream.
"""

from typing import Tuple

from push_xml_parser.shared.attributes import AttributeList
from push_xml_parser.shared.errors import ProcessingInstructionError, StructuralError

from .tokens import WHITESPACE

_NAME_TERMINATORS = frozenset(">/=") | WHITESPACE
_ATTR_NAME_TERMINATORS = frozenset(">=") | WHITESPACE
_QUOTES = frozenset("'\"")


def _skip_whitespace(text: str, i: int) -> int:
    while text[i] in WHITESPACE:
        i += 1
    return i


def _scan_name(text: str, i: int, terminators: frozenset) -> Tuple[str, int]:
    start = i
    while text[i] not in terminators:
        i += 1
    return text[start:i], i


def parse_element(text: str) -> Tuple[str, AttributeList]:
    """Parse a start tag or empty-element tag.

    Args:
        text: Token text such as ``<item id="1" kind='x'/>``

    Returns:
        Element name and its attributes in document order

    Raises:
        StructuralError: On an empty name, malformed or duplicate attributes
    """
    # The tokenizer guarantees text ends with '>' and holds no other '>',
    # so every scan below stops before running off the end.
    name, i = _scan_name(text, 1, _NAME_TERMINATORS)
    if not name:
        raise StructuralError("element has no name")

    attrs = AttributeList()
    i = _skip_whitespace(text, i)
    while text[i] not in "/>":
        attr_name, i = _scan_name(text, i, _ATTR_NAME_TERMINATORS)
        if not attr_name:
            raise StructuralError(f"empty attribute name in <{name}>")
        i = _skip_whitespace(text, i)
        if text[i] != "=":
            raise StructuralError(f"attribute '{attr_name}' has no value")
        i = _skip_whitespace(text, i + 1)

        quote = text[i]
        if quote not in _QUOTES:
            raise StructuralError(f"value of attribute '{attr_name}' is not quoted")
        end = text.find(quote, i + 1, len(text) - 1)
        if end == -1:
            raise StructuralError(f"unterminated value for attribute '{attr_name}'")
        value = text[i + 1:end]

        i = end + 1
        if text[i] not in "/>" and text[i] not in WHITESPACE:
            raise StructuralError(f"missing whitespace after attribute '{attr_name}'")
        attrs.add(attr_name, value)
        i = _skip_whitespace(text, i)

    if text[i] == "/" and i != len(text) - 2:
        raise StructuralError(f"unexpected '/' in <{name}>")
    return name, attrs


def parse_element_end(text: str) -> str:
    """Parse an end tag such as ``</item>`` and return the element name.

    Anything after whitespace following the name is ignored.

    Raises:
        StructuralError: If the tag has no name
    """
    body = text[2:-1]
    end = 0
    while end < len(body) and body[end] not in WHITESPACE:
        end += 1
    if end == 0:
        raise StructuralError("end tag has no name")
    return body[:end]


def parse_processing_instruction(text: str) -> Tuple[str, str]:
    """Split ``<?target data?>`` into target and data.

    The target runs up to the first whitespace or '?'. A single whitespace
    character separating it from the data is dropped; the data is everything
    after that up to the closing ``?>``.

    Raises:
        ProcessingInstructionError: If the target is empty
    """
    body = text[2:-2]
    end = 0
    while end < len(body) and body[end] not in WHITESPACE and body[end] != "?":
        end += 1
    if end == 0:
        raise ProcessingInstructionError("processing instruction has no target")
    target, data = body[:end], body[end:]
    if data and data[0] in WHITESPACE:
        data = data[1:]
    return target, data
