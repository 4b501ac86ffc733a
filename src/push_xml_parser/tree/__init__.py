"""Document tree built on top of the push parser.

Key Components:
    TreeBuilder: Document handler assembling the tree from parse events
    XMLDocument: Root element plus processing instructions
    XMLElement: Element with attributes, text, children and source line
    ParseResult: Document tree together with the diagnostics of the parse
"""

from .builder import (
    ParseResult,
    TreeBuilder,
    XMLDocument,
    XMLElement,
)

__all__ = [
    "ParseResult",
    "TreeBuilder",
    "XMLDocument",
    "XMLElement",
]
