"""Push-style XML parser.

A small streaming XML parser that checks well-formedness and pushes events to
registered handlers as it reads, without building a tree unless asked to.

Progressive API Disclosure:
- Level 1: Simple functions - parse(), parse_string(), parse_file()
- Level 2: Event-driven parser - XMLParser with DocumentHandler/ErrorHandler
- Level 3: Building blocks - CharacterStream, XMLTokenizer, structural parsers
"""

__version__ = "0.1.0"
__author__ = "Push XML Parser Team"

# Level 1 and 2
from .api import (
    DocumentHandler,
    ErrorHandler,
    EventRecorder,
    XMLParser,
    parse,
    parse_file,
    parse_string,
)

# Level 3
from .character import CharacterStream, open_stream

# Configuration and attribute access
from .shared import AttributeList, ParserConfig, XMLParseError
from .tokenization import XMLTokenizer

# Result objects and data structures
from .tree import ParseResult, TreeBuilder, XMLDocument, XMLElement

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple parsing functions
    "parse",
    "parse_string",
    "parse_file",

    # Level 2: Event-driven parser
    "XMLParser",
    "DocumentHandler",
    "ErrorHandler",
    "EventRecorder",

    # Level 3: Building blocks
    "CharacterStream",
    "XMLTokenizer",
    "open_stream",

    # Result objects and data structures
    "AttributeList",
    "ParseResult",
    "TreeBuilder",
    "XMLDocument",
    "XMLElement",

    # Configuration and errors
    "ParserConfig",
    "XMLParseError",
]
