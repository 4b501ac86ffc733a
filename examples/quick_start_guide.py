#!/usr/bin/env python3
"""
Quick Start Guide for the push-style XML parser.

Walks through the three ways of using the parser: building a tree in one
call, receiving events through handlers, and checking documents that are
not well-formed.
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from push_xml_parser import DocumentHandler, EventRecorder, XMLParser, parse_string
from push_xml_parser.api import DiagnosticCollector

BOOK = """<?xml version="1.0"?>
<book id="123" genre="fiction">
  <title>My Book</title>
  <author>John Doe</author>
  <price currency="USD">19.99</price>
</book>
"""


class ElementCounter(DocumentHandler):
    """Counts elements per tag name as they stream past."""

    def __init__(self):
        self.counts = {}

    def start_element(self, line, name, attrs):
        self.counts[name] = self.counts.get(name, 0) + 1


def quick_start_example():
    """Build a tree and navigate it."""

    print("🚀 QUICK START - Push XML Parser")
    print("=" * 45)

    print("\n📄 Step 1: Parsing into a tree")
    print("-" * 30)

    result = parse_string(BOOK)
    document = result.document

    print(f"✅ Success: {result.success}")
    print(f"📏 Elements: {document.total_elements}")

    print("\n🧭 Step 2: Document Navigation")
    print("-" * 30)

    title = document.find("title").text
    author = document.find("author").text
    price = document.find("price")

    print(f"📖 Book: '{title}' by {author}")
    print(f"💰 Price: {price.get_attribute('currency')} {price.text}")
    for line, target, data in document.processing_instructions:
        print(f"⚙️  Line {line}: <?{target} {data}?>")


def event_handler_example():
    """Receive events without building a tree."""

    print("\n\n📡 EVENT HANDLERS")
    print("=" * 40)

    counter = ElementCounter()
    recorder = EventRecorder()

    parser = XMLParser()
    parser.add_document_handler(counter)
    parser.add_document_handler(recorder)
    parser.parse(BOOK)

    print(f"📊 Element counts: {counter.counts}")
    print("📋 First events:")
    for event in recorder.events[:4]:
        print(f"  - {event.name} {event.args}")


def malformed_document_example():
    """Report well-formedness errors."""

    print("\n\n🔍 MALFORMED DOCUMENTS")
    print("=" * 40)

    samples = {
        "crossed tags": "<a><b></a></b>",
        "bad processing instruction": "<a><? ?></a>",
        "unterminated comment": "<a>\n<!-- never closed\n",
    }

    for label, text in samples.items():
        collector = DiagnosticCollector()
        parser = XMLParser()
        parser.add_error_handler(collector)
        parser.parse(text)

        status = "❌" if collector.fatal else "✅"
        print(f"{status} {label}")
        for diag in collector.diagnostics:
            print(f"  - {diag.severity.name} at line {diag.line}: {diag.message}")


if __name__ == "__main__":
    quick_start_example()
    event_handler_example()
    malformed_document_example()
