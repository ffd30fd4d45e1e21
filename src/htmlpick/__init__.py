"""
htmlpick - Extract values from HTML elements selected by CSS selectors

This package reads an HTML document from a file, URL or standard input,
matches elements with a CSS selector, and prints one line per element with:
- the element's text, inner HTML, or any attribute
- several values joined by a configurable delimiter
- per-element failures collected without stopping the run
"""

__version__ = "1.0.0"

from .config import load_config, ExtractConfig
from .document import parse_document, select
from .exceptions import (
    HtmlPickError,
    ConfigurationError,
    FileAccessError,
    NetworkError,
    ParseError,
    SelectorError,
    ExtractionError,
    SerializationError,
    ValuesError,
    ExtractionErrors,
    SpecifierFailure,
    ElementFailure,
)
from .extractor import extract, run, ExtractionResult, ExtractionStats
from .source import open_source
from .values import ValueSpec, TextValue, HtmlValue, AttributeValue, ValueList, parse_value
from .cli import main

__all__ = [
    "load_config",
    "ExtractConfig",
    "parse_document",
    "select",
    "HtmlPickError",
    "ConfigurationError",
    "FileAccessError",
    "NetworkError",
    "ParseError",
    "SelectorError",
    "ExtractionError",
    "SerializationError",
    "ValuesError",
    "ExtractionErrors",
    "SpecifierFailure",
    "ElementFailure",
    "extract",
    "run",
    "ExtractionResult",
    "ExtractionStats",
    "open_source",
    "ValueSpec",
    "TextValue",
    "HtmlValue",
    "AttributeValue",
    "ValueList",
    "parse_value",
    "main",
]
