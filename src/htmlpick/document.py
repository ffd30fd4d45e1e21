"""
Document module for htmlpick.

Thin adapter over BeautifulSoup: parse a byte stream into a document and
find the elements matching a CSS selector.
"""

import logging
from typing import BinaryIO, List

from bs4 import BeautifulSoup, ParserRejectedMarkup
from bs4.element import Tag
from soupsieve import SelectorSyntaxError

from .exceptions import ParseError, SelectorError

logger = logging.getLogger(__name__)

PARSER = "html.parser"


def parse_document(stream: BinaryIO) -> BeautifulSoup:
    """
    Parse an HTML document from a byte stream.

    Attributes are kept as plain strings, so multi-valued attributes such
    as class come back exactly as written.

    Args:
        stream: Readable binary stream

    Returns:
        Parsed document

    Raises:
        ParseError: If the stream cannot be read or parsed
    """
    try:
        markup = stream.read()
    except OSError as e:
        raise ParseError(f"failed to read document: {e}") from e

    try:
        document = BeautifulSoup(markup, PARSER, multi_valued_attributes=None)
    except ParserRejectedMarkup as e:
        raise ParseError(f"failed to parse document: {e}") from e

    logger.debug(f"Parsed document ({len(markup)} bytes, encoding: {document.original_encoding})")
    return document


def select(document: BeautifulSoup, query: str) -> List[Tag]:
    """
    Find all elements matching a CSS selector, in document order.

    Args:
        document: Parsed document
        query: CSS selector

    Returns:
        Matching elements (possibly empty)

    Raises:
        SelectorError: If the selector cannot be compiled
    """
    try:
        return document.select(query)
    except SelectorSyntaxError as e:
        raise SelectorError(f"invalid query {query!r}: {e}") from e
