"""
Extractor module for htmlpick.

Runs a selector against a document, applies the value list to every match
and gathers per-element failures into one combined error without stopping.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from bs4 import BeautifulSoup

from .config import ExtractConfig
from .document import parse_document, select
from .exceptions import ConfigurationError, ElementFailure, ExtractionErrors
from .source import open_source
from .values import ValueList

logger = logging.getLogger(__name__)


@dataclass
class ExtractionStats:
    """Statistics for one extraction run."""
    matched: int = 0
    emitted: int = 0
    empty: int = 0
    failed: int = 0


@dataclass
class ExtractionResult:
    """Output lines of a run plus the combined error, if any element failed."""
    lines: List[str] = field(default_factory=list)
    error: Optional[ExtractionErrors] = None
    stats: ExtractionStats = field(default_factory=ExtractionStats)


def extract(document: BeautifulSoup, query: str, values: ValueList) -> ExtractionResult:
    """
    Extract values from every element matching a query.

    Failures never halt iteration. Empty values are dropped from the
    output, so an element whose values are all empty contributes no line.

    Args:
        document: Parsed document
        query: CSS selector
        values: Value specifiers and delimiter

    Returns:
        ExtractionResult with lines in document order
    """
    lines: List[str] = []
    failures: List[ElementFailure] = []
    stats = ExtractionStats()

    for index, element in enumerate(select(document, query)):
        stats.matched += 1
        value, error = values.get(element)

        if error is not None:
            logger.debug(f"Element {index} failed: {error}")
            failures.append(ElementFailure(index, error))
            stats.failed += 1

        if value:
            lines.append(value)
            stats.emitted += 1
        else:
            stats.empty += 1

    logger.info(
        f"Extracted {query!r} with {values}: {stats.matched} matched, "
        f"{stats.emitted} emitted, {stats.empty} empty, {stats.failed} failed"
    )

    if failures:
        return ExtractionResult(lines, ExtractionErrors(failures), stats)
    return ExtractionResult(lines, None, stats)


def run(config: ExtractConfig) -> ExtractionResult:
    """
    Load the configured input and extract from it.

    The config is validated before any input is opened. The input stream
    is closed before returning.

    Args:
        config: Run options

    Returns:
        ExtractionResult

    Raises:
        ConfigurationError: If the config fails validation
        FileAccessError: If the input file cannot be opened or read
        NetworkError: If the input URL cannot be fetched
        ParseError: If the input or the query cannot be parsed
    """
    errors = config.validation_errors()
    if errors:
        details = "\n".join(f"\t{error}" for error in errors)
        raise ConfigurationError(f"invalid configuration:\n{details}")

    values = config.value_list()
    with open_source(config.location, config.timeout) as stream:
        document = parse_document(stream)
    return extract(document, config.query, values)
