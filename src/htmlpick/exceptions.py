"""
Exceptions module for htmlpick.

Defines the error taxonomy used across input acquisition, parsing and
value extraction, including the aggregated errors that collect
per-specifier and per-element failures.
"""

from dataclasses import dataclass
from typing import List, TYPE_CHECKING

if TYPE_CHECKING:
    from .values import ValueSpec


class HtmlPickError(Exception):
    """Base exception for htmlpick."""
    pass


class ConfigurationError(HtmlPickError):
    """Raised when options are invalid, before any I/O happens."""
    pass


class FileAccessError(HtmlPickError):
    """Raised when a local file cannot be opened or read."""
    pass


class NetworkError(HtmlPickError):
    """Raised on connection, timeout or transport failures."""
    pass


class ParseError(HtmlPickError):
    """Raised when input cannot be parsed as an HTML document."""
    pass


class SelectorError(ParseError):
    """Raised when the selector engine rejects a query."""
    pass


class ExtractionError(HtmlPickError):
    """
    Raised when a value cannot be extracted from an element.

    Carries whatever partial value was produced so callers can keep it.
    """

    def __init__(self, message: str, value: str = ""):
        super().__init__(message)
        self.value = value


class SerializationError(ExtractionError):
    """Raised when an element subtree cannot be serialized to HTML."""
    pass


@dataclass
class SpecifierFailure:
    """A single value specifier that failed on one element."""
    index: int
    spec: "ValueSpec"
    cause: ExtractionError

    def __str__(self) -> str:
        return f"at {self.index}, value: {self.spec.name}, {self.cause}"


class ValuesError(ExtractionError):
    """All specifier failures for one element."""

    def __init__(self, failures: List[SpecifierFailure], value: str = ""):
        self.failures = list(failures)
        lines = "\n".join(f"\t\t{failure}" for failure in self.failures)
        super().__init__(f"error to get values:\n{lines}", value)


@dataclass
class ElementFailure:
    """A failed element, identified by its zero-based match index."""
    match_index: int
    error: ValuesError

    def __str__(self) -> str:
        return f"at({self.match_index}): {self.error}"


class ExtractionErrors(ExtractionError):
    """
    Combined diagnostic for a whole extraction run.

    Every per-element failure is kept in ``failures``; none are discarded.
    """

    def __init__(self, failures: List[ElementFailure]):
        self.failures = list(failures)
        lines = "\n".join(f"\t{failure}" for failure in self.failures)
        super().__init__(f"error while getting values\n{lines}")

    @property
    def match_indexes(self) -> List[int]:
        """Zero-based indexes of the elements that failed."""
        return [failure.match_index for failure in self.failures]
