"""
Values module for htmlpick.

Value specifiers describe what to pull out of a matched element: its text,
its inner HTML, or one of its attributes. A ValueList applies several of
them to the same element and joins the results with a delimiter.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple

from bs4.element import Tag

from .exceptions import ExtractionError, SerializationError, SpecifierFailure, ValuesError

logger = logging.getLogger(__name__)

TEXT = "text"
HTML = "html"


class ValueSpec(ABC):
    """A single extraction rule applied to one element."""

    def __init__(self, name: str):
        self.name = name

    @abstractmethod
    def get(self, element: Tag) -> str:
        """
        Extract this value from an element.

        Args:
            element: Matched element

        Returns:
            Extracted string

        Raises:
            ExtractionError: If the value cannot be extracted
        """
        pass

    @property
    def short_circuits(self) -> bool:
        """True when this specifier's result replaces every other value."""
        return self.name.lower() == HTML

    def __eq__(self, other) -> bool:
        return type(self) is type(other) and self.name == other.name

    def __hash__(self) -> int:
        return hash((type(self), self.name))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class TextValue(ValueSpec):
    """Rendered text of the element and all of its descendants."""

    def __init__(self):
        super().__init__(TEXT)

    def get(self, element: Tag) -> str:
        return element.get_text()


class HtmlValue(ValueSpec):
    """Inner HTML of the element."""

    def __init__(self):
        super().__init__(HTML)

    def get(self, element: Tag) -> str:
        try:
            return element.decode_contents()
        except (UnicodeError, ValueError, RecursionError) as e:
            raise SerializationError(f"cannot serialize <{element.name}>: {e}") from e


class AttributeValue(ValueSpec):
    """Value of a named attribute; an absent attribute yields an empty string."""

    def get(self, element: Tag) -> str:
        value = element.get(self.name)
        if value is None:
            return ""
        if isinstance(value, list):
            return " ".join(value)
        return value


def parse_value(name: str) -> ValueSpec:
    """
    Build a value specifier from its name.

    "text" and "html" are reserved (case-sensitive); any other string is
    taken as an attribute name.

    Args:
        name: Specifier name as given on the command line

    Returns:
        Matching ValueSpec
    """
    if name == TEXT:
        return TextValue()
    if name == HTML:
        return HtmlValue()
    return AttributeValue(name)


class ValueList:
    """Ordered specifiers applied together to one element."""

    def __init__(self, specs: Sequence[ValueSpec], delim: str = ","):
        """
        Initialize ValueList.

        Args:
            specs: Value specifiers in output order
            delim: Delimiter placed between successive values
        """
        self.specs: List[ValueSpec] = list(specs)
        self.delim = delim

    @classmethod
    def from_names(cls, names: Sequence[str], delim: str = ",") -> "ValueList":
        """Build a ValueList from specifier names."""
        return cls([parse_value(name) for name in names], delim)

    def __len__(self) -> int:
        return len(self.specs)

    def __str__(self) -> str:
        return "[" + ",".join(spec.name for spec in self.specs) + "]"

    def get(self, element: Tag) -> Tuple[str, Optional[ValuesError]]:
        """
        Apply every specifier to an element.

        A specifier named "html" (any case) returns its own result at once,
        dropping anything gathered before it. Other failures are recorded
        and their partial values are kept in the output.

        Args:
            element: Matched element

        Returns:
            Tuple of (joined value, error or None)
        """
        parts: List[str] = []
        failures: List[SpecifierFailure] = []
        last = len(self.specs) - 1

        for index, spec in enumerate(self.specs):
            try:
                value = spec.get(element)
                error = None
            except ExtractionError as e:
                value = e.value
                error = e

            if spec.short_circuits:
                if error is not None:
                    return value, ValuesError([SpecifierFailure(index, spec, error)], value)
                return value, None

            if error is not None:
                logger.debug(f"Value {spec.name} failed at {index}: {error}")
                failures.append(SpecifierFailure(index, spec, error))

            parts.append(value)
            if index < last:
                parts.append(self.delim)

        result = "".join(parts)
        if failures:
            return result, ValuesError(failures, result)
        return result, None
