import io

import pytest
import requests
from bs4.element import Tag

from htmlpick.config import ExtractConfig
from htmlpick.document import parse_document
from htmlpick.exceptions import ConfigurationError, ExtractionErrors, FileAccessError, SelectorError
from htmlpick.extractor import extract, run
from htmlpick.values import ValueList


def document_of(html: str):
    return parse_document(io.BytesIO(html.encode("utf-8")))


@pytest.fixture
def broken_serialization(monkeypatch):
    """Make inner HTML serialization fail for elements with id="bad"."""
    original = Tag.decode_contents

    def decode_contents(self, *args, **kwargs):
        if self.get("id") == "bad":
            raise UnicodeEncodeError("ascii", "é", 0, 1, "malformed subtree")
        return original(self, *args, **kwargs)

    monkeypatch.setattr(Tag, "decode_contents", decode_contents)


class TestExtract:
    """Test suite for running a query over a document."""

    def test_text_of_each_match(self):
        """Test text of every matched element."""
        document = document_of("<a>Hello</a><a>World</a>")
        result = extract(document, "a", ValueList.from_names(["text"]))

        assert result.lines == ["Hello", "World"]
        assert result.error is None

    def test_joined_values(self):
        """Test several values joined per element."""
        document = document_of('<div class="x">Hi</div>')
        result = extract(document, "div", ValueList.from_names(["text", "class"], "|"))

        assert result.lines == ["Hi|x"]
        assert result.error is None

    def test_html_wins(self):
        """Test that html replaces the other values."""
        document = document_of('<div class="x">Hi</div>')
        result = extract(document, "div", ValueList.from_names(["class", "html", "text"]))

        assert result.lines == ["Hi"]

    def test_no_matches(self):
        """Test that no match is an empty result without error."""
        document = document_of("<p>nothing here</p>")
        result = extract(document, "table td", ValueList.from_names(["text"]))

        assert result.lines == []
        assert result.error is None
        assert result.stats.matched == 0

    def test_empty_values_are_dropped(self):
        """Test that empty values produce no line and no error."""
        document = document_of('<a>one</a><a data-x="1">two</a>')
        result = extract(document, "a", ValueList.from_names(["data-missing"]))

        assert result.lines == []
        assert result.error is None
        assert result.stats.empty == 2

    def test_document_order(self):
        """Test that lines follow document order."""
        document = document_of('<ul><li><a href="/1">a</a></li></ul><p><a href="/2">b</a></p>')
        result = extract(document, "a", ValueList.from_names(["href"]))

        assert result.lines == ["/1", "/2"]

    def test_failed_element_does_not_stop_the_run(self, broken_serialization):
        """Test that a failing element is reported and the rest extracted."""
        document = document_of(
            '<p id="a">1</p><p id="b">2</p><p id="bad">3</p><p id="d">4</p>'
        )
        result = extract(document, "p", ValueList.from_names(["html"]))

        assert result.lines == ["1", "2", "4"]
        assert isinstance(result.error, ExtractionErrors)
        assert result.error.match_indexes == [2]
        assert "at(2):" in str(result.error)
        assert "malformed subtree" in str(result.error)
        assert result.stats.matched == 4
        assert result.stats.failed == 1

    def test_all_failures_are_collected(self, broken_serialization):
        """Test that every failing element is listed."""
        document = document_of('<p id="bad">1</p><p>2</p><p id="bad">3</p>')
        result = extract(document, "p", ValueList.from_names(["html"]))

        assert result.lines == ["2"]
        assert result.error.match_indexes == [0, 2]

    def test_invalid_query(self):
        """Test that an invalid selector raises SelectorError."""
        document = document_of("<p>x</p>")
        with pytest.raises(SelectorError):
            extract(document, "p[", ValueList.from_names(["text"]))

    def test_delimiter_in_values_is_not_escaped(self):
        """Test that delimiters inside values are left as they are."""
        document = document_of('<a title="a,b">c</a>')
        result = extract(document, "a", ValueList.from_names(["title", "text"]))

        assert result.lines == ["a,b,c"]


class TestRun:
    """Test suite for loading input and extracting from it."""

    def test_run_from_file(self, tmp_path):
        """Test a full run on a local file."""
        page = tmp_path / "page.html"
        page.write_text('<a href="/h">Hello</a><a href="/w">World</a>', encoding="utf-8")
        config = ExtractConfig(url=str(page), query="a", values=["text", "href"], delim="|")

        result = run(config)

        assert result.lines == ["Hello|/h", "World|/w"]
        assert result.error is None

    def test_run_missing_file(self, tmp_path):
        """Test that a missing file stops the run."""
        config = ExtractConfig(url=str(tmp_path / "missing.html"), query="a", values=["text"])

        with pytest.raises(FileAccessError):
            run(config)

    def test_run_rejects_invalid_config_before_io(self, monkeypatch):
        """Test that an invalid config is refused before anything is fetched."""
        calls = []

        def fake_get(url, **kwargs):
            calls.append(url)
            raise AssertionError("input must not be fetched")

        monkeypatch.setattr(requests, "get", fake_get)
        config = ExtractConfig(url="http://example.invalid", timeout=-1, query="a", values=[])

        with pytest.raises(ConfigurationError) as exc_info:
            run(config)

        message = str(exc_info.value)
        assert message.index("timeout") < message.index("values should be")
        assert calls == []

    def test_run_rejects_empty_values(self, tmp_path):
        """Test that an empty value list is refused instead of printing nothing."""
        page = tmp_path / "page.html"
        page.write_text("<a>Hello</a>", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            run(ExtractConfig(url=str(page), query="a", values=[]))
