"""Tests for the console summary formatter."""
from jsonfeeder.formatters import ConsoleFormatter


def _doc():
    return {
        "version": "https://jsonfeed.org/version/1",
        "title": "Example [Blog]",
        "home_page_url": "https://example.com/",
        "items": [
            {"id": "1", "title": "Python 4.0 Released", "date_published": "2024-01-01T00:00:00+00:00",
             "tags": ["tech", "python"]},
            {"id": "https://example.com/untitled"},
        ],
    }


class TestConsoleFormatter:
    def test_returns_string(self):
        output = ConsoleFormatter().format(_doc())
        assert isinstance(output, str)
        assert "Example [Blog]" in output
        assert "2 items" in output

    def test_rows(self):
        output = ConsoleFormatter().format(_doc())
        assert "Python 4.0 Released" in output
        assert "2024-01-01 00:00" in output
        assert "tech, python" in output
        assert "https://example.com/untitled" in output

    def test_metadata(self):
        assert "home_page_url" in ConsoleFormatter().format(_doc())

    def test_empty(self):
        output = ConsoleFormatter().format({"version": "https://jsonfeed.org/version/1", "title": "Empty"})
        assert "0 items" in output
