"""Tests for the built-in text filters, called directly and through templates."""

from __future__ import annotations

import pytest

from formatr import template
from formatr.filters.text import pad, plural, replace, slice_, trim, truncate, upper


class TestCaseAndTrim:
    def test_upper_lower_trim(self):
        render = template("{a|upper} {b|lower} [{c|trim}]")
        assert render({"a": "hi", "b": "LOUD", "c": "  x  "}) == "HI loud [x]"

    def test_coerces_non_strings(self):
        assert upper(42) == "42"
        assert upper([1, "a"]) == "1,A"
        assert trim(True) == "true"


class TestPlural:
    @pytest.mark.parametrize(
        ("count", "expected"),
        [(0, "items"), (1, "item"), (2, "items"), ("1", "item"), (1.0, "item"), (-1, "items")],
    )
    def test_plural(self, count, expected: str):
        assert plural(count, "item", "items") == expected

    def test_template(self):
        render = template("You have {n} {n|plural:message,messages}")
        assert render({"n": 1}) == "You have 1 message"
        assert render({"n": 3}) == "You have 3 messages"

    def test_missing_forms_raise(self):
        with pytest.raises(ValueError, match="plural filter requires two args"):
            plural(2, "item")

    def test_non_numeric_passes_through(self):
        assert plural("many", "item", "items") == "many"


class TestSlice:
    @pytest.mark.parametrize(
        ("args", "expected"),
        [
            (("0", "5"), "hello"),
            (("6",), "world"),
            (("-5",), "world"),
            (("0", "-6"), "hello"),
            (("3", "1"), ""),
            (("x",), "hello world"),
            (("0", "x"), ""),
            (("2px", "4"), "ll"),
        ],
    )
    def test_slice(self, args: tuple[str, ...], expected: str):
        assert slice_("hello world", *args) == expected

    def test_template(self):
        assert template("{s|slice:0,3}")({"s": "abcdef"}) == "abc"


class TestPad:
    @pytest.mark.parametrize(
        ("args", "expected"),
        [
            (("5",), "ab   "),
            (("5", "left"), "   ab"),
            (("5", "right", "*"), "ab***"),
            (("6", "both", "-"), "--ab--"),
            (("5", "center", "-"), "-ab--"),
            (("5", "left", "xyz"), "xxxab"),
            (("1",), "ab"),
        ],
    )
    def test_pad(self, args: tuple[str, ...], expected: str):
        assert pad("ab", *args) == expected

    def test_zero_pad_numbers(self):
        assert template("#{id|pad:4,left,0}")({"id": 7}) == "#0007"


class TestTruncate:
    def test_default_ellipsis(self):
        assert truncate("hello world", "8") == "hello..."

    def test_custom_ellipsis(self):
        assert truncate("hello world", "6", "~") == "hello~"

    def test_short_text_unchanged(self):
        assert truncate("hi", "10") == "hi"

    def test_limit_shorter_than_ellipsis(self):
        assert truncate("hello", "2") == "..."


class TestReplace:
    def test_replace_all(self):
        assert replace("a-b-c", "-", "_") == "a_b_c"

    def test_empty_search_is_noop(self):
        assert replace("abc", "", "x") == "abc"

    def test_template(self):
        render = template("{slug|replace:' ',-|lower}")
        assert render({"slug": "Hello Big World"}) == "hello-big-world"
