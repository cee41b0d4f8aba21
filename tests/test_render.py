"""Tests for compiling and rendering templates synchronously."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

import pytest

from formatr import (
    AsyncFilterError,
    MissingKeyError,
    TemplateError,
    UnknownFilterError,
    template,
)
from formatr.compiler import PlaceholderPart, Renderer, TextPart


class TestBasicRendering:
    def test_hello(self):
        assert template("Hello {name|upper}")({"name": "lara"}) == "Hello LARA"

    def test_static_template(self):
        render = template("no placeholders here")
        assert render.is_static
        assert render({}) == "no placeholders here"
        assert render() == "no placeholders here"

    def test_empty_template(self):
        render = template("")
        assert render.is_static
        assert render({"a": 1}) == ""

    def test_escapes_render_literal_braces(self):
        assert template("{{ {name} }}")({"name": "x"}) == "{ x }"

    def test_escaped_only_template_is_static(self):
        render = template("{{literal}}")
        assert render.is_static
        assert render({}) == "{literal}"

    def test_lone_closing_brace(self):
        assert template("a } b {x}")({"x": 1}) == "a } b 1"

    def test_repeated_placeholder(self):
        assert template("{x}-{x}-{x}")({"x": "ab"}) == "ab-ab-ab"

    def test_render_alias(self):
        render = template("{a}")
        assert render.render({"a": "ok"}) == "ok"

    def test_returns_renderer(self):
        assert isinstance(template("{a}"), Renderer)


class TestCompiledParts:
    def test_adjacent_text_is_merged(self):
        render = template("a{{b}}c{x}")
        assert render.parts[0] == TextPart("a{b}c")
        assert isinstance(render.parts[1], PlaceholderPart)
        assert len(render.parts) == 2

    def test_filters_are_pre_resolved(self):
        render = template("{name|trim|upper}")
        part = render.parts[0]
        assert part.key == "name"
        assert [f.name for f in part.filters] == ["trim", "upper"]
        assert all(callable(f.func) for f in part.filters)

    def test_placeholders_property(self):
        render = template("{a} and {b.c}")
        assert [p.key for p in render.placeholders] == ["a", "b.c"]


class TestValueDisplay:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (0, "0"),
            (False, "false"),
            (True, "true"),
            ("", ""),
            (2.0, "2"),
            (2.5, "2.5"),
            (float("nan"), "NaN"),
            (float("inf"), "Infinity"),
            ([1, 2, None], "1,2,"),
            ({"a": 1}, "[object Object]"),
            (date(2025, 1, 2), "2025-01-02"),
        ],
    )
    def test_display(self, value, expected: str):
        assert template("{v}")({"v": value}) == expected

    def test_small_floats_use_plain_decimal_until_1e_minus_7(self):
        render = template("{a}|{b}|{c}")
        assert render({"a": 0.00001, "b": 1.23e-5, "c": 1e-7}) == "0.00001|0.0000123|1e-7"


class TestDotPaths:
    def test_nested_keys(self):
        render = template("User={user.name}, City={user.address.city}")
        out = render({"user": {"name": "Lara", "address": {"city": "Berlin"}}})
        assert out == "User=Lara, City=Berlin"

    def test_attribute_access(self):
        @dataclass
        class User:
            name: str

        assert template("{user.name|upper}")({"user": User("ada")}) == "ADA"

    @pytest.mark.parametrize("source", ["{user.__class__}", "{user._secret}", "{user.__dict__}"])
    def test_underscore_attributes_are_not_read(self, source: str):
        @dataclass
        class User:
            name: str
            _secret: str = "hidden"

        assert template(source)({"user": User("ada")}) == source
        with pytest.raises(MissingKeyError):
            template(source, on_missing="error")({"user": User("ada")})

    def test_underscore_mapping_keys_still_resolve(self):
        assert template("{meta._id}")({"meta": {"_id": 7}}) == "7"

    def test_keep_for_missing_nested_segment(self):
        render = template("City={user.address.city}", on_missing="keep")
        assert render({"user": {"address": None}}) == "City={user.address.city}"

    def test_primitive_in_the_middle_is_missing(self):
        assert template("{a.b}")({"a": "text"}) == "{a.b}"

    def test_none_context(self):
        assert template("Hi {name}")(None) == "Hi {name}"

    def test_error_on_missing_path(self):
        render = template("{a.b.c}", on_missing="error")
        with pytest.raises(MissingKeyError, match=r'Missing key "a\.b\.c"'):
            render({"a": {}})


class TestMissingKeys:
    def test_keep_is_default(self):
        assert template("Hello {name}")({}) == "Hello {name}"

    def test_none_value_counts_as_missing(self):
        assert template("[{v}]")({"v": None}) == "[{v}]"

    def test_error_policy(self):
        render = template("{x}", on_missing="error")
        with pytest.raises(MissingKeyError) as exc_info:
            render({})
        assert 'Missing key "x"' in str(exc_info.value)
        assert exc_info.value.key == "x"
        assert exc_info.value.path == ("x",)

    def test_missing_key_error_is_template_error(self):
        with pytest.raises(TemplateError):
            template("{x}", on_missing="error")({})

    def test_callable_policy(self):
        render = template("Hi {user.name}", on_missing=lambda key: f"<{key}?>")
        assert render({}) == "Hi <user.name?>"

    def test_callable_result_is_displayed(self):
        render = template("{n}", on_missing=lambda key: None)
        assert render({}) == "null"

    def test_missing_skips_filters(self):
        calls = []

        def spy(value):
            calls.append(value)
            return value

        render = template("{x|spy}", filters={"spy": spy})
        assert render({}) == "{x}"
        assert calls == []


class TestStrictKeys:
    def test_missing_key_raises(self):
        render = template("Hello {name}, you have {count} messages", strict_keys=True)
        with pytest.raises(MissingKeyError, match='Missing key "count"'):
            render({"name": "Alice"})

    def test_all_keys_present(self):
        render = template("Hello {name}, you have {count} messages", strict_keys=True)
        assert render({"name": "Alice", "count": 5}) == "Hello Alice, you have 5 messages"

    def test_null_value_raises(self):
        with pytest.raises(MissingKeyError):
            template("{count}", strict_keys=True)({"count": None})

    def test_strict_wins_over_keep(self):
        render = template("Hello {name}", strict_keys=True, on_missing="keep")
        with pytest.raises(MissingKeyError):
            render({})

    def test_dot_path(self):
        render = template("City: {user.address.city}", strict_keys=True)
        with pytest.raises(MissingKeyError, match='Missing key "user.address.city"'):
            render({"user": {"name": "Alice"}})

    def test_zero_and_empty_are_present(self):
        render = template("[{a}][{b}][{c}]", strict_keys=True)
        assert render({"a": 0, "b": "", "c": False}) == "[0][][false]"

    def test_static_template(self):
        assert template("static text", strict_keys=True)({}) == "static text"


class TestCustomFilters:
    def test_custom_filter(self):
        render = template("{name|shout}", filters={"shout": lambda v: f"{v}!"})
        assert render({"name": "hey"}) == "hey!"

    def test_custom_filter_receives_string_args(self):
        seen = []

        def record(value, *args):
            seen.append(args)
            return value

        template("{x|record:1,two,'3'}", filters={"record": record})({"x": 1})
        assert seen == [("1", "two", "3")]

    def test_custom_filter_overrides_builtin(self):
        render = template("{name|upper}", filters={"upper": lambda v: "custom"})
        assert render({"name": "x"}) == "custom"

    def test_filter_exception_propagates_unchanged(self):
        def boom(value):
            raise RuntimeError("kaboom")

        render = template("{x|boom}", filters={"boom": boom})
        with pytest.raises(RuntimeError, match="kaboom"):
            render({"x": 1})

    def test_filter_value_flows_left_to_right(self):
        render = template("{x|a|b}", filters={"a": lambda v: v + "a", "b": lambda v: v + "b"})
        assert render({"x": "-"}) == "-ab"

    def test_async_filter_in_sync_renderer(self):
        async def fetch(value):
            return value

        render = template("{id|fetch}", filters={"fetch": fetch})
        with pytest.raises(AsyncFilterError, match="template_async"):
            render({"id": 1})


class TestUnknownFilters:
    def test_unknown_filter_raises_at_compile_time(self):
        with pytest.raises(UnknownFilterError, match='Unknown filter "nope"'):
            template("{x|nope}")

    def test_suggestion_in_message(self):
        with pytest.raises(UnknownFilterError) as exc_info:
            template("{x|upperr}")
        assert str(exc_info.value) == 'Unknown filter "upperr". Did you mean "upper"?'
        assert exc_info.value.suggestions == ("upper",)
