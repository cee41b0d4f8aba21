"""Property-based tests for the formatr parser, renderer and analyzer.

Uses hypothesis to verify invariants that must hold for *all* inputs:

- Text without braces parses to one Text node holding the whole source
- ``{{`` and ``}}`` always render as single braces
- Node spans tile the source with no gaps or overlaps
- Arbitrary input either parses or raises ParseError, nothing else
- Rendering is deterministic for a given template and context
- ``analyze`` never raises for template problems
"""

from __future__ import annotations

from hypothesis import given, settings

from formatr import Environment, ParseError, Placeholder, Text, parse

from .strategies import (
    arbitrary_template_source,
    context,
    escaped_text,
    path,
    plain_text,
    template_source,
)


class TestParserProperties:
    @given(source=plain_text)
    @settings(max_examples=200)
    def test_plain_text_roundtrip(self, source: str) -> None:
        ast = parse(source)
        assert len(ast.nodes) == 1
        assert isinstance(ast.nodes[0], Text)
        assert ast.nodes[0].value == source

    @given(pair=escaped_text)
    @settings(max_examples=200)
    def test_escapes_render_as_braces(self, pair: tuple[str, str]) -> None:
        source, expected = pair
        assert Environment().template(source)({}) == expected

    @given(source=template_source)
    @settings(max_examples=200)
    def test_spans_tile_source(self, source: str) -> None:
        ast = parse(source)
        cursor = 0
        for node in ast.nodes:
            assert node.span.start == cursor
            assert node.span.end > node.span.start
            cursor = node.span.end
        assert cursor == len(source)

    @given(segments=path)
    def test_placeholder_path_preserved(self, segments: tuple[str, ...]) -> None:
        (node,) = parse("{" + ".".join(segments) + "}").nodes
        assert isinstance(node, Placeholder)
        assert node.path == segments

    @given(source=arbitrary_template_source)
    @settings(max_examples=300)
    def test_only_parse_errors(self, source: str) -> None:
        """Malformed input raises ParseError; TypeError, IndexError etc. never escape."""
        try:
            parse(source)
        except ParseError as err:
            assert 0 <= err.pos <= len(source)


class TestRenderProperties:
    @given(source=template_source, ctx=context)
    @settings(max_examples=200)
    def test_render_is_deterministic(self, source: str, ctx: dict) -> None:
        env = Environment()
        first = env.template(source)(ctx)
        assert env.template(source)(ctx) == first
        assert Environment(cache_size=0).template(source)(ctx) == first


class TestAnalyzeProperties:
    @given(source=arbitrary_template_source)
    @settings(max_examples=300)
    def test_analyze_never_raises(self, source: str) -> None:
        report = Environment().analyze(source)
        for diagnostic in report:
            assert 0 <= diagnostic.pos <= len(source) + 1
            assert diagnostic.line >= 1
