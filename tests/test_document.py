"""Tests for the width-aware document renderer."""

from __future__ import annotations

import pytest

from jsmatch.document import (
    LINE,
    SOFT_BREAK,
    concat,
    group,
    join,
    nest,
    nest_if_broken,
    render,
    separator,
    text,
)


def _items(*names: str):
    """A bracketed, comma-separated group like the emitter builds."""
    comma = concat([text(","), separator(" ", "")])
    return group(concat([
        text("["),
        nest(concat([SOFT_BREAK, join([text(n) for n in names], comma)])),
        separator("", ","),
        text("]"),
    ]))


class TestText:
    def test_plain_text(self):
        assert render(text("hello")) == "hello"

    def test_concat(self):
        assert render(concat([text("a"), text("b"), text("c")])) == "abc"

    def test_join(self):
        assert render(join([text("a"), text("b")], text(", "))) == "a, b"

    def test_join_empty(self):
        assert render(join([], text(", "))) == ""

    def test_newline_in_text_rejected(self):
        with pytest.raises(ValueError):
            text("a\nb")


class TestGroups:
    def test_group_fits_flat(self):
        assert render(_items("a", "b", "c")) == "[a, b, c]"

    def test_group_breaks_with_trailing_separator(self):
        assert render(_items("aaa", "bbb"), 6) == "[\n  aaa,\n  bbb,\n]"

    def test_exact_fit_stays_flat(self):
        # "[a, b]" is six columns
        assert render(_items("a", "b"), 6) == "[a, b]"

    def test_text_after_group_counts_toward_fit(self):
        doc = concat([
            group(concat([text("aaaa"), separator(" ", ""), text("bbbb")])),
            text("cccc"),
        ])
        assert render(doc, 12) == "aaaa\nbbbbcccc"
        assert render(doc, 13) == "aaaa bbbbcccc"

    def test_inner_group_decided_separately(self):
        inner = _items("x", "y")
        outer = group(concat([
            text("call("),
            nest(concat([SOFT_BREAK, inner, text(","), separator(" ", ""), text("zzzzzzzzzz")])),
            separator("", ","),
            text(")"),
        ]))
        assert render(outer, 20) == "call(\n  [x, y],\n  zzzzzzzzzz,\n)"

    def test_breaks_outside_group_are_broken(self):
        assert render(concat([text("a"), separator(" ", ";"), text("b")])) == "a;\nb"


class TestLinesAndNesting:
    def test_hard_line_always_breaks(self):
        assert render(group(concat([text("a"), LINE, text("b")]))) == "a\nb"

    def test_nest_indents_lines(self):
        doc = concat([text("{"), nest(concat([LINE, text("x")])), LINE, text("}")])
        assert render(doc) == "{\n  x\n}"

    def test_nested_nest_accumulates(self):
        doc = concat([
            text("a"),
            nest(concat([LINE, text("b"), nest(concat([LINE, text("c")]))])),
        ])
        assert render(doc) == "a\n  b\n    c"

    def test_custom_indent_amount(self):
        doc = concat([text("a"), nest(concat([LINE, text("b")]), 4)])
        assert render(doc) == "a\n    b"

    def test_nest_if_broken_ignored_in_flat_group(self):
        block = concat([text("{"), nest(concat([LINE, text("x")])), LINE, text("}")])
        doc = group(concat([text("["), nest_if_broken(concat([SOFT_BREAK, block])), text("]")]))
        assert render(doc) == "[{\n  x\n}]"

    def test_nest_if_broken_indents_in_broken_group(self):
        doc = group(concat([
            text("["),
            nest_if_broken(concat([SOFT_BREAK, text("a" * 10)])),
            SOFT_BREAK,
            text("]"),
        ]))
        assert render(doc, max_width=8) == "[\n  aaaaaaaaaa\n]"

    def test_deterministic(self):
        doc = _items(*[f"item{i}" for i in range(30)])
        assert render(doc) == render(doc)
