"""Tests for decoding JSON documents into AST nodes."""

from __future__ import annotations

import pytest

from jsmatch.ast_nodes import (
    ApplyExpr,
    BinopExpr,
    BoolLit,
    BoolPattern,
    IntLit,
    IntPattern,
    LambdaExpr,
    LetExpr,
    ListExpr,
    ListPattern,
    ListTailPattern,
    MatchClause,
    MatchExpr,
    StringLit,
    StringPattern,
    VarExpr,
    VariablePattern,
    WildcardPattern,
)
from jsmatch.decoder import decode_expr, decode_pattern, load_expr
from jsmatch.errors import CompileError


def _codes(exc: pytest.ExceptionInfo) -> list[str]:
    return [d.code for d in exc.value.diagnostics]


class TestExpressions:
    def test_literals(self):
        assert decode_expr({"type": "int", "value": 7}) == IntLit(7)
        assert decode_expr({"type": "string", "value": "s"}) == StringLit("s")
        assert decode_expr({"type": "bool", "value": True}) == BoolLit(True)

    def test_var_and_list(self):
        data = {"type": "list", "items": [{"type": "var", "name": "a"}, {"type": "int", "value": 1}]}
        assert decode_expr(data) == ListExpr([VarExpr("a"), IntLit(1)])

    def test_binop(self):
        data = {
            "type": "binop", "op": "+",
            "left": {"type": "int", "value": 1},
            "right": {"type": "int", "value": 2},
        }
        assert decode_expr(data) == BinopExpr("+", IntLit(1), IntLit(2))

    def test_let_apply_lambda(self):
        data = {
            "type": "let",
            "name": "f",
            "value": {"type": "lambda", "params": ["x"], "body": {"type": "var", "name": "x"}},
            "body": {"type": "apply", "function": {"type": "var", "name": "f"},
                     "args": [{"type": "int", "value": 1}]},
        }
        assert decode_expr(data) == LetExpr(
            "f",
            LambdaExpr(["x"], VarExpr("x")),
            ApplyExpr(VarExpr("f"), [IntLit(1)]),
        )

    def test_match(self):
        data = {
            "type": "match",
            "subject": {"type": "var", "name": "v"},
            "clauses": [
                {"pattern": {"type": "int", "value": 1}, "body": {"type": "string", "value": "one"}},
                {"pattern": {"type": "wildcard"}, "body": {"type": "string", "value": "many"}},
            ],
        }
        assert decode_expr(data) == MatchExpr(
            VarExpr("v"),
            [
                MatchClause(IntPattern(1), StringLit("one")),
                MatchClause(WildcardPattern(), StringLit("many")),
            ],
        )

    def test_load_expr_from_text(self):
        assert load_expr('{"type": "int", "value": 3}') == IntLit(3)


class TestPatterns:
    def test_all_pattern_types(self):
        data = {
            "type": "list",
            "items": [
                {"type": "var", "name": "a"},
                {"type": "wildcard"},
                {"type": "int", "value": 1},
                {"type": "string", "value": "s"},
                {"type": "bool", "value": False},
                {"type": "list_tail", "items": [], "tail": "rest"},
            ],
        }
        assert decode_pattern(data) == ListPattern([
            VariablePattern("a"),
            WildcardPattern(),
            IntPattern(1),
            StringPattern("s"),
            BoolPattern(False),
            ListTailPattern([], "rest"),
        ])


class TestErrors:
    def test_invalid_json(self):
        with pytest.raises(CompileError) as exc:
            load_expr("{not json")
        assert _codes(exc) == ["E001"]

    def test_unknown_expression_type(self):
        with pytest.raises(CompileError) as exc:
            decode_expr({"type": "float", "value": 1.5})
        assert _codes(exc) == ["E002"]

    def test_unknown_pattern_type(self):
        with pytest.raises(CompileError) as exc:
            decode_pattern({"type": "regex"})
        assert _codes(exc) == ["E002"]
        assert exc.value.diagnostics[0].labels[0].path == "pattern"

    def test_missing_field(self):
        with pytest.raises(CompileError) as exc:
            decode_expr({"type": "var"})
        assert _codes(exc) == ["E003"]

    def test_operator_with_newline(self):
        data = {
            "type": "binop",
            "op": "+\n",
            "left": {"type": "int", "value": 1},
            "right": {"type": "int", "value": 2},
        }
        with pytest.raises(CompileError) as exc:
            decode_expr(data)
        assert _codes(exc) == ["E003"]
        assert exc.value.diagnostics[0].labels[0].path == "expr.op"

    def test_empty_operator(self):
        data = {
            "type": "binop",
            "op": "",
            "left": {"type": "int", "value": 1},
            "right": {"type": "int", "value": 2},
        }
        with pytest.raises(CompileError) as exc:
            decode_expr(data)
        assert _codes(exc) == ["E003"]

    def test_bool_is_not_an_int(self):
        with pytest.raises(CompileError) as exc:
            decode_expr({"type": "int", "value": True})
        assert _codes(exc) == ["E003"]
        assert exc.value.diagnostics[0].labels[0].path == "expr.value"

    def test_non_object_node(self):
        with pytest.raises(CompileError) as exc:
            decode_expr(["int", 1])
        assert _codes(exc) == ["E003"]

    def test_param_names_must_be_strings(self):
        with pytest.raises(CompileError) as exc:
            decode_expr({"type": "lambda", "params": ["x", 2], "body": {"type": "int", "value": 1}})
        assert exc.value.diagnostics[0].labels[0].path == "expr.params[1]"

    def test_errors_collected_across_items(self):
        data = {
            "type": "list",
            "items": [{"type": "nope"}, {"type": "int", "value": 1}, {"type": "var"}],
        }
        with pytest.raises(CompileError) as exc:
            decode_expr(data)
        assert _codes(exc) == ["E002", "E003"]
        paths = [d.labels[0].path for d in exc.value.diagnostics]
        assert paths == ["expr.items[0]", "expr.items[2]"]

    def test_clause_paths(self):
        data = {
            "type": "match",
            "subject": {"type": "var", "name": "v"},
            "clauses": [{"pattern": {"type": "list_tail", "items": []}, "body": {"type": "int", "value": 1}}],
        }
        with pytest.raises(CompileError) as exc:
            decode_expr(data)
        assert exc.value.diagnostics[0].labels[0].path == "expr.clauses[0].pattern"
