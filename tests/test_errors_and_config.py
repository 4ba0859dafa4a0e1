import pytest

from simplex.config import (
    DEFAULT_RECURSION_LIMIT,
    get_default_source_id,
    get_prelude_root,
    get_recursion_limit,
)
from simplex.errors import (
    DEFAULT_SOURCE_ID,
    SimplexContractViolation,
    SimplexError,
    SimplexEvaluationError,
    SimplexRuntimeError,
    SimplexSyntaxError,
    SimplexTypeMismatch,
)
from simplex.interpreter import Interpreter
from simplex.types.ast_node import ASTNode, NodeKind
from simplex.types.backtrace import Frame
from simplex.types.value import ValueKind


def test_hierarchy():
    assert issubclass(SimplexSyntaxError, SimplexEvaluationError)
    assert issubclass(SimplexTypeMismatch, SimplexRuntimeError)
    assert issubclass(SimplexRuntimeError, SimplexEvaluationError)
    assert issubclass(SimplexEvaluationError, SimplexError)
    assert not issubclass(SimplexContractViolation, SimplexEvaluationError)


def test_syntax_error_display():
    err = SimplexSyntaxError(NodeKind.STRING, "'", "EOF", 2, 5)
    assert str(err) == "2|5: parse error while attempting to parse String: expected ', found EOF"


def test_runtime_error_display_is_innermost_first():
    frames = [Frame("<lambda x>", 4, 1), Frame("<native car>", 2, 9)]
    err = SimplexRuntimeError("boom", frames)
    assert str(err) == (
        "frame #0: <native car> at <input>:2\n"
        "frame #1: <lambda x> at <input>:4\n"
        "boom"
    )


def test_runtime_error_without_frames_is_just_the_message():
    assert str(SimplexRuntimeError("undeclared identifier: x")) == "undeclared identifier: x"


def test_runtime_error_copies_the_backtrace():
    frames = [Frame("f", 1, 1)]
    err = SimplexRuntimeError("boom", frames)
    frames.clear()
    assert err.backtrace == (Frame("f", 1, 1),)


def test_type_mismatch_display():
    assert str(SimplexTypeMismatch(ValueKind.CONS, ValueKind.INTEGER)) == (
        "type mismatch error: expected Cons, found Integer"
    )
    node = ASTNode(NodeKind.IDENTIFIER, "x", 3, 7)
    assert str(SimplexTypeMismatch(ValueKind.CHAR, ValueKind.NIL, node)) == (
        "3|7: type mismatch error: expected Char, found Nil"
    )


@pytest.mark.parametrize(
    "kind,payload",
    [
        (NodeKind.INTEGER, "1"),
        (NodeKind.INTEGER, True),
        (NodeKind.FLOATING_POINT, 1),
        (NodeKind.IDENTIFIER, 3),
        (NodeKind.PROGRAM, "x"),
        (NodeKind.NUMBER, 1),
    ],
)
def test_node_payload_must_match_kind(kind, payload):
    with pytest.raises(SimplexContractViolation):
        ASTNode(kind, payload)


def test_node_accessors_check_kind():
    with pytest.raises(SimplexContractViolation):
        ASTNode(NodeKind.IDENTIFIER, "x").integer()
    with pytest.raises(SimplexContractViolation):
        ASTNode(NodeKind.INTEGER, 1).children()


def test_source_id_from_environment(monkeypatch):
    monkeypatch.setenv("SIMPLEX_SOURCE_ID", "main.smp")
    assert get_default_source_id() == "main.smp"
    itp = Interpreter(prelude=None)
    with pytest.raises(SimplexRuntimeError) as info:
        itp.eval("((lambda x (car x)) 1)")
    assert info.value.source_id == "main.smp"
    assert "at main.smp:1" in str(info.value)


def test_default_source_id(monkeypatch):
    monkeypatch.delenv("SIMPLEX_SOURCE_ID", raising=False)
    assert get_default_source_id() == DEFAULT_SOURCE_ID


def test_prelude_root_defaults_to_package_directory(monkeypatch):
    monkeypatch.delenv("SIMPLEX_PRELUDE_PATH", raising=False)
    root = get_prelude_root()
    assert root.name == "prelude"
    assert (root / "std" / "core.simplex").is_file()


def test_prelude_root_given_a_file_uses_its_parent(tmp_path, monkeypatch):
    target = tmp_path / "somefile.txt"
    target.write_text("")
    monkeypatch.setenv("SIMPLEX_PRELUDE_PATH", str(target))
    assert get_prelude_root() == tmp_path


@pytest.mark.parametrize(
    "raw,expected",
    [
        (None, DEFAULT_RECURSION_LIMIT),
        ("50000", 50000),
        ("10", 1000),
        ("deep", DEFAULT_RECURSION_LIMIT),
    ],
)
def test_recursion_limit_from_environment(monkeypatch, raw, expected):
    if raw is None:
        monkeypatch.delenv("SIMPLEX_RECURSION_LIMIT", raising=False)
    else:
        monkeypatch.setenv("SIMPLEX_RECURSION_LIMIT", raw)
    assert get_recursion_limit() == expected
