import pytest
from hypothesis import given, strategies as st

from simplex.errors import SimplexContractViolation, SimplexTypeMismatch
from simplex.types.function import Function, Native
from simplex.types.value import (
    EMPTY_TEXT,
    FALSE,
    INVALID,
    NIL,
    TRUE,
    Value,
    ValueKind,
    format_float,
    from_list,
    from_text,
)


def test_from_text_builds_a_char_chain():
    assert from_text("ab") == Value.cons(Value.char("a"), Value.cons(Value.char("b"), NIL))


def test_empty_text_is_the_empty_pair():
    assert from_text("") is EMPTY_TEXT
    assert EMPTY_TEXT.is_empty_pair()
    assert EMPTY_TEXT.text() == ""


def test_text_round_trip_abc():
    assert from_text("abc").text() == "abc"


@given(st.text())
def test_text_round_trip(s):
    assert from_text(s).text() == s


def test_text_of_bad_element_names_char():
    with pytest.raises(SimplexTypeMismatch) as info:
        Value.cons(Value.integer(1), NIL).text()
    assert info.value.expected is ValueKind.CHAR
    assert info.value.found is ValueKind.INTEGER


def test_text_of_bad_tail_names_cons():
    with pytest.raises(SimplexTypeMismatch) as info:
        Value.cons(Value.char("a"), Value.integer(2)).text()
    assert info.value.expected is ValueKind.CONS


@pytest.mark.parametrize(
    "value,expected",
    [
        (TRUE, True),
        (FALSE, False),
        (Value.integer(0), False),
        (Value.integer(-3), True),
        (Value.floating_point(0.0), False),
        (Value.floating_point(0.5), True),
        (Value.byte(0), False),
        (Value.byte(1), True),
        (Value.char("\0"), False),
        (Value.char("a"), True),
        (EMPTY_TEXT, False),
        (from_text("a"), True),
        (Value.cons(Value.integer(1), NIL), True),
        (Value.dict({}), False),
        (Value.dict({"k": NIL}), True),
        (NIL, False),
    ],
)
def test_truthiness(value, expected):
    assert value.truthy() is expected


def test_function_is_truthy():
    fn = Function("car", (), Native(lambda node, backtrace, args: NIL))
    assert Value.function(fn).truthy()


def test_invalid_cannot_be_coerced_or_displayed():
    with pytest.raises(SimplexContractViolation):
        INVALID.truthy()
    with pytest.raises(SimplexContractViolation):
        str(INVALID)


@pytest.mark.parametrize(
    "value,display",
    [
        (TRUE, "true"),
        (FALSE, "false"),
        (Value.integer(42), "42"),
        (Value.integer(-7), "-7"),
        (Value.byte(255), "255"),
        (Value.char("x"), "x"),
        (Value.floating_point(39.2), "39.2"),
        (Value.floating_point(3.842), "3.842"),
        (Value.floating_point(4.0), "4"),
        (NIL, "()"),
        (from_text("hello world"), "hello world"),
        (EMPTY_TEXT, ""),
        (Value.cons(Value.integer(1), Value.integer(2)), "(cons 1 2)"),
        (from_list([Value.integer(1), Value.integer(2)]), "(cons 1 (cons 2 ()))"),
        (Value.dict({"a": Value.integer(1), "b": from_text("x")}), "(dict 'a' 1 'b' x)"),
    ],
)
def test_display_form(value, display):
    assert str(value) == display


@pytest.mark.parametrize(
    "f,text",
    [
        (0.1, "0.1"),
        (-2.0, "-2"),
        (1e20, "100000000000000000000"),
        (1e-7, "0.0000001"),
        (-2.5e-5, "-0.000025"),
        (float("inf"), "inf"),
    ],
)
def test_format_float_is_positional(f, text):
    assert format_float(f) == text


def test_from_list_of_nothing_is_nil():
    assert from_list([]) is NIL


def test_iterating_a_list_yields_its_cars():
    values = [Value.integer(1), from_text("b"), TRUE]
    assert list(from_list(values)) == values


def test_byte_range_is_checked():
    with pytest.raises(SimplexContractViolation):
        Value.byte(256)


def test_car_of_non_cons_is_a_contract_violation():
    with pytest.raises(SimplexContractViolation):
        Value.integer(1).car


def test_equality_is_structural_except_for_functions():
    assert from_text("abc") == from_text("abc")
    assert Value.integer(1) != Value.floating_point(1.0)
    op = lambda node, backtrace, args: NIL  # noqa: E731
    a = Function("f", (), Native(op))
    b = Function("f", (), Native(op))
    assert Value.function(a) == Value.function(a)
    assert Value.function(a) != Value.function(b)


LONG = 5000


def test_equality_on_long_chains():
    assert from_text("a" * LONG) == from_text("a" * LONG)
    assert from_text("a" * LONG) != from_text("a" * (LONG - 1) + "b")
    numbers = [Value.integer(i) for i in range(LONG)]
    assert from_list(numbers) == from_list(list(numbers))
    assert from_list(numbers) != from_list(numbers[:-1])


def test_hash_on_long_chains():
    assert hash(from_text("a" * LONG)) == hash(from_text("a" * LONG))


def test_display_of_a_long_list():
    shown = str(from_list([Value.integer(i) for i in range(LONG)]))
    assert shown.startswith("(cons 0 (cons 1 (cons 2 ")
    assert shown.endswith(f"(cons {LONG - 1} ()" + ")" * LONG)


def test_display_of_a_long_text_and_a_list_ending_in_text():
    assert str(from_text("x" * LONG)) == "x" * LONG
    assert str(Value.cons(Value.integer(1), from_text("ab"))) == "(cons 1 ab)"
