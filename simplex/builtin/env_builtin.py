"""Built-in functions for the Simplex runtime environment.

This module defines the native primitives (arithmetic, comparison, cons and
dict operations, string conversion and blocking I/O) and registers them as
native Function values. Every primitive receives the call-site node, the
current backtrace and the evaluated arguments, and checks its own arity and
argument kinds.
"""
from __future__ import annotations

import sys
from typing import Callable, TextIO

from simplex.errors import SimplexRuntimeError, SimplexTypeMismatch
from simplex.types.ast_node import ASTNode
from simplex.types.backtrace import Backtrace
from simplex.types.environment import Environment
from simplex.types.function import Function, Native, NativeOperation
from simplex.types.value import (
    NIL,
    Value,
    ValueKind,
    from_list,
    from_text,
)

NUMBER_KINDS = (ValueKind.INTEGER, ValueKind.FLOATING_POINT)


# -------------------------------
# Argument checking
# -------------------------------
def check_arity(
    name: str,
    node: ASTNode,
    backtrace: Backtrace,
    args: list[Value],
    minimum: int,
    maximum: int | None = None,
) -> None:
    """Raise unless minimum <= len(args) <= maximum (maximum=None means unbounded)."""
    count = len(args)
    if minimum <= count and (maximum is None or count <= maximum):
        return
    if maximum is None:
        expected = f"at least {minimum}"
    elif minimum == maximum:
        expected = str(minimum)
    else:
        expected = f"{minimum} to {maximum}"
    raise SimplexRuntimeError(
        f"{node.line}|{node.col}: {name} expects {expected} parameters, got {count}",
        backtrace,
    )


def check_kind(node: ASTNode, backtrace: Backtrace, value: Value, *kinds: ValueKind) -> Value:
    if value.kind not in kinds:
        raise SimplexTypeMismatch(kinds[0], value.kind, node, backtrace)
    return value


def _numbers(node: ASTNode, backtrace: Backtrace, args: list[Value]) -> list[Value]:
    return [check_kind(node, backtrace, arg, *NUMBER_KINDS) for arg in args]


def _all_integer(args: list[Value]) -> bool:
    return all(arg.kind is ValueKind.INTEGER for arg in args)


def _number(result: int | float, integer: bool) -> Value:
    return Value.integer(result) if integer else Value.floating_point(result)


# -------------------------------
# Arithmetic
# -------------------------------
def add(node: ASTNode, backtrace: Backtrace, args: list[Value]) -> Value:
    check_arity("+", node, backtrace, args, 1)
    args = _numbers(node, backtrace, args)
    if len(args) == 1:
        return args[0]
    return _number(sum(arg.payload for arg in args), _all_integer(args))


def sub(node: ASTNode, backtrace: Backtrace, args: list[Value]) -> Value:
    check_arity("-", node, backtrace, args, 1, 2)
    args = _numbers(node, backtrace, args)
    if len(args) == 1:
        return _number(-args[0].payload, _all_integer(args))
    return _number(args[0].payload - args[1].payload, _all_integer(args))


def mul(node: ASTNode, backtrace: Backtrace, args: list[Value]) -> Value:
    check_arity("*", node, backtrace, args, 1)
    args = _numbers(node, backtrace, args)
    result = 1
    for arg in args:
        result *= arg.payload
    return _number(result, _all_integer(args))


def div(node: ASTNode, backtrace: Backtrace, args: list[Value]) -> Value:
    check_arity("/", node, backtrace, args, 2, 2)
    args = _numbers(node, backtrace, args)
    dividend, divisor = args[0].payload, args[1].payload
    if _all_integer(args):
        if divisor == 0:
            raise SimplexRuntimeError(f"{node.line}|{node.col}: division by zero", backtrace)
        # Integer division truncates toward zero
        quotient = abs(dividend) // abs(divisor)
        return Value.integer(quotient if (dividend < 0) == (divisor < 0) else -quotient)
    try:
        return Value.floating_point(dividend / divisor)
    except ZeroDivisionError:
        raise SimplexRuntimeError(f"{node.line}|{node.col}: division by zero", backtrace)


# -------------------------------
# Comparison
# -------------------------------
def equals(node: ASTNode, backtrace: Backtrace, args: list[Value]) -> Value:
    """True if every argument equals the first (same kind and payload)."""
    check_arity("=", node, backtrace, args, 2)
    first = args[0]
    return Value.boolean(all(arg == first for arg in args[1:]))


def lt(node: ASTNode, backtrace: Backtrace, args: list[Value]) -> Value:
    check_arity("<", node, backtrace, args, 2, 2)
    a, b = _numbers(node, backtrace, args)
    return Value.boolean(a.payload < b.payload)


def gt(node: ASTNode, backtrace: Backtrace, args: list[Value]) -> Value:
    check_arity(">", node, backtrace, args, 2, 2)
    a, b = _numbers(node, backtrace, args)
    return Value.boolean(a.payload > b.payload)


# -------------------------------
# Control flow
# -------------------------------
def sequence(node: ASTNode, backtrace: Backtrace, args: list[Value]) -> Value:
    """Arguments are already evaluated left to right; return the last one."""
    check_arity("sequence", node, backtrace, args, 1)
    return args[-1]


# -------------------------------
# Cons operations
# -------------------------------
def cons(node: ASTNode, backtrace: Backtrace, args: list[Value]) -> Value:
    check_arity("cons", node, backtrace, args, 2, 2)
    return Value.cons(args[0], args[1])


def car(node: ASTNode, backtrace: Backtrace, args: list[Value]) -> Value:
    check_arity("car", node, backtrace, args, 1, 1)
    return check_kind(node, backtrace, args[0], ValueKind.CONS).car


def cdr(node: ASTNode, backtrace: Backtrace, args: list[Value]) -> Value:
    check_arity("cdr", node, backtrace, args, 1, 1)
    return check_kind(node, backtrace, args[0], ValueKind.CONS).cdr


def list_builtin(node: ASTNode, backtrace: Backtrace, args: list[Value]) -> Value:
    return from_list(args)


# -------------------------------
# Dict operations
# -------------------------------
def _key(node: ASTNode, backtrace: Backtrace, value: Value) -> str:
    check_kind(node, backtrace, value, ValueKind.CONS)
    return value.text(node, backtrace)


def dict_builtin(node: ASTNode, backtrace: Backtrace, args: list[Value]) -> Value:
    """(dict 'k1' v1 'k2' v2 ...)"""
    if len(args) % 2 != 0:
        raise SimplexRuntimeError(
            f"{node.line}|{node.col}: dict expects pairs of keys and values, got {len(args)} parameters",
            backtrace,
        )
    entries = {}
    for key, value in zip(args[::2], args[1::2]):
        entries[_key(node, backtrace, key)] = value
    return Value.dict(entries)


def dict_get(node: ASTNode, backtrace: Backtrace, args: list[Value]) -> Value:
    """(dict.get key dict)"""
    check_arity("dict.get", node, backtrace, args, 2, 2)
    key = _key(node, backtrace, args[0])
    entries = check_kind(node, backtrace, args[1], ValueKind.DICT).payload
    if key not in entries:
        raise SimplexRuntimeError(f"{node.line}|{node.col}: dict has no key '{key}'", backtrace)
    return entries[key]


def dict_set(node: ASTNode, backtrace: Backtrace, args: list[Value]) -> Value:
    """(dict.set key value dict) returns a new dict; the argument is left unchanged."""
    check_arity("dict.set", node, backtrace, args, 3, 3)
    key = _key(node, backtrace, args[0])
    entries = dict(check_kind(node, backtrace, args[2], ValueKind.DICT).payload)
    entries[key] = args[1]
    return Value.dict(entries)


# -------------------------------
# Conversion
# -------------------------------
def string(node: ASTNode, backtrace: Backtrace, args: list[Value]) -> Value:
    check_arity("string", node, backtrace, args, 1, 1)
    return from_text(str(args[0]))


def byte(node: ASTNode, backtrace: Backtrace, args: list[Value]) -> Value:
    check_arity("byte", node, backtrace, args, 1, 1)
    value = check_kind(node, backtrace, args[0], ValueKind.INTEGER, ValueKind.CHAR, ValueKind.BYTE)
    code = ord(value.payload) if value.kind is ValueKind.CHAR else value.payload
    if not 0 <= code <= 255:
        raise SimplexRuntimeError(
            f"{node.line}|{node.col}: byte expects a value between 0 and 255, got {code}",
            backtrace,
        )
    return Value.byte(code)


# -------------------------------
# I/O
# -------------------------------
def make_print(output: TextIO) -> NativeOperation:
    def print_builtin(node: ASTNode, backtrace: Backtrace, args: list[Value]) -> Value:
        for arg in args:
            output.write(str(arg))
        output.flush()
        return NIL
    return print_builtin


def make_read(input: TextIO) -> NativeOperation:
    def read_builtin(node: ASTNode, backtrace: Backtrace, args: list[Value]) -> Value:
        """Blocks for one character; Nil at end of input."""
        check_arity("read", node, backtrace, args, 0, 0)
        ch = input.read(1)
        if not ch:
            return NIL
        return Value.char(ch)
    return read_builtin


# -------------------------------
# Registration
# -------------------------------
def native(name: str, operation: NativeOperation) -> Value:
    return Value.function(Function(name, (), Native(operation)))


NATIVES: dict[str, NativeOperation] = {
    "+": add,
    "-": sub,
    "*": mul,
    "/": div,
    "=": equals,
    "<": lt,
    ">": gt,
    "sequence": sequence,
    "cons": cons,
    "car": car,
    "cdr": cdr,
    "list": list_builtin,
    "dict": dict_builtin,
    "dict.get": dict_get,
    "dict.set": dict_set,
    "string": string,
    "byte": byte,
}


def symbols(input: TextIO | None = None, output: TextIO | None = None) -> dict[str, Value]:
    """The identifier -> Value mapping supplied to a new interpreter."""
    io_natives: dict[str, Callable] = {
        "print": make_print(output if output is not None else sys.stdout),
        "read": make_read(input if input is not None else sys.stdin),
    }
    table = {name: native(name, op) for name, op in {**NATIVES, **io_natives}.items()}
    table["endl"] = from_text("\n")
    table["nil"] = NIL
    return table


def register(env: Environment, input: TextIO | None = None, output: TextIO | None = None) -> None:
    env.update(symbols(input, output))
