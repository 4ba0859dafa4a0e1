from simplex.types.environment import Environment
from simplex.types.value import Value


def test_define_and_get():
    env = Environment()
    env.define("x", Value.integer(1))
    assert env.get("x") == Value.integer(1)
    assert "x" in env


def test_missing_name_gives_none():
    assert Environment().get("nope") is None
    assert "nope" not in Environment()


def test_lookup_walks_outer_frames():
    root = Environment()
    root.define("x", Value.integer(1))
    child = Environment(outer=Environment(outer=root))
    assert child.get("x") == Value.integer(1)
    assert child.find("x") is root


def test_inner_binding_shadows_outer():
    root = Environment()
    root.define("x", Value.integer(1))
    child = root.extend({"x": Value.integer(2)})
    assert child.get("x") == Value.integer(2)
    assert root.get("x") == Value.integer(1)


def test_bindings_in_a_child_are_invisible_to_the_parent():
    root = Environment()
    child = root.extend({})
    child.define("y", Value.integer(3))
    assert root.get("y") is None


def test_siblings_are_isolated():
    root = Environment()
    a = root.extend({"x": Value.integer(1)})
    b = root.extend({"x": Value.integer(2)})
    assert a.get("x") == Value.integer(1)
    assert b.get("x") == Value.integer(2)


def test_parent_changes_are_visible_to_existing_children():
    root = Environment()
    child = root.extend({})
    root.define("late", Value.integer(9))
    assert child.get("late") == Value.integer(9)


def test_update_and_display():
    env = Environment()
    env.update({"a": Value.integer(1), "b": Value.integer(2)})
    assert str(env) == "{a: 1, b: 2}"
    assert str(env.extend({})) == "{} -> ..."
    assert repr(env.extend({"c": Value.integer(3)})) == "<Environment chain: {c} -> {a, b}>"
