"""Tests for the raz scope chain."""
import pytest
from raz.environment import Environment
from raz.values import raz_number, raz_string


class TestDefine:
    def test_define_and_get(self):
        env = Environment()
        env.define("x", raz_number(42))
        assert env.get("x").value == 42

    def test_redefine_replaces(self):
        env = Environment()
        env.define("x", raz_number(1))
        env.define("x", raz_string("two"))
        assert env.get("x").value == "two"

    def test_define_only_touches_current_scope(self):
        parent = Environment()
        child = Environment(parent=parent)
        child.define("x", raz_number(1))
        assert parent.get("x") is None
        assert child.has_local("x")

    def test_define_at_root(self):
        root = Environment()
        child = Environment(parent=Environment(parent=root))
        child.define_at_root("clock", raz_number(0))
        assert root.has_local("clock")
        assert not child.has_local("clock")


class TestLookup:
    def test_missing_is_none(self):
        assert Environment().get("nope") is None

    def test_parent_lookup(self):
        parent = Environment()
        parent.define("x", raz_number(10))
        child = Environment(parent=parent)
        assert child.get("x").value == 10

    def test_shadowing(self):
        parent = Environment()
        parent.define("x", raz_number(10))
        child = Environment(parent=parent)
        child.define("x", raz_number(20))
        assert child.get("x").value == 20
        assert parent.get("x").value == 10

    def test_has(self):
        parent = Environment()
        parent.define("x", raz_number(1))
        child = Environment(parent=parent)
        assert child.has("x")
        assert not child.has_local("x")
        assert not child.has("y")


class TestAssign:
    def test_assign_local(self):
        env = Environment()
        env.define("x", raz_number(1))
        assert env.assign("x", raz_number(2)) is True
        assert env.get("x").value == 2

    def test_assign_unknown_fails(self):
        env = Environment()
        assert env.assign("x", raz_number(1)) is False
        assert not env.has("x")

    def test_assign_mutates_ancestor(self):
        grandparent = Environment()
        grandparent.define("x", raz_number(1))
        child = Environment(parent=Environment(parent=grandparent))
        assert child.assign("x", raz_number(5)) is True
        assert grandparent.get("x").value == 5
        assert not child.has_local("x")

    def test_assign_hits_nearest_binding(self):
        outer = Environment()
        outer.define("x", raz_number(1))
        inner = Environment(parent=outer)
        inner.define("x", raz_number(2))
        inner.assign("x", raz_number(3))
        assert inner.get("x").value == 3
        assert outer.get("x").value == 1


class TestStructure:
    def test_depth(self):
        root = Environment()
        assert root.depth() == 0
        assert Environment(parent=Environment(parent=root)).depth() == 2

    def test_root(self):
        root = Environment()
        child = Environment(parent=Environment(parent=root))
        assert child.root() is root
        assert root.root() is root

    def test_all_variables(self):
        parent = Environment()
        parent.define("x", raz_number(1))
        parent.define("y", raz_number(2))
        child = Environment(parent=parent)
        child.define("x", raz_number(3))
        visible = child.all_variables()
        assert visible["x"].value == 3
        assert visible["y"].value == 2

    def test_repr(self):
        env = Environment()
        env.define("b", raz_number(1))
        env.define("a", raz_number(1))
        assert repr(env) == "Environment(depth=0, names=['a', 'b'])"
