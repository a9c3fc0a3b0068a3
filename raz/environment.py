"""Environment system for raz."""
from __future__ import annotations
from typing import Optional

from .values import RazValue


class Environment:
    """Scoped variable storage.

    Each scope owns its bindings and links to the scope it was created in.
    The parent link never changes after construction; only a scope's own
    mapping is ever written.
    """

    def __init__(self, parent: Optional[Environment] = None):
        self.parent = parent
        self.variables: dict[str, RazValue] = {}

    def __repr__(self):
        return f"Environment(depth={self.depth()}, names={sorted(self.variables)})"

    def define(self, name: str, value: RazValue):
        """Bind in this scope only. Redefinition silently replaces."""
        self.variables[name] = value

    def define_at_root(self, name: str, value: RazValue):
        self.root().define(name, value)

    def get(self, name: str) -> Optional[RazValue]:
        if name in self.variables:
            return self.variables[name]
        if self.parent:
            return self.parent.get(name)
        return None

    def assign(self, name: str, value: RazValue) -> bool:
        """Overwrite the nearest existing binding. Never creates one."""
        if name in self.variables:
            self.variables[name] = value
            return True
        if self.parent:
            return self.parent.assign(name, value)
        return False

    def has(self, name: str) -> bool:
        if name in self.variables:
            return True
        if self.parent:
            return self.parent.has(name)
        return False

    def has_local(self, name: str) -> bool:
        return name in self.variables

    def root(self) -> Environment:
        env = self
        while env.parent is not None:
            env = env.parent
        return env

    def depth(self) -> int:
        """Number of enclosing scopes; the root is at depth 0."""
        depth = 0
        env = self.parent
        while env is not None:
            depth += 1
            env = env.parent
        return depth

    def all_variables(self) -> dict[str, RazValue]:
        """Every visible binding, inner scopes shadowing outer ones."""
        result = {}
        if self.parent:
            result.update(self.parent.all_variables())
        result.update(self.variables)
        return result
