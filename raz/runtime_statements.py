"""Core interpreter runtime for raz, part 2: Statement executors."""
from __future__ import annotations
from typing import Optional

from .ast_nodes import *
from .environment import Environment
from .values import RazValue, raz_callable, raz_none, is_truthy, quoted_display, to_display_string
from .runtime import Interpreter, ReturnSignal


def _install_statement_executors():
    """Install all statement executor methods onto the Interpreter class."""

    def _exec_print(self, node: PrintStatement, env: Environment) -> Optional[ReturnSignal]:
        value = self.evaluate(node.expression, env)
        text = quoted_display(value) if self.quote_strings else to_display_string(value)
        self.output.append(text)
        print(text)
        return None

    def _exec_var_decl(self, node: VarDeclaration, env: Environment) -> Optional[ReturnSignal]:
        value = self.evaluate(node.initializer, env)
        env.define(node.name, value)
        return None

    def _exec_block(self, node: Block, env: Environment) -> Optional[ReturnSignal]:
        """Execute a block in a new child scope.

        The child is only referenced from this frame, so it is dropped on
        exit whether the block finished, returned or raised.
        """
        return self.execute_block(node.statements, Environment(parent=env))

    # --- Control Flow ---

    def _exec_if(self, node: IfStatement, env: Environment) -> Optional[ReturnSignal]:
        if is_truthy(self.evaluate(node.condition, env)):
            return self.execute(node.then_branch, env)
        if node.else_branch is not None:
            return self.execute(node.else_branch, env)
        return None

    def _exec_while(self, node: WhileStatement, env: Environment) -> Optional[ReturnSignal]:
        while is_truthy(self.evaluate(node.condition, env)):
            outcome = self.execute(node.body, env)
            if outcome is not None:
                return outcome
        return None

    # --- Functions ---

    def _exec_func_decl(self, node: FunctionDecl, env: Environment) -> Optional[ReturnSignal]:
        closure = env
        params = list(node.params)
        body = node.body

        def call(caller_env: Environment, args: list[RazValue]) -> RazValue:
            # Parent is the defining scope, not caller_env: scoping is lexical
            func_env = Environment(parent=closure)
            for param, arg in zip(params, args):
                func_env.define(param, arg)
            outcome = self.execute_block(body, func_env)
            if outcome is not None:
                return outcome.value
            return raz_none()

        env.define(node.name, raz_callable(node.name, len(params), call))
        return None

    def _exec_return(self, node: ReturnStatement, env: Environment) -> Optional[ReturnSignal]:
        value = self.evaluate(node.value, env) if node.value is not None else raz_none()
        return ReturnSignal(value)

    methods = {
        '_exec_print': _exec_print,
        '_exec_var_decl': _exec_var_decl,
        '_exec_block': _exec_block,
        '_exec_if': _exec_if,
        '_exec_while': _exec_while,
        '_exec_func_decl': _exec_func_decl,
        '_exec_return': _exec_return,
    }
    for name, method in methods.items():
        setattr(Interpreter, name, method)


# Auto-install on import
_install_statement_executors()
