"""Native callables bound in the root environment.

Each native is a plain function of signature
(environment, args: list[RazValue]) -> RazValue, the same calling
convention user-defined functions use.
"""
from __future__ import annotations

import time as _time
from typing import TYPE_CHECKING

from .values import RazValue, raz_callable, raz_number

if TYPE_CHECKING:
    from .environment import Environment


def _clock(env: Environment, args: list[RazValue]) -> RazValue:
    """Seconds since the Unix epoch, with sub-second precision."""
    return raz_number(_time.time())


# name -> (arity, implementation)
NATIVES = {
    "clock": (0, _clock),
}


def install_natives(env: Environment):
    """Bind every native in the outermost scope of env."""
    for name, (arity, func) in NATIVES.items():
        env.define_at_root(name, raz_callable(name, arity, func))
