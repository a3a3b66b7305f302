"""Native bindings installed into the global frame of every interpreter."""

import time
from typing import Any, List

from loxi.builtin_function import BuiltinFunction
from loxi.environment import Environment


def native_clock(args: List[Any]) -> Any:
    # seconds since the Unix epoch
    return time.time()


def populate_global_environment(env: Environment) -> Environment:
    env.define('clock', BuiltinFunction('clock', 0, native_clock))
    return env
