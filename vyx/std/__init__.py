import time
from typing import Any, List

from vyx.builtin_function import BuiltinFunction
from vyx.environment import Environment


def populate_standard_environment(env: Environment) -> Environment:
    """Register the native functions every Vyx program can call."""

    def std_clock(args: List[Any]) -> Any:
        return time.time()

    env.values['clock'] = BuiltinFunction('clock', 0, std_clock)
    return env
