from .clock import std_clock
from glox.environment import Environment
from glox.functions import BuiltinFunction


def populate_std_environment(env: Environment) -> Environment:
    """Declare the host-provided built-ins in `env`, normally the root scope."""
    env.declare('clock', BuiltinFunction('clock', 0, std_clock))
    return env
