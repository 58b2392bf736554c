import os
from typing import TypeVar, Callable

T = TypeVar('T')


class Env:
    """Environment-variable defaults for command line flags."""

    def __init__(self):
        raise RuntimeError("Env class should not be instantiated")

    @staticmethod
    def get_int(key: str, default_value: int) -> int:
        return Env.get(key, int, default_value)

    @staticmethod
    def get(key: str, function: Callable[[str], T], default_value: T) -> T:
        env_value = os.getenv(key)
        if env_value is not None:
            try:
                return function(env_value)
            except (ValueError, TypeError):
                return default_value
        return default_value
