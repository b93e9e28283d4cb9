from __future__ import annotations

from typing import Any


class Callable:
    """
    Adds class-level ``call`` / ``perform``: build a fresh instance and call it.

    Subclasses implement ``__call__``, so an instance can also be invoked
    directly: ``SomeUseCase()(params)``.
    """

    @classmethod
    def call(cls, *args: Any, **kwargs: Any) -> Any:
        return cls()(*args, **kwargs)

    @classmethod
    def perform(cls, *args: Any, **kwargs: Any) -> Any:
        return cls.call(*args, **kwargs)

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        raise NotImplementedError(f"{type(self).__name__} must implement __call__()")
