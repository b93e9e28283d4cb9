from __future__ import annotations

from typing import Any, Callable, Dict, Sequence

from domain.exceptions import StepResolutionError
from domain.steps.declaration import InlineCallable, NamedMethod, StepAction


def public_operations(capability: object) -> Dict[str, Callable[..., Any]]:
    ops: Dict[str, Callable[..., Any]] = {}
    for name in dir(capability):
        if name.startswith("_"):
            continue
        attr = getattr(capability, name)
        if callable(attr):
            ops[name] = attr
    return ops


class ActionResolver:
    """
    Turns a step action into a zero-argument callable bound to one use case.

    Named steps look on the use case instance first so subclass overrides
    apply, then in the capability table. Capabilities declared later shadow
    earlier ones.
    """

    def __init__(self, capabilities: Sequence[object]):
        self._capabilities = tuple(capabilities)
        self._table: Dict[str, Callable[..., Any]] = {}
        for capability in self._capabilities:
            self._table.update(public_operations(capability))

    @property
    def capabilities(self) -> Sequence[object]:
        return self._capabilities

    def provides(self, name: str) -> bool:
        return name in self._table

    def resolve(self, action: StepAction, subject: Any) -> Callable[[], Any]:
        if isinstance(action, InlineCallable):
            return lambda: action.fn(subject)
        if isinstance(action, NamedMethod):
            return self._resolve_named(action.method_name, subject)
        raise StepResolutionError(f"Unsupported step action: {action!r}")

    def _resolve_named(self, name: str, subject: Any) -> Callable[[], Any]:
        own = getattr(subject, name, None)
        if own is not None:
            if not callable(own):
                raise StepResolutionError(
                    f"Step '{name}' is not callable on {type(subject).__name__}"
                )
            return own

        delegate = self._table.get(name)
        if delegate is not None:
            return lambda: delegate(subject)

        raise StepResolutionError(f"No method found for step '{name}' on {type(subject).__name__}")
