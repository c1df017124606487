from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any


if TYPE_CHECKING:
    from collections.abc import Callable

    from ._descriptor import ServiceDescriptor

    HookCallback = Callable[..., object]


logger = logging.getLogger(__name__)


class HookPhase(Enum):
    SETTER = "setter"
    POST_RESOLUTION = "post_resolution"


@dataclass(frozen=True)
class HookEntry:
    target_type: type
    callback: HookCallback
    accepts_descriptor: bool

    def applies_to(self, target: object) -> bool:
        if inspect.isclass(target):
            try:
                return issubclass(target, self.target_type)
            except TypeError:
                # non-method members on a runtime protocol only support isinstance
                return False
        return isinstance(target, self.target_type)

    def __call__(self, instance: object, descriptor: ServiceDescriptor | None = None) -> object:
        if self.accepts_descriptor:
            return self.callback(instance, descriptor)
        return self.callback(instance)


class HookRegistry:
    """Per-phase ordered hooks, matched against an instance's type or its supertypes."""

    def __init__(self) -> None:
        self._hooks: dict[HookPhase, list[HookEntry]] = {phase: [] for phase in HookPhase}

    def add_setter_hook(self, target_type: type, callback: HookCallback) -> None:
        self._add(HookPhase.SETTER, target_type, callback)

    def add_post_resolution_hook(self, target_type: type, callback: HookCallback) -> None:
        self._add(HookPhase.POST_RESOLUTION, target_type, callback)

    def hooks_for(self, target: object, phase: HookPhase) -> tuple[HookEntry, ...]:
        return tuple(entry for entry in self._hooks[phase] if entry.applies_to(target))

    def _add(self, phase: HookPhase, target_type: type, callback: HookCallback) -> None:
        if not inspect.isclass(target_type):
            msg = f"Hook target must be a class, got {target_type!r}"
            raise TypeError(msg)
        if not callable(callback):
            msg = f"Hook callback must be callable, got {callback!r}"
            raise TypeError(msg)

        entry = HookEntry(target_type=target_type, callback=callback, accepts_descriptor=_accepts_descriptor(callback))
        self._hooks[phase].append(entry)
        logger.debug("Added %s hook for %s", phase.value, target_type.__qualname__)


def _accepts_descriptor(callback: Any) -> bool:
    """Whether `callback` can be called with (instance, descriptor)."""
    try:
        sig = inspect.signature(callback)
    except (TypeError, ValueError):
        return False

    positional = 0
    for p in sig.parameters.values():
        if p.kind is p.VAR_POSITIONAL:
            return True
        if p.kind in (p.POSITIONAL_ONLY, p.POSITIONAL_OR_KEYWORD):
            positional += 1

    return positional >= 2
