from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Protocol, runtime_checkable


logger = logging.getLogger(__name__)


@runtime_checkable
class PreResolutionInterceptor(Protocol):
    """Replaces construction for the ids it supports.

    `intercept` receives the target `supports` accepted (the id, or the
    implementation type registered under it) and the mutable keyword
    overrides of the current resolution. Returning an object short-circuits
    construction; returning None lets the container build the service with
    the (possibly edited) overrides.
    """

    def supports(self, target: Any) -> bool: ...

    def intercept(self, service_id: Any, parameters: dict[str, Any]) -> object | None: ...


@runtime_checkable
class PostResolutionInterceptor(Protocol):
    """Sees every freshly built instance it supports; may return a replacement."""

    def supports(self, target: Any) -> bool: ...

    def intercept(self, instance: Any) -> object | None: ...


class InterceptorPhase(Enum):
    PRE = "pre"
    POST = "post"


class InterceptorRegistry:
    """Ordered interceptors per phase. Lookup returns the first match only."""

    def __init__(self) -> None:
        self._pre: list[PreResolutionInterceptor] = []
        self._post: list[PostResolutionInterceptor] = []

    def add_pre_interceptor(self, interceptor: PreResolutionInterceptor) -> None:
        if not isinstance(interceptor, PreResolutionInterceptor):
            msg = f"{type(interceptor).__name__} must implement supports() and intercept(service_id, parameters)"
            raise TypeError(msg)
        self._pre.append(interceptor)
        logger.debug("Added pre-resolution interceptor %s", type(interceptor).__name__)

    def add_post_interceptor(self, interceptor: PostResolutionInterceptor) -> None:
        if not isinstance(interceptor, PostResolutionInterceptor):
            msg = f"{type(interceptor).__name__} must implement supports() and intercept(instance)"
            raise TypeError(msg)
        self._post.append(interceptor)
        logger.debug("Added post-resolution interceptor %s", type(interceptor).__name__)

    def all(self, phase: InterceptorPhase) -> tuple[Any, ...]:
        return tuple(self._pre if phase is InterceptorPhase.PRE else self._post)

    def first_matching(self, phase: InterceptorPhase, *targets: Any) -> Any | None:
        """First interceptor (in registration order) supporting any of `targets`."""
        match = self.first_match(phase, *targets)
        return match[0] if match is not None else None

    def first_match(self, phase: InterceptorPhase, *targets: Any) -> tuple[Any, Any] | None:
        """Like `first_matching`, but also returns the target the interceptor accepted."""
        for interceptor in self.all(phase):
            for target in targets:
                if interceptor.supports(target):
                    return interceptor, target
        return None
