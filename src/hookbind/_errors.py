from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from collections.abc import Sequence


def describe(token: object) -> str:
    """Human readable form of a service id (class or alias)."""
    if isinstance(token, type):
        return token.__qualname__
    return repr(token)


def _format_chain(chain: Sequence[object]) -> str:
    return " -> ".join(describe(item) for item in chain)


class ContainerError(RuntimeError):
    """Base class for every error raised by the container itself."""


# Shorter name for the base error, re-exported from the package root.
ResolutionError = ContainerError


class NotFoundError(ContainerError):
    def __init__(self, service_id: object, requested_by: object | None = None) -> None:
        self.id = service_id
        self.requested_by = requested_by
        requester = describe(requested_by) if requested_by is not None else "unknown"
        msg = f"Service {describe(service_id)} not found (requested by {requester})."
        super().__init__(msg)


class CircularDependencyError(ContainerError):
    def __init__(self, service_id: object, chain: Sequence[object]) -> None:
        self.id = service_id
        self.chain = tuple(chain)
        msg = f"Circular dependency detected for service {describe(service_id)}. Chain: {_format_chain(self.chain)}"
        super().__init__(msg)


class IntrospectionError(ContainerError):
    def __init__(self, target: object, reason: str) -> None:
        self.target = target
        self.reason = reason
        msg = f"Cannot introspect {describe(target)}: {reason}"
        super().__init__(msg)


class ConstructionError(ContainerError):
    """Wraps a failure raised by user code while a service was being built.

    The original exception is available as ``__cause__``.
    """

    def __init__(self, service_id: object, chain: Sequence[object], cause: BaseException) -> None:
        self.id = service_id
        self.chain = tuple(chain)
        msg = f"Failed to build {describe(service_id)} ({_format_chain(self.chain)}): {type(cause).__name__}: {cause}"
        super().__init__(msg)


class ValidationError(ValueError):
    """Raised by ``validate()`` implementations; never wrapped by the container."""
