from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from ._errors import describe
from .contracts import ServiceProvider


if TYPE_CHECKING:
    from collections.abc import Callable


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ServiceDescriptor:
    id: Any
    implementation_type: type | None
    factory: Callable[..., object] | None
    singleton: bool = False

    @property
    def provider_type(self) -> type[ServiceProvider] | None:
        """The provider class when the factory is a `ServiceProvider`, else None."""
        if inspect.isclass(self.factory) and issubclass(self.factory, ServiceProvider):
            return self.factory
        return None

    @classmethod
    def create(cls, service_id: Any, target: object, *, singleton: bool = False) -> ServiceDescriptor:
        """Classify `target` and build the descriptor for `service_id`.

        - `ServiceProvider` subclass: stored as factory
        - any other class: implementation type, autowired on resolution
        - any other callable: factory, its parameters autowired on resolution
        """
        if inspect.isclass(target):
            if issubclass(target, ServiceProvider):
                return cls(id=service_id, implementation_type=None, factory=target, singleton=singleton)
            return cls(id=service_id, implementation_type=target, factory=None, singleton=singleton)

        if callable(target):
            return cls(id=service_id, implementation_type=None, factory=target, singleton=singleton)

        msg = f"Cannot register {describe(service_id)}: target must be a class or a callable, got {target!r}"
        raise TypeError(msg)


class Registry:
    """Holds at most one descriptor per id. Last registration wins."""

    def __init__(self) -> None:
        self._descriptors: dict[Any, ServiceDescriptor] = {}

    def register(self, service_id: Any, target: object, *, singleton: bool = False) -> ServiceDescriptor:
        descriptor = ServiceDescriptor.create(service_id, target, singleton=singleton)
        if service_id in self._descriptors:
            logger.debug("Replacing registration for %s", describe(service_id))
        self._descriptors[service_id] = descriptor
        return descriptor

    def has(self, service_id: Any) -> bool:
        return service_id in self._descriptors

    def get_descriptor(self, service_id: Any) -> ServiceDescriptor | None:
        return self._descriptors.get(service_id)

    def descriptors(self) -> dict[Any, ServiceDescriptor]:
        return dict(self._descriptors)
