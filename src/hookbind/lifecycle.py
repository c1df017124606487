"""Ready-made hook bodies and interceptors for the capabilities in `hookbind.contracts`.

Hooks::

    container.add_setter_hook(ServiceProvider, setup_provider)
    container.add_post_resolution_hook(Validatable, validate_instance)

Interceptors::

    container.add_post_resolution_interceptor(ValidationInterceptor())
    container.add_pre_resolution_interceptor(StubOverrideInterceptor({Gateway: FakeGateway()}))
"""

from __future__ import annotations

import inspect
import logging
from typing import TYPE_CHECKING, Any

from .contracts import Initializable, ServiceProvider, Validatable


if TYPE_CHECKING:
    from collections.abc import Callable, Mapping


logger = logging.getLogger(__name__)


def setup_provider(provider: ServiceProvider) -> None:
    provider.register()


def validate_instance(instance: Validatable) -> None:
    instance.validate()


def initialize_instance(instance: Initializable) -> None:
    instance.init()


def _supports_capability(target: Any, capability: type) -> bool:
    if inspect.isclass(target):
        try:
            return issubclass(target, capability)
        except TypeError:
            return False
    return isinstance(target, capability)


class ValidationInterceptor:
    """Calls `validate()` on resolved instances; a failing validation aborts the resolution."""

    def supports(self, target: Any) -> bool:
        return _supports_capability(target, Validatable)

    def intercept(self, instance: Any) -> None:
        instance.validate()


class InitInterceptor:
    """Calls `init()` on resolved instances."""

    def supports(self, target: Any) -> bool:
        return _supports_capability(target, Initializable)

    def intercept(self, instance: Any) -> None:
        instance.init()


class StubOverrideInterceptor:
    """Substitutes prepared stubs for the given service ids.

    `stubs` maps ids to ready instances; `factories` maps ids to zero-argument
    callables invoked on every resolution. Keys may be ids or the classes
    registered under them.
    """

    def __init__(
        self,
        stubs: Mapping[Any, object] | None = None,
        *,
        factories: Mapping[Any, Callable[[], object]] | None = None,
    ) -> None:
        self._stubs = dict(stubs or {})
        self._factories = dict(factories or {})

    def supports(self, target: Any) -> bool:
        try:
            return target in self._stubs or target in self._factories
        except TypeError:
            return False

    def intercept(self, service_id: Any, parameters: dict[str, Any]) -> object | None:
        if service_id in self._stubs:
            logger.debug("Using stub for %r", service_id)
            return self._stubs[service_id]
        if service_id in self._factories:
            logger.debug("Using stub factory for %r", service_id)
            return self._factories[service_id]()
        return None
