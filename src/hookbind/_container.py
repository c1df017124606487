from __future__ import annotations

import inspect
import logging
import threading
from typing import TYPE_CHECKING, Any, TypeVar, overload

from ._descriptor import Registry, ServiceDescriptor
from ._engine import ResolutionEngine
from ._errors import describe
from ._hooks import HookRegistry
from ._interceptors import InterceptorRegistry
from ._introspection import TypeIntrospector
from ._tags import TagRegistry
from .contracts import ServiceProvider
from .lifecycle import setup_provider


if TYPE_CHECKING:
    from collections.abc import Callable

    from ._interceptors import PostResolutionInterceptor, PreResolutionInterceptor

    Token = type[Any] | str


T = TypeVar("T")

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Dependency container with lifecycle hooks and interceptors.

    - register types, providers or factories under a class or a string alias
    - resolve with constructor injection (autowiring from type hints)
    - singleton caching
    - pre-resolution interceptors, setter hooks, post-resolution hooks/interceptors.

    The container registers itself under `ServiceContainer`, so services can
    take it as a constructor dependency. With `provider_setup` (the default)
    every `ServiceProvider` gets its `register()` called through a setter hook
    before it produces its service. In `strict` mode only registered ids are
    resolvable.
    """

    def __init__(self, *, strict: bool = False, provider_setup: bool = True) -> None:
        self._registry = Registry()
        self._introspector = TypeIntrospector()
        self._hooks = HookRegistry()
        self._interceptors = InterceptorRegistry()
        self._tags = TagRegistry()
        self._engine = ResolutionEngine(
            self._registry,
            self._introspector,
            self._hooks,
            self._interceptors,
            strict=strict,
        )
        self._lock = threading.RLock()

        self.register_instance(ServiceContainer, self)
        if provider_setup:
            self.add_setter_hook(ServiceProvider, setup_provider)

    def register(self, service_id: Token, target: object = None, singleton: bool = False) -> None:
        """Register a class, provider class or factory callable for an id.

        Example:
          container.register(Mailer, SmtpMailer)
          container.register("mailer", SmtpMailer, singleton=True)
          container.register("clock", lambda: FixedClock(0))
          container.register(Gateway)  # self-registration

        """
        if target is None:
            if not inspect.isclass(service_id):
                msg = f"A target is required when registering the alias {service_id!r}."
                raise ValueError(msg)
            target = service_id

        with self._lock:
            descriptor = self._registry.register(service_id, target, singleton=singleton)
            # a replaced registration must not keep serving the old singleton
            self._engine.singletons.discard(service_id)

        logger.debug("Registered %s (singleton=%s)", describe(service_id), descriptor.singleton)

    def register_singleton(self, service_id: Token, target: object = None) -> None:
        self.register(service_id, target, singleton=True)

    def register_instance(self, service_id: Token, instance: object, *, replace: bool = False) -> None:
        """Register a pre-built instance (always singleton)."""
        with self._lock:
            if not replace and self._registry.has(service_id):
                msg = f"Token {describe(service_id)} is already registered. Pass replace=True to overwrite."
                raise KeyError(msg)
            self._registry.register(service_id, type(instance), singleton=True)
            self._engine.singletons.store(service_id, instance)

    def has(self, service_id: Token) -> bool:
        return self._registry.has(service_id)

    def get_descriptor(self, service_id: Token) -> ServiceDescriptor | None:
        return self._registry.get_descriptor(service_id)

    def descriptors(self) -> dict[Any, ServiceDescriptor]:
        return self._registry.descriptors()

    def is_resolvable(self, service_id: Token) -> bool:
        """Whether `resolve` has a way to build `service_id` (its dependencies are not checked)."""
        return self._engine.is_resolvable(service_id)

    @overload
    def resolve(self, service_id: type[T], **overrides: Any) -> T: ...

    @overload
    def resolve(self, service_id: str, **overrides: Any) -> Any: ...

    def resolve(self, service_id: Token, **overrides: Any) -> Any:
        """Resolve the id to an instance.

        - If a registration exists: use it (provider/factory/impl).
        - If no registration and the id is a concrete class: autowire it from its type hints.
        `overrides` lets you explicitly supply constructor args of the requested service.
        """
        with self._lock:
            return self._engine.resolve(service_id, **overrides)

    def add_pre_resolution_interceptor(
        self, interceptor: PreResolutionInterceptor | type[PreResolutionInterceptor]
    ) -> None:
        """Add an interceptor instance, or an interceptor class resolved through this container."""
        with self._lock:
            self._interceptors.add_pre_interceptor(self._interceptor_instance(interceptor))

    def add_post_resolution_interceptor(
        self, interceptor: PostResolutionInterceptor | type[PostResolutionInterceptor]
    ) -> None:
        with self._lock:
            self._interceptors.add_post_interceptor(self._interceptor_instance(interceptor))

    def add_setter_hook(self, target_type: type, callback: Callable[..., object]) -> None:
        with self._lock:
            self._hooks.add_setter_hook(target_type, callback)

    def add_post_resolution_hook(self, target_type: type, callback: Callable[..., object]) -> None:
        with self._lock:
            self._hooks.add_post_resolution_hook(target_type, callback)

    def extend(self, service_id: Token, decorator: Callable[[Any], object]) -> None:
        """Decorate the resolved service and bind the result as a singleton under the same id."""
        with self._lock:
            decorated = decorator(self.resolve(service_id))
            self.register_instance(service_id, decorated, replace=True)

    def tag(self, service_id: Token, *tags: str) -> None:
        with self._lock:
            self._tags.tag(service_id, tags)

    def tags(self) -> dict[str, list[Any]]:
        return self._tags.all()

    def tagged(self, tag: str) -> list[Any]:
        """Resolve every id carrying `tag`, in tagging order."""
        return [self.resolve(service_id) for service_id in self._tags.ids_for(tag)]

    def _interceptor_instance(self, interceptor: Any) -> Any:
        if inspect.isclass(interceptor):
            return self.resolve(interceptor)
        return interceptor
