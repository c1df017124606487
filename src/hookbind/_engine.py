from __future__ import annotations

import inspect
import logging
import threading
from typing import TYPE_CHECKING, Any

from ._errors import (
    CircularDependencyError,
    ConstructionError,
    ContainerError,
    IntrospectionError,
    NotFoundError,
    ValidationError,
    describe,
)
from ._hooks import HookPhase
from ._interceptors import InterceptorPhase


if TYPE_CHECKING:
    from ._descriptor import Registry, ServiceDescriptor
    from ._hooks import HookRegistry
    from ._interceptors import InterceptorRegistry
    from ._introspection import ParameterInfo, TypeIntrospector


logger = logging.getLogger(__name__)

_MISSING = object()


class SingletonCache:
    """Resolved singleton instances keyed by id."""

    def __init__(self) -> None:
        self._instances: dict[Any, object] = {}

    def __contains__(self, service_id: Any) -> bool:
        return service_id in self._instances

    def get(self, service_id: Any, default: Any = None) -> Any:
        return self._instances.get(service_id, default)

    def store(self, service_id: Any, instance: object) -> None:
        self._instances[service_id] = instance

    def discard(self, service_id: Any) -> None:
        self._instances.pop(service_id, None)


class ResolutionEngine:
    """Builds object graphs from registrations.

    Resolution order for an id:
    1. cached singleton
    2. first pre-resolution interceptor that supports it (may short-circuit)
    3. registration (provider, factory or implementation type), else the id
       itself when it is a constructible class
    4. setter hooks on what was constructed
    5. first post-resolution interceptor, then every post-resolution hook
    6. singleton caching.
    """

    def __init__(
        self,
        registry: Registry,
        introspector: TypeIntrospector,
        hooks: HookRegistry,
        interceptors: InterceptorRegistry,
        singletons: SingletonCache | None = None,
        *,
        strict: bool = False,
    ) -> None:
        self._registry = registry
        self._introspector = introspector
        self._hooks = hooks
        self._interceptors = interceptors
        self._singletons = singletons if singletons is not None else SingletonCache()
        self._strict = strict
        self._local = threading.local()

    @property
    def singletons(self) -> SingletonCache:
        return self._singletons

    def resolve(self, service_id: Any, **overrides: Any) -> Any:
        """Resolve `service_id`; `overrides` supply constructor arguments by name.

        Calls made while a resolution is in progress on the same thread (from a
        factory or provider) share its stack, so cycles through them are caught.
        """
        stack = getattr(self._local, "stack", None)
        if stack is not None:
            return self._resolve(service_id, stack, overrides)

        stack = self._local.stack = []
        try:
            return self._resolve(service_id, stack, overrides)
        finally:
            del self._local.stack

    def is_resolvable(self, service_id: Any) -> bool:
        return (
            self._registry.has(service_id)
            or service_id in self._singletons
            or self._can_autowire(service_id)
            or self._interceptors.first_matching(InterceptorPhase.PRE, service_id) is not None
        )

    def _resolve(self, service_id: Any, stack: list[Any], overrides: dict[str, Any]) -> Any:
        cached = self._singletons.get(service_id, _MISSING)
        if cached is not _MISSING:
            return cached

        if service_id in stack:
            raise CircularDependencyError(service_id, [*stack, service_id])

        stack.append(service_id)
        try:
            return self._build(service_id, stack, overrides)
        except (ContainerError, ValidationError):
            raise
        except Exception as e:
            raise ConstructionError(service_id, list(stack), e) from e
        finally:
            stack.pop()

    def _build(self, service_id: Any, stack: list[Any], overrides: dict[str, Any]) -> Any:
        descriptor = self._registry.get_descriptor(service_id)
        parameters = dict(overrides)

        instance = self._intercept_pre(service_id, descriptor, parameters)
        if instance is None:
            instance = self._construct(service_id, descriptor, stack, parameters)

        instance = self._post_resolve(instance, descriptor)

        if descriptor is not None and descriptor.singleton:
            self._singletons.store(service_id, instance)

        return instance

    def _intercept_pre(
        self, service_id: Any, descriptor: ServiceDescriptor | None, parameters: dict[str, Any]
    ) -> object | None:
        targets = [service_id]
        if descriptor is not None and descriptor.implementation_type not in (None, service_id):
            targets.append(descriptor.implementation_type)

        match = self._interceptors.first_match(InterceptorPhase.PRE, *targets)
        if match is None:
            return None

        interceptor, target = match
        instance = interceptor.intercept(target, parameters)
        if instance is not None:
            logger.debug("%s short-circuited by %s", describe(service_id), type(interceptor).__name__)
        return instance

    def _construct(
        self,
        service_id: Any,
        descriptor: ServiceDescriptor | None,
        stack: list[Any],
        parameters: dict[str, Any],
    ) -> object:
        if descriptor is None:
            if not self._can_autowire(service_id):
                requested_by = stack[-2] if len(stack) > 1 else None
                raise NotFoundError(service_id, requested_by)
            target: Any = service_id
        elif descriptor.provider_type is not None:
            provider = self._autowire(descriptor.provider_type, stack, parameters)
            provider = self._run_setter_hooks(provider, descriptor)
            return provider.resolve()
        elif descriptor.factory is not None:
            target = descriptor.factory
        else:
            target = descriptor.implementation_type

        instance = self._autowire(target, stack, parameters)
        return self._run_setter_hooks(instance, descriptor)

    def _autowire(self, target: Any, stack: list[Any], overrides: dict[str, Any]) -> Any:
        params = self._introspector.parameters_of(target)

        args: list[Any] = []
        kwargs: dict[str, Any] = {}
        for param in params:
            value = self._argument_for(target, param, stack, overrides)
            if param.positional_only:
                args.append(value)
            else:
                kwargs[param.name] = value

        # overrides that name no declared parameter go to **kwargs, if any
        known = {param.name for param in params}
        kwargs.update({name: value for name, value in overrides.items() if name not in known})

        return target(*args, **kwargs)

    def _argument_for(self, owner: Any, param: ParameterInfo, stack: list[Any], overrides: dict[str, Any]) -> Any:
        """Resolving param.

        Resolution precedence:
        1. explicit override
        2. type-based (registered, interceptable or constructible)
        3. name-based registration
        4. default
        5. None for nullable parameters
        6. error.
        """
        if param.name in overrides:
            return overrides[param.name]

        ref = param.type_ref
        if ref is not None and self._is_satisfiable(ref):
            return self._resolve(ref, stack, {})

        if self._registry.has(param.name):
            return self._resolve(param.name, stack, {})

        if param.has_default:
            return param.default

        if param.is_nullable:
            return None

        if ref is None:
            ann = param.annotation
            ann_repr = getattr(ann, "__name__", repr(ann)) if ann is not inspect.Parameter.empty else "no-annotation"
            reason = (
                f"cannot satisfy constructor parameter '{param.name}'. "
                f"No override/registration/default found (annotation: {ann_repr})."
            )
            raise IntrospectionError(owner, reason)

        # raises NotFoundError naming the requester
        return self._resolve(ref, stack, {})

    def _is_satisfiable(self, ref: type) -> bool:
        return (
            self._registry.has(ref)
            or ref in self._singletons
            or self._can_autowire(ref)
            or self._interceptors.first_matching(InterceptorPhase.PRE, ref) is not None
        )

    def _can_autowire(self, service_id: Any) -> bool:
        return not self._strict and self._introspector.is_constructible(service_id)

    def _run_setter_hooks(self, instance: Any, descriptor: ServiceDescriptor | None) -> Any:
        for hook in self._hooks.hooks_for(instance, HookPhase.SETTER):
            result = hook(instance, descriptor)
            if result is not None:
                instance = result
        return instance

    def _post_resolve(self, instance: Any, descriptor: ServiceDescriptor | None) -> Any:
        interceptor = self._interceptors.first_matching(InterceptorPhase.POST, instance)
        if interceptor is not None:
            result = interceptor.intercept(instance)
            if result is not None:
                instance = result

        for hook in self._hooks.hooks_for(instance, HookPhase.POST_RESOLUTION):
            result = hook(instance, descriptor)
            if result is not None:
                instance = result

        return instance
