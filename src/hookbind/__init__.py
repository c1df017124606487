"""Dependency resolution with lifecycle hooks.

This package provides a dependency injection container for Python that maps
ids (classes or string aliases) to types, provider classes or factories, and
builds object graphs on demand by autowiring constructor parameters from
their type hints.

Exports:
- `ServiceContainer`: registration, resolution and the hook/interceptor API.
- `ServiceProvider`, `Validatable`, `Initializable`: capabilities the
  container drives (`hookbind.contracts`).
- Errors: `ContainerError` (alias `ResolutionError`) and its subclasses
  `NotFoundError`, `CircularDependencyError`, `IntrospectionError`,
  `ConstructionError`; `ValidationError` for `validate()` implementations.
- Building blocks: `ResolutionEngine`, `Registry`, `ServiceDescriptor`,
  `TypeIntrospector`, `HookRegistry`, `InterceptorRegistry`.
"""

from ._container import ServiceContainer
from ._descriptor import Registry, ServiceDescriptor
from ._engine import ResolutionEngine, SingletonCache
from ._errors import (
    CircularDependencyError,
    ConstructionError,
    ContainerError,
    IntrospectionError,
    NotFoundError,
    ResolutionError,
    ValidationError,
)
from ._hooks import HookEntry, HookPhase, HookRegistry
from ._interceptors import (
    InterceptorPhase,
    InterceptorRegistry,
    PostResolutionInterceptor,
    PreResolutionInterceptor,
)
from ._introspection import ParameterInfo, TypeIntrospector
from .contracts import Initializable, ServiceProvider, Validatable


__all__ = [
    "CircularDependencyError",
    "ConstructionError",
    "ContainerError",
    "HookEntry",
    "HookPhase",
    "HookRegistry",
    "Initializable",
    "InterceptorPhase",
    "InterceptorRegistry",
    "IntrospectionError",
    "NotFoundError",
    "ParameterInfo",
    "PostResolutionInterceptor",
    "PreResolutionInterceptor",
    "Registry",
    "ResolutionEngine",
    "ResolutionError",
    "ServiceContainer",
    "ServiceDescriptor",
    "ServiceProvider",
    "SingletonCache",
    "TypeIntrospector",
    "Validatable",
    "ValidationError",
]
