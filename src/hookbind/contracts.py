"""Capabilities the container knows how to drive.

Application objects opt in by subclassing `ServiceProvider` or by simply
exposing the methods described by the runtime-checkable protocols.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Protocol, runtime_checkable


class ServiceProvider(ABC):
    """Factory object registered in place of the service it produces.

    The container autowires the provider itself, runs setter hooks on it
    (which calls `register()` by default) and returns whatever `resolve()`
    produces.
    """

    def register(self) -> None:  # noqa: B027
        """One-time setup, invoked before `resolve()`."""

    @abstractmethod
    def resolve(self) -> object: ...


@runtime_checkable
class Validatable(Protocol):
    def validate(self) -> None: ...


@runtime_checkable
class Initializable(Protocol):
    def init(self) -> None: ...
