import inspect
from abc import ABC, abstractmethod
from typing import Any, Optional, Protocol

import pytest

from hookbind import IntrospectionError, ServiceContainer, TypeIntrospector


class Dep: ...


class Other: ...


class Full:
    def __init__(
        self,
        dep: Dep,
        maybe: Optional[Dep],
        either: Dep | Other,
        anything: Any,
        plain,
        /,
        named: str = "x",
        *args,
        flag: bool = False,
        **kwargs,
    ):
        pass


class NoInit: ...


class Abstract(ABC):
    @abstractmethod
    def run(self) -> None: ...


class SupportsRun(Protocol):
    def run(self) -> None: ...


class Broken:
    def __init__(self, dep: "DoesNotExist"):  # noqa: F821
        self.dep = dep


def test_parameters_of_describes_signature_in_order():
    params = TypeIntrospector().parameters_of(Full)

    assert [p.name for p in params] == ["dep", "maybe", "either", "anything", "plain", "named", "flag"]

    dep, maybe, either, anything, plain, named, flag = params

    assert dep.type_ref is Dep
    assert not dep.is_nullable
    assert dep.positional_only

    assert maybe.type_ref is Dep
    assert maybe.is_nullable

    assert either.type_ref is None
    assert anything.type_ref is None
    assert plain.type_ref is None
    assert plain.annotation is inspect.Parameter.empty

    assert named.has_default
    assert named.default == "x"
    assert named.type_ref is str
    assert not named.positional_only

    assert flag.kind is inspect.Parameter.KEYWORD_ONLY
    assert flag.default is False


def test_none_default_marks_parameter_nullable():
    class WithNone:
        def __init__(self, dep: Dep = None):
            self.dep = dep

    (dep,) = TypeIntrospector().parameters_of(WithNone)
    assert dep.is_nullable
    assert dep.has_default


def test_class_without_init_has_no_parameters():
    assert TypeIntrospector().parameters_of(NoInit) == ()


def test_parameters_of_callable():
    def factory(dep: Dep, count: int = 1) -> Other:
        return Other()

    params = TypeIntrospector().parameters_of(factory)
    assert [(p.name, p.type_ref) for p in params] == [("dep", Dep), ("count", int)]


def test_parameters_are_memoised():
    introspector = TypeIntrospector()
    assert introspector.parameters_of(Full) is introspector.parameters_of(Full)


@pytest.mark.parametrize("target", [int, str, dict, object])
def test_builtin_types_raise_introspection_error(target):
    with pytest.raises(IntrospectionError):
        TypeIntrospector().parameters_of(target)


def test_non_callable_raises_introspection_error():
    with pytest.raises(IntrospectionError):
        TypeIntrospector().parameters_of(42)


def test_unresolvable_forward_reference_is_treated_as_missing_annotation(caplog):
    with caplog.at_level("WARNING", logger="hookbind._introspection"):
        (dep,) = TypeIntrospector().parameters_of(Broken)

    assert dep.type_ref is None
    assert dep.annotation is inspect.Parameter.empty
    assert "DoesNotExist" in caplog.text


def test_is_constructible():
    introspector = TypeIntrospector()

    assert introspector.is_constructible(Dep)
    assert introspector.is_constructible(Full)
    assert not introspector.is_constructible(int)
    assert not introspector.is_constructible(Abstract)
    assert not introspector.is_constructible(SupportsRun)
    assert not introspector.is_constructible("Dep")
    assert not introspector.is_constructible(lambda: Dep())


def test_unresolvable_forward_reference_fails_resolution_with_introspection_error():
    with pytest.raises(IntrospectionError) as ctx:
        ServiceContainer().resolve(Broken)
    assert ctx.value.target is Broken
