from __future__ import annotations

import inspect
import logging
import types
import typing
from dataclasses import dataclass
from typing import Any, Protocol, Union, cast, get_args, get_origin, get_type_hints

from ._errors import IntrospectionError


logger = logging.getLogger(__name__)

_NONE_TYPE = type(None)


@dataclass(frozen=True)
class ParameterInfo:
    """One constructor (or factory) parameter as the engine needs to satisfy it.

    `type_ref` is the single class the parameter asks for, with `Optional`
    unwrapped, or None when the annotation does not name exactly one class.
    """

    name: str
    kind: Any
    annotation: Any
    type_ref: type | None
    has_default: bool
    default: Any
    is_nullable: bool

    @property
    def positional_only(self) -> bool:
        return self.kind is inspect.Parameter.POSITIONAL_ONLY


class TypeIntrospector:
    """Reads constructor signatures without invoking anything. Results are memoised."""

    def __init__(self) -> None:
        self._cache: dict[Any, tuple[ParameterInfo, ...]] = {}

    def parameters_of(self, target: Any) -> tuple[ParameterInfo, ...]:
        try:
            return self._cache[target]
        except KeyError:
            pass
        except TypeError:
            # unhashable callable, nothing to memoise against
            return self._inspect(target)

        params = self._inspect(target)
        self._cache[target] = params
        return params

    def is_constructible(self, target: Any) -> bool:
        """Whether `target` can be autowired without a registration."""
        if not inspect.isclass(target):
            return False
        if getattr(target, "__module__", "") == "builtins":
            return False
        if inspect.isabstract(target):
            return False
        return not _is_protocol(target)

    def _inspect(self, target: Any) -> tuple[ParameterInfo, ...]:
        if inspect.isclass(target) and getattr(target, "__module__", "") == "builtins":
            raise IntrospectionError(target, "built-in types have no constructor metadata")

        if not callable(target):
            raise IntrospectionError(target, "not a class or callable")

        try:
            sig = inspect.signature(target)
        except (TypeError, ValueError) as e:
            raise IntrospectionError(target, f"signature unavailable ({e})") from e

        hints = _get_type_hints(target)

        params: list[ParameterInfo] = []
        for name, p in sig.parameters.items():
            if p.kind in (p.VAR_POSITIONAL, p.VAR_KEYWORD):
                continue

            annotation = hints.get(name, p.annotation)
            if isinstance(annotation, str):
                # unresolved forward reference
                annotation = inspect.Parameter.empty

            has_default = p.default is not inspect.Parameter.empty
            type_ref, nullable = _split_annotation(annotation)

            params.append(
                ParameterInfo(
                    name=name,
                    kind=p.kind,
                    annotation=annotation,
                    type_ref=type_ref,
                    has_default=has_default,
                    default=p.default if has_default else None,
                    is_nullable=nullable or (has_default and p.default is None),
                )
            )

        return tuple(params)


def _split_annotation(annotation: Any) -> tuple[type | None, bool]:
    """Return (single class or None, whether None is an accepted value)."""
    if annotation is inspect.Parameter.empty or annotation is Any:
        return None, False

    if annotation is None or annotation is _NONE_TYPE:
        return None, True

    if get_origin(annotation) in (Union, types.UnionType):
        args = get_args(annotation)
        nullable = _NONE_TYPE in args
        members = [a for a in args if a is not _NONE_TYPE]
        if len(members) == 1 and inspect.isclass(members[0]):
            return members[0], nullable
        return None, nullable

    if inspect.isclass(annotation):
        return annotation, False

    return None, False


def _get_type_hints(target: Any) -> dict[str, Any]:
    func = target
    if inspect.isclass(target):
        try:
            func = inspect.getattr_static(target, "__init__")
        except AttributeError:
            return {}

    try:
        hints = get_type_hints(func)
    except TypeError:
        hints = {}
    except NameError as exc:
        name = getattr(target, "__qualname__", repr(target))
        logger.warning("'%s' name error retrieving %s type hints", exc.name, name)
        hints = {}

    return hints


if hasattr(typing, "is_protocol"):
    # https://docs.python.org/3/library/typing.html#typing.is_protocol
    def _is_protocol(tp: type) -> bool:
        return typing.is_protocol(tp)

else:

    def _is_protocol(tp: type) -> bool:
        return issubclass(tp, cast("type", Protocol)) and bool(getattr(tp, "_is_protocol", False))
