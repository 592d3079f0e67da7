"""A small dependency-injection container driven by type annotations."""

from __future__ import annotations

import logging
import typing
from dataclasses import dataclass
from typing import Any, Callable, ClassVar

__all__ = ["Ioc"]

logger = logging.getLogger(__name__)

_NONE_TYPE = type(None)
_NONE_KEY = "NoneType"
_CO_VARARGS = 0x04
_CO_VARKEYWORDS = 0x08


def _key(annotation: Any) -> str:
    """Return the name a type annotation is registered and looked up under."""
    if annotation is None or annotation is _NONE_TYPE:
        return _NONE_KEY
    if isinstance(annotation, str):
        text = annotation.strip()
        return _NONE_KEY if text == "None" else text
    if isinstance(annotation, type):
        return annotation.__name__
    return str(annotation)


def _is_class_var(annotation: Any) -> bool:
    if isinstance(annotation, str):
        text = annotation.strip()
        return text.startswith("ClassVar") or text.startswith("typing.ClassVar")
    return annotation is ClassVar or typing.get_origin(annotation) is ClassVar


@dataclass(frozen=True)
class _Dependency:
    name: str
    keyword_only: bool
    annotation: Any


@dataclass(frozen=True)
class _Provider:
    func: Callable[..., Any]
    dependencies: tuple[_Dependency, ...]


def _describe(provider: Callable[..., Any]) -> tuple[Any, tuple[_Dependency, ...]]:
    """Return the result type of ``provider`` and the dependencies it takes."""
    if isinstance(provider, type):
        result: Any = provider
        func = provider.__init__
        if func is object.__init__:
            return result, ()
        skip = 1
    else:
        func = getattr(provider, "__func__", provider)
        skip = 1 if func is not provider else 0
        result = None

    code = getattr(func, "__code__", None)
    if code is None:
        raise TypeError(f"cannot inspect provider {provider!r}")
    annotations = getattr(func, "__annotations__", None) or {}

    if result is None:
        result = annotations.get("return")
        if result is None or _key(result) == _NONE_KEY:
            raise TypeError("can't find result in func")

    if code.co_flags & (_CO_VARARGS | _CO_VARKEYWORDS):
        raise TypeError(f"provider {provider!r} has a variadic parameter")

    positional = code.co_varnames[skip : code.co_argcount]
    keyword = code.co_varnames[code.co_argcount : code.co_argcount + code.co_kwonlyargcount]
    dependencies = []
    for names, keyword_only in ((positional, False), (keyword, True)):
        for name in names:
            if name not in annotations:
                raise TypeError(f"parameter {name} of {provider!r} has no type annotation")
            dependencies.append(_Dependency(name, keyword_only, annotations[name]))
    return result, tuple(dependencies)


def _field_annotations(cls: type) -> dict[str, Any]:
    annotations: dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        annotations.update(getattr(klass, "__annotations__", None) or {})
    return annotations


class Ioc:
    """Registers providers by their result type and fills annotated fields with their values.

    Each value is built once and shared by every field of its type.
    """

    def __init__(self, *, allow_private: bool = False, verbose: bool = False) -> None:
        self._allow_private = allow_private
        self._verbose = verbose
        self._providers: dict[str, _Provider] = {}
        self._cache: dict[str, Any] = {}
        self._resolving: set[str] = set()

    def register_provider(self, provider: Callable[..., Any]) -> None:
        """Register a function (or class) as the provider of its annotated result type.

        Every parameter must carry a type annotation; its value is resolved
        from the other providers when the provider is called.
        """
        if not callable(provider):
            raise TypeError("please input func")
        result, dependencies = _describe(provider)
        self._providers[_key(result)] = _Provider(provider, dependencies)

    def inject(self, target: Any) -> None:
        """Set every annotated field of ``target`` to the value provided for its type."""
        if isinstance(target, type):
            raise TypeError(f"{target!r} is not an object with annotated fields")
        cls = type(target)
        self._log(0, "will inject object of type(%s)", cls.__name__)
        for name, annotation in _field_annotations(cls).items():
            if _is_class_var(annotation):
                continue
            self._log(1, "will set field %s(%s)", name, _key(annotation))
            if name.startswith("_") and not self._allow_private:
                raise TypeError(f"cannot set private field {name} of {cls.__name__}")
            value = self._find(annotation, 2)
            setattr(target, name, value)
            self._log(1, "finish set field %s(%s)", name, _key(annotation))
        self._log(0, "finish inject object of type(%s)", cls.__name__)

    def _log(self, level: int, message: str, *args: Any) -> None:
        if self._verbose:
            logger.info("[inject] " + "    " * level + message, *args)

    def _find(self, annotation: Any, level: int) -> Any:
        key = _key(annotation)
        self._log(level, "will get field type %s's value", key)
        if key in self._cache:
            self._log(level, "finish get field type %s's value from cache", key)
            return self._cache[key]

        provider = self._providers.get(key)
        if provider is None:
            if key == _NONE_KEY:
                self._log(level, "finish get field type %s's value from empty type", key)
                return None
            raise LookupError(f"can't find provider of {annotation!r}")

        if key in self._resolving:
            raise RuntimeError(f"dependency cycle at {annotation!r}")
        self._resolving.add(key)
        try:
            args: list[Any] = []
            kwargs: dict[str, Any] = {}
            for dependency in provider.dependencies:
                value = self._find(dependency.annotation, level + 1)
                if dependency.keyword_only:
                    kwargs[dependency.name] = value
                else:
                    args.append(value)
            try:
                value = provider.func(*args, **kwargs)
            except Exception as exc:
                raise RuntimeError(f"call failed, err is {exc}") from exc
        finally:
            self._resolving.discard(key)

        self._cache[key] = value
        self._log(level, "finish get field type %s's value from provider `%r`", key, provider.func)
        return value