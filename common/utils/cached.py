from __future__ import annotations

from typing_extensions import Self


class _CachedValue:
    def __init__(self, func=None) -> None:
        self._func = None
        if func is not None:
            self.__call__(func)

    def __call__(self, func) -> Self:
        self.__doc__ = getattr(func, "__doc__")
        self.__name__ = getattr(func, "__name__")
        self.__module__ = getattr(func, "__module__")
        self._func = func
        return self


class cached_property(_CachedValue):  # noqa
    def __get__(self, obj, cls):
        if obj is None:
            return self

        value = self._func(obj)
        obj.__dict__[self.__name__] = value
        return value


class cached_method(_CachedValue):  # noqa
    def __get__(self, obj, cls):
        if obj is None:
            return self

        def _wrapper():
            value = self._func(obj)

            def _return_value():
                return value

            obj.__dict__[self.__name__] = _return_value
            return value

        return _wrapper
