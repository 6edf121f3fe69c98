"""
Decorator used to tag methods as string filters.

The decorator only attaches metadata; collecting the tagged methods and
ordering them is done by the metaclass when the class body is executed.
"""

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .errors import FilterDefinitionError

FILTER_ATTRIBUTE = "__string_filter__"


@dataclass(frozen=True)
class FilterSpec:
    """Metadata attached to a filter method"""
    name: str
    is_async: bool = False


def filter_method(func: Optional[Callable] = None, *, name: Optional[str] = None):
    """
    Mark a method as a filter of its StringProcessor class.

    Can be used bare (``@filter_method``) or with arguments
    (``@filter_method(name="strip")``). The decorated function is returned
    unchanged apart from the attached FilterSpec.
    """
    def decorate(f: Callable) -> Callable:
        if not callable(f):
            raise FilterDefinitionError(f"filter_method can only decorate callables, got {type(f).__name__}")
        spec = FilterSpec(
            name=name or f.__name__,
            is_async=inspect.iscoroutinefunction(f),
        )
        setattr(f, FILTER_ATTRIBUTE, spec)
        return f

    if func is None:
        return decorate
    return decorate(func)


def get_filter_spec(obj: Any) -> Optional[FilterSpec]:
    return getattr(obj, FILTER_ATTRIBUTE, None)


def is_filter(obj: Any) -> bool:
    return isinstance(get_filter_spec(obj), FilterSpec)
