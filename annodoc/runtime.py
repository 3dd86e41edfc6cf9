"""Runtime support imported by generated annotation modules.

Metadata lives in an attribute on the annotated object. Objects that do
not accept new attributes, such as builtins, are kept in a registry keyed
by identity. Registry entries hold a weak reference when the object
supports one and are dropped when it is collected; objects without weak
reference support (builtin functions, for instance) are held for the
lifetime of the process.
"""

from __future__ import annotations

import weakref
from typing import Any, Callable, Dict, Mapping, Tuple, TypeVar

META_ATTRIBUTE = "__annodoc_meta__"

T = TypeVar("T")

_registry: Dict[int, Tuple[Callable[[], Any], Dict[str, Any]]] = {}


def _strong_ref(obj: Any) -> Callable[[], Any]:
    return lambda: obj


def _register(obj: Any, meta: Dict[str, Any]) -> None:
    key = id(obj)
    try:
        ref: Callable[[], Any] = weakref.ref(obj, lambda _ref: _registry.pop(key, None))
    except TypeError:
        ref = _strong_ref(obj)
    _registry[key] = (ref, meta)


def _own_metadata(obj: Any) -> Dict[str, Any] | None:
    entry = _registry.get(id(obj))
    if entry is not None and entry[0]() is obj:
        return entry[1]
    try:
        own = vars(obj).get(META_ATTRIBUTE)
    except TypeError:
        return None
    return own if isinstance(own, dict) else None


def metadata_for(obj: Any) -> Dict[str, Any]:
    """Return the metadata attached to ``obj`` or inherited from its class."""
    own = _own_metadata(obj)
    if own is not None:
        return own
    inherited = getattr(obj, META_ATTRIBUTE, None)
    return inherited if isinstance(inherited, dict) else {}


def with_meta(obj: T, meta: Mapping[str, Any]) -> T:
    """Merge ``meta`` into the metadata owned by ``obj`` and return ``obj``.

    Metadata inherited from a class is never mutated through an instance
    or subclass; the first update gives the object a mapping of its own.
    """
    merged = dict(_own_metadata(obj) or {})
    for key, value in meta.items():
        merged[key[1:] if key.startswith("~") else key] = value

    try:
        setattr(obj, META_ATTRIBUTE, merged)
    except (AttributeError, TypeError):
        _register(obj, merged)
    return obj


def attach(obj: T, meta: Mapping[str, Any]) -> T:
    """Attach entity metadata to ``obj``; the entry point of generated modules."""
    return with_meta(obj, meta)


__all__ = ["META_ATTRIBUTE", "attach", "metadata_for", "with_meta"]
