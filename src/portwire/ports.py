"""Introspection utilities for discovering ports and capabilities.

A *capability* is an interface: an abstract base class with at least one
abstract member, or a ``typing.Protocol`` class. Parameterised aliases of
either (``DataFlow[int]``) are capabilities too.

A *port* is a non-public class annotation whose type, once any ``Optional``
is unwrapped, is a capability (a singular port) or a list of a capability
(a list port). Ports are reported in declaration order, base classes first.

Only non-public annotations are evaluated, so public annotations may name
types that exist only for type checkers. String annotations are resolved
against the declaring class's module, and then against the classes of the
components being wired, which lets classes defined inside a function refer
to one another.

Example:
    >>> class Sink:
    ...     _source: Optional[Feed] = None
    ...     _taps: list[Tap]
    ...     label: Feed          # public, never a port
    >>> ports_of(Sink())
    [Port('_source', Feed), Port('_taps', list[Tap], Tap, is_list=True)]
"""

import collections.abc
import inspect
import sys
import types
from typing import (
    Any,
    Generic,
    Optional,
    Protocol,
    Union,
    get_args,
    get_origin,
    get_type_hints,
)

from portwire.domain import Port
from portwire.errors import UnresolvedPortError

if sys.version_info >= (3, 14):
    import annotationlib

__all__ = [
    "is_capability",
    "ports_of",
    "type_namespace",
    "capabilities_of",
    "is_assignable",
    "is_assigned",
]


_LIST_ORIGINS = (list, collections.abc.MutableSequence, collections.abc.Sequence)
_NOT_CAPABILITIES = (object, Generic, Protocol)


def is_capability(tp: Any) -> bool:
    """Check whether a type is an interface that components can implement.

    Args:
        tp: A class or parameterised generic alias.

    Returns:
        True for abstract classes with abstract members, Protocol classes,
        and parameterised aliases of either.
    """
    cls = get_origin(tp) or tp
    if not inspect.isclass(cls) or cls in _NOT_CAPABILITIES:
        return False
    # typing.is_protocol only exists from 3.13 and reads this same flag.
    # Every Protocol subclass sets it in its own namespace, so plain classes
    # deriving from a Protocol are not Protocols themselves.
    if cls.__dict__.get("_is_protocol", False):
        return True
    return inspect.isabstract(cls)


def ports_of(owner: Any, namespace: Optional[dict[str, Any]] = None) -> list[Port]:
    """List the candidate ports of an object in declaration order.

    Args:
        owner: The object whose class annotations are inspected.
        namespace: Extra names for resolving string annotations, consulted
            after the declaring module's globals fail to supply a name.

    Returns:
        One :class:`Port` per non-public annotation typed as a capability or
        as a list of a capability.

    Raises:
        UnresolvedPortError: If a non-public annotation names a type that
            cannot be found.
    """
    owner_class = type(owner)
    annotations: dict[str, Any] = {}
    for cls in reversed(owner_class.__mro__):
        for name, annotation in _own_annotations(cls).items():
            if _is_private(name):
                # a redeclared name keeps its base-class position
                annotations[name] = _resolve(
                    owner_class, cls, name, annotation, namespace
                )

    return [
        port
        for port in (_make_port(name, annotation) for name, annotation in annotations.items())
        if port is not None
    ]


def type_namespace(*components: Any) -> dict[str, Any]:
    """Map the names of the classes behind ``components`` to the classes.

    Covers every class in each component's MRO and every class argument of
    the parameterised bases those classes declare.
    """
    namespace: dict[str, Any] = {}
    for component in components:
        for cls in type(component).__mro__:
            namespace.setdefault(cls.__name__, cls)
            for base in cls.__dict__.get("__orig_bases__", ()):
                for arg in get_args(base):
                    if inspect.isclass(arg):
                        namespace.setdefault(arg.__name__, arg)
    return namespace


def capabilities_of(provider: Any) -> list[Any]:
    """Compute the capability set of a provider, ordered by MRO.

    Each capability class in the provider's MRO is included, followed by any
    parameterised capability aliases that class declares as bases, so a
    provider of ``DataFlow[int]`` offers both ``DataFlow`` and ``DataFlow[int]``.
    """
    capabilities: list[Any] = []

    def add(capability: Any) -> None:
        if capability not in capabilities:
            capabilities.append(capability)

    for cls in type(provider).__mro__:
        if is_capability(cls):
            add(cls)
        for base in cls.__dict__.get("__orig_bases__", ()):
            if get_origin(base) is not None and is_capability(base):
                add(base)

    return capabilities


def is_assignable(capability: Any, target: Any) -> bool:
    """Check whether a provider offering ``capability`` can fill a slot of ``target``.

    A parameterised target only accepts an equal alias. An unparameterised
    target accepts itself and any capability whose class derives from it.
    """
    if capability == target:
        return True
    if get_origin(target) is not None:
        return False
    capability_class = get_origin(capability) or capability
    # Protocols reject issubclass() unless runtime checkable, so walk the MRO
    return inspect.isclass(capability_class) and target in capability_class.__mro__


def is_assigned(owner: Any, port: Port) -> bool:
    value = getattr(owner, port.name, None)
    if port.is_list:
        return bool(value)
    return value is not None


def _make_port(name: str, annotation: Any) -> Optional[Port]:
    if not _is_private(name):
        return None

    declared_type = _unwrap_optional(annotation)
    if is_capability(declared_type):
        return Port(name, declared_type)

    if get_origin(declared_type) in _LIST_ORIGINS:
        args = get_args(declared_type)
        if len(args) == 1 and is_capability(args[0]):
            return Port(name, declared_type, args[0], is_list=True)

    return None


def _is_private(name: str) -> bool:
    return name.startswith("_") and not (name.startswith("__") and name.endswith("__"))


def _unwrap_optional(annotation: Any) -> Any:
    if get_origin(annotation) not in (Union, types.UnionType):
        return annotation
    remaining = [arg for arg in get_args(annotation) if arg is not type(None)]
    return remaining[0] if len(remaining) == 1 else annotation


def _own_annotations(cls: type) -> dict[str, Any]:
    if sys.version_info >= (3, 14):
        # names that cannot be evaluated come back as ForwardRefs
        return annotationlib.get_annotations(cls, format=annotationlib.Format.FORWARDREF)
    return cls.__dict__.get("__annotations__", {})


def _resolve(
    owner_class: type,
    cls: type,
    name: str,
    annotation: Any,
    namespace: Optional[dict[str, Any]],
) -> Any:
    module = sys.modules.get(cls.__module__)
    globalns = {**(namespace or {}), **(vars(module) if module else {})}
    holder = type(cls.__name__, (), {"__annotations__": {name: annotation}})
    try:
        return get_type_hints(holder, globalns, dict(vars(cls)))[name]
    except (NameError, AttributeError) as err:
        raise UnresolvedPortError(
            f"Cannot resolve annotation of {owner_class.__name__}.{name} "
            f"(declared on {cls.__name__}): {err}"
        ) from err
