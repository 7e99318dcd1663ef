"""
Wire component instances together by matching ports to capabilities.

A component declares its ports as non-public annotations typed with an
interface (see :mod:`portwire.ports`). Another component that implements the
interface can then be placed in the port:

    >>> class Sink:
    ...     _source: Optional[Feed] = None
    >>> sink = connect(Sink(), Pump())
    >>> sink._source            # the Pump

Four entry points share one matching algorithm, :func:`wire`:

- :func:`connect` fills a port on ``source`` and returns ``source``, so one
  component can be wired to many (fan-out).
- :func:`chain` fills a port on ``source`` and returns ``target``, so a
  pipeline reads left to right: ``chain(chain(a, b), c)``.
- :func:`connect_reversed` and :func:`chain_reversed` fill a port on
  ``target`` instead. They exist for pull-style interfaces, where the
  consumer owns the port but data flows from the provider, so wiring can
  still be written in the direction of the dataflow.

Ports are matched in declaration order; the first unassigned singular port
of an exactly matching type, or the first list port whose element type the
provider implements, wins. After a match the owner's ``<port>_initialize``
method, if any, is called.
"""

from typing import Any, NoReturn, Optional, TypeVar

import structlog

from portwire.config import get_settings
from portwire.diagnostics import (
    describe_already_wired,
    describe_initialize,
    describe_no_match,
    describe_wiring,
    diagnostic_output,
)
from portwire.domain import Port, WiringRecord
from portwire.errors import (
    MissingComponentError,
    NoCompatiblePortError,
    PortAlreadyWiredError,
)
from portwire.ports import (
    capabilities_of,
    is_assignable,
    is_assigned,
    ports_of,
    type_namespace,
)

__all__ = ["connect", "chain", "connect_reversed", "chain_reversed", "wire"]

logger = structlog.get_logger(__name__)

S = TypeVar("S")
T = TypeVar("T")


def connect(source: S, target: Any, port_name: Optional[str] = None) -> S:
    """Place ``target`` in a matching port of ``source``.

    Args:
        source: The component owning the port.
        target: The component implementing the port's interface.
        port_name: Optional name of the port to fill, overriding declaration order.

    Returns:
        ``source``, so that further targets can be wired to it.

    Raises:
        MissingComponentError: If either component is None.
        PortAlreadyWiredError: If the named port already holds a component.
        NoCompatiblePortError: If no port of ``source`` accepts ``target``.
    """
    _require_components(source=source, target=target)
    wire(source, target, port_name)
    return source


def chain(source: Any, target: T, port_name: Optional[str] = None) -> T:
    """Place ``target`` in a matching port of ``source`` and return ``target``.

    Raises the same errors as :func:`connect`.
    """
    _require_components(source=source, target=target)
    wire(source, target, port_name)
    return target


def connect_reversed(source: S, target: Any, port_name: Optional[str] = None) -> S:
    """Place ``source`` in a matching port of ``target`` and return ``source``.

    Raises the same errors as :func:`connect`, with the roles swapped.
    """
    _require_components(source=source, target=target)
    wire(target, source, port_name)
    return source


def chain_reversed(source: Any, target: T, port_name: Optional[str] = None) -> T:
    """Place ``source`` in a matching port of ``target`` and return ``target``."""
    _require_components(source=source, target=target)
    wire(target, source, port_name)
    return target


def wire(owner: Any, provider: Any, port_name: Optional[str] = None) -> Port:
    """Fill one port of ``owner`` with ``provider``.

    Ports are tried in declaration order. An unassigned singular port is
    filled if the provider implements its exact type; a list port is appended
    to if the provider implements its element type, the list being created on
    first use. Assigned singular ports are skipped. Nothing is modified unless
    a port is filled.

    Args:
        owner: The object whose ports are searched.
        provider: The object to place in the port.
        port_name: If given, the only port considered.

    Returns:
        The port that was filled.

    Raises:
        MissingComponentError: If either object is None.
        PortAlreadyWiredError: If ``port_name`` names a singular port that is
            already assigned.
        NoCompatiblePortError: If no candidate port accepts the provider.
        UnresolvedPortError: If a non-public annotation of the owner names a
            type that is neither importable from its module nor a class of
            either object.
    """
    _require_components(owner=owner, provider=provider)

    candidates = ports_of(owner, type_namespace(provider, owner))
    if port_name is not None:
        candidates = [port for port in candidates if port.name == port_name]
    capabilities = capabilities_of(provider)

    for port in candidates:
        if not port.is_list:
            if not is_assigned(owner, port) and port.declared_type in capabilities:
                setattr(owner, port.name, provider)
                return _complete(WiringRecord(owner, port, provider))
        elif any(is_assignable(c, port.element_type) for c in capabilities):
            _append(owner, port, provider)
            return _complete(WiringRecord(owner, port, provider))

    _fail(owner, provider, port_name, candidates, capabilities)


def _require_components(**components: Any) -> None:
    for argument, component in components.items():
        if component is None:
            raise MissingComponentError(f"{argument} is None")


def _append(owner: Any, port: Port, provider: Any) -> None:
    current = getattr(owner, port.name, None)
    if current is None:
        setattr(owner, port.name, [provider])
    elif isinstance(current, list) and not _is_class_default(owner, port.name, current):
        current.append(provider)
    else:
        # class defaults are shared by every instance, so the owner gets a copy
        setattr(owner, port.name, [*current, provider])


def _is_class_default(owner: Any, name: str, value: Any) -> bool:
    instance_attributes = getattr(owner, "__dict__", {})
    return name not in instance_attributes and getattr(type(owner), name, None) is value


def _complete(record: WiringRecord) -> Port:
    logger.debug(
        "port_wired",
        owner=type(record.owner).__name__,
        port=record.port.name,
        provider=type(record.provider).__name__,
    )
    diagnostic_output.emit(describe_wiring(record))
    _initialize(record.owner, record.port)
    return record.port


def _initialize(owner: Any, port: Port) -> None:
    """Call the owner's post-wiring hook for ``port``, if it defines one.

    The hook runs once the port holds its new value, but other ports of the
    owner may not be wired yet.
    """
    hook_name = f"{port.name}{get_settings().initialize_suffix}"
    if not callable(getattr(type(owner), hook_name, None)):
        return

    getattr(owner, hook_name)()
    diagnostic_output.emit(describe_initialize(owner, hook_name))


def _fail(
    owner: Any,
    provider: Any,
    port_name: Optional[str],
    candidates: list[Port],
    capabilities: list[Any],
) -> NoReturn:
    logger.debug(
        "wiring_failed",
        owner=type(owner).__name__,
        port=port_name,
        provider=type(provider).__name__,
    )
    if port_name is not None and candidates:
        named_port = candidates[0]
        if not named_port.is_list and is_assigned(owner, named_port):
            raise PortAlreadyWiredError(
                describe_already_wired(owner, port_name, provider)
            )

    raise NoCompatiblePortError(
        describe_no_match(owner, port_name, provider, candidates, capabilities)
    )
