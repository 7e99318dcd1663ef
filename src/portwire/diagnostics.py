"""Diagnostic output for the wiring engine.

Every successful wiring, and every post-wiring initialize hook it triggers,
is described on the process-wide :data:`diagnostic_output` stream. The stream
need not have subscribers. To see the wiring of an application, subscribe
before any wiring is done:

    >>> diagnostic_output += print
    >>> log_diagnostics()          # or forward to structlog

This module also builds the messages carried by wiring errors, so that
failures and diagnostics label components the same way.
"""

from typing import Any, Callable, Iterable, Optional

import structlog

from portwire.config import get_settings
from portwire.domain import Port, WiringRecord, type_name
from portwire.ports import is_assigned

__all__ = [
    "DiagnosticHandler",
    "DiagnosticStream",
    "diagnostic_output",
    "log_diagnostics",
    "label",
    "describe_wiring",
    "describe_initialize",
    "describe_already_wired",
    "describe_no_match",
]


DiagnosticHandler = Callable[[str], None]


class DiagnosticStream:
    """A multicast event carrying diagnostic messages.

    Handlers are called in the order they subscribed. ``+=`` and ``-=`` are
    shorthand for :meth:`subscribe` and :meth:`unsubscribe`.
    """

    def __init__(self):
        self._handlers: list[DiagnosticHandler] = []

    def subscribe(self, handler: DiagnosticHandler) -> DiagnosticHandler:
        self._handlers.append(handler)
        return handler

    def unsubscribe(self, handler: DiagnosticHandler) -> None:
        self._handlers.remove(handler)

    def emit(self, message: str) -> None:
        for handler in list(self._handlers):
            handler(message)

    def __iadd__(self, handler: DiagnosticHandler) -> "DiagnosticStream":
        self.subscribe(handler)
        return self

    def __isub__(self, handler: DiagnosticHandler) -> "DiagnosticStream":
        self.unsubscribe(handler)
        return self

    def __len__(self) -> int:
        return len(self._handlers)


diagnostic_output = DiagnosticStream()
"""The stream the wiring engine reports to."""


def log_diagnostics(
    logger: Optional[Any] = None, level: str = "info"
) -> DiagnosticHandler:
    """Forward every diagnostic message to a structlog logger.

    Args:
        logger: The logger to forward to. Defaults to this module's logger.
        level: Name of the logger method used for each message.

    Returns:
        The subscribed handler, which may be passed to
        ``diagnostic_output.unsubscribe`` to stop forwarding.
    """
    log = logger or structlog.get_logger(__name__)

    def handler(message: str) -> None:
        getattr(log, level)("wiring", message=message)

    return diagnostic_output.subscribe(handler)


def instance_name(component: Any) -> str:
    attribute = get_settings().instance_name_attribute
    name = getattr(component, attribute, None)
    return f"No {attribute}" if name is None else str(name)


def label(component: Any) -> str:
    return f"{type(component).__name__}[{instance_name(component)}]"


def describe_wiring(record: WiringRecord) -> str:
    return (
        f"WireTo {label(record.owner)}.{record.port.name} ---> "
        f"{label(record.provider)} : {type_name(record.port.declared_type)}"
    )


def describe_initialize(owner: Any, hook_name: str) -> str:
    return f"Called initialize function {hook_name} on {label(owner)}"


def describe_already_wired(owner: Any, port_name: str, provider: Any) -> str:
    return f"Port already wired {label(owner)}.{port_name} to {label(provider)}"


def describe_no_match(
    owner: Any,
    port_name: Optional[str],
    provider: Any,
    candidates: Iterable[Port],
    capabilities: Iterable[Any],
) -> str:
    """Describe a failed wiring in enough detail to diagnose it without a debugger.

    Args:
        owner: The object whose ports were searched.
        port_name: The port name requested by the caller, if any.
        provider: The object that could not be placed.
        candidates: Every port that was considered.
        capabilities: Every capability of the provider that was considered.

    Returns:
        A message naming both components, each considered port with its
        assigned state, and each considered capability.
    """
    fields_considered = "; ".join(
        f"{port.describe()}, {'assigned' if is_assigned(owner, port) else 'unassigned'}"
        for port in candidates
    )
    interfaces_considered = ", ".join(type_name(c) for c in capabilities)
    return (
        f'Failed to wire {label(owner)}."{port_name or ""}" to {label(provider)}. '
        f"Considered fields of {type(owner).__name__}: {fields_considered or 'none'}. "
        f"Considered interfaces of {type(provider).__name__}: {interfaces_considered or 'none'}."
    )
