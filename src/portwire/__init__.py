"""Portwire component wiring engine.

Portwire connects independently written components into an object graph by
matching typed ports rather than by constructor injection. A component
declares what it needs as private, interface-typed annotations; any object
implementing the interface can be wired into that slot. Wiring is explicit
and imperative: application setup code calls the engine once per edge, and
the resulting topology lives entirely in the components' own attributes.

Key Features:
    - Ports declared as plain annotations, matched by interface type
    - Fan-out (connect) and pipeline (chain) calling conventions
    - Reversed wiring for pull-style interfaces
    - List ports that accept many providers
    - Post-wiring ``<port>_initialize`` hooks
    - Fail-fast errors that list every port and interface considered

Basic Usage:
    >>> from portwire.wiring import chain, connect
    >>>
    >>> class Tap(ABC):
    ...     @abstractmethod
    ...     def push(self, value): ...
    >>>
    >>> class Splitter(Tap):
    ...     _outputs: list[Tap]
    >>>
    >>> splitter = connect(connect(Splitter(), Printer()), Collector())
    >>> chain(chain(Start(), Multiplier(10)), Printer())

The framework consists of several core modules:
    - wiring: The matching algorithm and its four entry points
    - ports: Port and capability introspection
    - diagnostics: The diagnostic stream and message builders
    - domain: Core domain models (Port, WiringRecord)
    - errors: Framework-specific exceptions
    - config: Settings read from PORTWIRE_* environment variables
    - observability: structlog configuration
"""
