"""Domain models used throughout the framework."""

from dataclasses import dataclass
from typing import Any, Optional, get_args, get_origin


@dataclass(frozen=True)
class Port:
    """Describes a capability-typed slot on a component.

    Attributes:
        name: The attribute name of the port on the owning object.
        declared_type: The annotated type of the port, with any Optional unwrapped.
        element_type: For list ports, the capability each element must provide.
        is_list: Whether the port accepts many providers.
    """

    name: str
    declared_type: Any
    element_type: Optional[Any] = None
    is_list: bool = False

    @property
    def capability(self) -> Any:
        """The capability a provider must offer to fill this port."""
        return self.element_type if self.is_list else self.declared_type

    def describe(self) -> str:
        return f"{self.name}:{type_name(self.declared_type)}"


@dataclass(frozen=True)
class WiringRecord:
    """
    Represents a completed wiring between two components.

    Attributes:
        owner: The object holding the port that was filled.
        port: The port that was filled.
        provider: The object placed in the port.
    """

    owner: Any
    port: Port
    provider: Any


def type_name(tp: Any) -> str:
    """Render a class or parameterised alias the way it reads in source.

    Example:
        >>> type_name(DataFlow)          # "DataFlow"
        >>> type_name(list[DataFlow])    # "list[DataFlow]"
        >>> type_name(DataFlow[int])     # "DataFlow[int]"
    """
    origin = get_origin(tp)
    if origin is not None:
        args = ", ".join(type_name(arg) for arg in get_args(tp))
        return f"{type_name(origin)}[{args}]"
    if isinstance(tp, type):
        return tp.__name__
    return repr(tp)
