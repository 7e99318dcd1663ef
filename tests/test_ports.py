from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import ClassVar, Generic, List, Optional, Protocol, TypeVar, Union

import pytest

from portwire.domain import Port
from portwire.ports import (
    capabilities_of,
    is_assignable,
    is_assigned,
    is_capability,
    ports_of,
)

V = TypeVar("V")


class Event(ABC):
    @abstractmethod
    def execute(self) -> None:
        pass


class TimedEvent(Event):
    @abstractmethod
    def elapsed(self) -> float:
        pass


class Marker(ABC):
    pass


class DataFlow(ABC, Generic[V]):
    @abstractmethod
    def push(self, data: V) -> None:
        pass


class Bindable(Protocol):
    def bind(self) -> None: ...


class Rebindable(Bindable, Protocol):
    def unbind(self) -> None: ...


class Button(TimedEvent, Bindable):
    def execute(self) -> None:
        pass

    def elapsed(self) -> float:
        return 0.0

    def bind(self) -> None:
        pass


class Counter(DataFlow[int]):
    def push(self, data: int) -> None:
        pass


class Panel:
    _click: Optional[Event] = None
    _children: list[Event]
    _flows: List[DataFlow[int]]
    _readonly: Sequence[Event] = ()
    _name: str = "panel"
    _numbers: list[int]
    _either: Optional[Union[Event, DataFlow[int]]] = None
    _shared: ClassVar[Optional[Event]] = None
    __dunder__: Optional[Event] = None
    visible: Optional[Event] = None


class Window(Panel):
    _binding: Bindable | None = None


@pytest.mark.parametrize(
    "tp, expected",
    [
        (Event, True),
        (TimedEvent, True),
        (DataFlow, True),
        (DataFlow[int], True),
        (Bindable, True),
        (Rebindable, True),
        (Button, False),
        (Marker, False),
        (list[Event], False),
        (int, False),
        (Protocol, False),
        ("Event", False),
    ],
)
def test_is_capability(tp, expected):
    assert is_capability(tp) is expected


def test_ports_in_declaration_order():
    assert ports_of(Panel()) == [
        Port("_click", Event),
        Port("_children", list[Event], Event, is_list=True),
        Port("_flows", List[DataFlow[int]], DataFlow[int], is_list=True),
        Port("_readonly", Sequence[Event], Event, is_list=True),
    ]


def test_base_class_ports_come_before_subclass_ports():
    names = [port.name for port in ports_of(Window())]

    assert names == ["_click", "_children", "_flows", "_readonly", "_binding"]


def test_capabilities_include_inherited_interfaces():
    assert capabilities_of(Button()) == [TimedEvent, Event, Bindable]


def test_capabilities_include_parameterised_bases():
    assert capabilities_of(Counter()) == [DataFlow[int], DataFlow]


def test_plain_objects_have_no_capabilities():
    assert capabilities_of(object()) == []


@pytest.mark.parametrize(
    "capability, target, expected",
    [
        (Event, Event, True),
        (TimedEvent, Event, True),
        (Event, TimedEvent, False),
        (DataFlow[int], DataFlow, True),
        (DataFlow[int], DataFlow[int], True),
        (DataFlow, DataFlow[int], False),
        (DataFlow[str], DataFlow[int], False),
        (Bindable, Bindable, True),
        (Bindable, Event, False),
    ],
)
def test_is_assignable(capability, target, expected):
    assert is_assignable(capability, target) is expected


def test_singular_port_state():
    panel = Panel()
    port = Port("_click", Event)
    assert not is_assigned(panel, port)

    panel._click = Button()
    assert is_assigned(panel, port)


def test_list_port_state():
    panel = Panel()
    port = Port("_children", list[Event], Event, is_list=True)
    assert not is_assigned(panel, port)

    panel._children = []
    assert not is_assigned(panel, port)

    panel._children.append(Button())
    assert is_assigned(panel, port)


def test_port_describes_itself():
    assert Port("_flows", list[DataFlow[int]], DataFlow[int], True).describe() == (
        "_flows:list[DataFlow[int]]"
    )
