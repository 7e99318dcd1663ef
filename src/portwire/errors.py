__all__ = [
    "WiringError",
    "MissingComponentError",
    "PortAlreadyWiredError",
    "NoCompatiblePortError",
    "UnresolvedPortError",
]


class WiringError(Exception):
    """Raised when two components cannot be wired together."""

    pass


class MissingComponentError(WiringError):
    """Raised when one of the objects passed to a wiring call is None."""

    pass


class PortAlreadyWiredError(WiringError):
    """Raised when an explicitly named singular port already holds a component."""

    pass


class NoCompatiblePortError(WiringError):
    """Raised when no candidate port accepts any capability of the provider."""

    pass


class UnresolvedPortError(WiringError):
    """Raised when a non-public annotation of a component cannot be evaluated."""

    pass
