"""
Compose Exception Hierarchy

Contains all exception classes raised while building or invoking a
composed pipeline.
"""

from typing import Any, Sequence


class ComposeError(Exception):
    """
    Base exception for all compose operations.

    ::: This is-in-layer Utility-Layer.
    ::: This is a exception.
    ::: This is stateless.
    """
    pass


class ConfigurationError(ComposeError, TypeError):
    """
    Raised when a stage input cannot be turned into a Descriptor.

    ::: This is-in-layer Utility-Layer.
    ::: This is a exception.
    ::: This is stateless.

    The offending raw input is kept on ``value`` so callers can report it
    without parsing the message.
    """

    def __init__(self, value: Any, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(
            f"Error preparing 'compose': argument {value!r} {reason}"
        )


class ExecutionError(ComposeError, RuntimeError):
    """
    Base exception for failures while a pipeline is being invoked.

    ::: This is-in-layer Utility-Layer.
    ::: This is a exception.
    ::: This is stateless.
    """
    pass


class InsufficientValuesError(ExecutionError):
    """
    Raised when a stage needs more values than the queue holds.

    ::: This is-in-layer Utility-Layer.
    ::: This is a exception.
    ::: This is stateless.
    """

    def __init__(self, position: int, total: int, needed: int, available: int):
        self.position = position
        self.total = total
        self.needed = needed
        self.available = available
        super().__init__(
            f"Error invoking composed function {position} of {total}: "
            f"need {needed} value(s), but only have {available}"
        )


class SurplusValuesError(ExecutionError):
    """
    Raised when every stage has run and more than one value is left over.

    ::: This is-in-layer Utility-Layer.
    ::: This is a exception.
    ::: This is stateless.
    """

    def __init__(self, remaining: Sequence[Any]):
        self.remaining = tuple(remaining)
        super().__init__(
            "Error invoking composed function: all callbacks have been applied, "
            f"but multiple values remain ({len(self.remaining)})"
        )


__all__ = [
    "ComposeError",
    "ConfigurationError",
    "ExecutionError",
    "InsufficientValuesError",
    "SurplusValuesError",
]
