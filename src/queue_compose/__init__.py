"""
queue_compose - queue-driven function composition

Builds one callable out of many. Stages consume values from the front of
a shared FIFO queue according to their arity and push their single result
onto the back; a stage can also keep the binding set by the stage before
it.

Example:
    from queue_compose import build, current_binding

    pipeline = build(
        lambda a, b: a + b,                 # arity inferred: 2
        [lambda x: x * 2, 1],               # explicit arity
        {"callback": str, "length": 1},     # record form
    )
    pipeline(1, 2)  # -> "6"
"""

__version__ = "0.1.0"

from .catpy import Result, Ok, Err

from .exceptions import (
    ComposeError,
    ConfigurationError,
    ExecutionError,
    InsufficientValuesError,
    SurplusValuesError,
)

from .descriptor import (
    Descriptor,
    ReuseContext,
    REUSE_CONTEXT,
    declared_arity,
    from_function,
    from_sequence,
    from_mapping,
    normalize,
)

from .engine import UNBOUND, current_binding, run

from .pipeline import Pipeline, build, compose

from .display import describe_stages, print_stages

__all__ = [
    # Result types
    "Result", "Ok", "Err",
    # Errors
    "ComposeError", "ConfigurationError", "ExecutionError",
    "InsufficientValuesError", "SurplusValuesError",
    # Normalization
    "Descriptor", "ReuseContext", "REUSE_CONTEXT", "declared_arity",
    "from_function", "from_sequence", "from_mapping", "normalize",
    # Execution
    "UNBOUND", "current_binding", "run",
    # Building
    "Pipeline", "build", "compose",
    # Display
    "describe_stages", "print_stages",
]
