"""
Execution engine for composed pipelines.

Drives a FIFO value queue through an ordered list of Descriptors:
each stage pops ``length`` values from the front, runs, and pushes its
single return value onto the back. After the last stage exactly one value
(or none, for an empty pipeline called without arguments) may remain.

Python functions have no implicit receiver, so the binding resolved for a
stage is published through a context variable and read back inside the
callback with ``current_binding()``.
"""

import contextvars
import enum
import logging
from collections import deque
from typing import Any, Iterable, Sequence

from .descriptor import REUSE_CONTEXT, Descriptor
from .exceptions import InsufficientValuesError, SurplusValuesError
from .logging_config import get_trace_logger

logger = logging.getLogger(__name__)


class _Unbound(enum.Enum):
    UNBOUND = "unbound"

    def __repr__(self) -> str:
        return "UNBOUND"


UNBOUND = _Unbound.UNBOUND

_binding: contextvars.ContextVar = contextvars.ContextVar(
    "queue_compose_binding", default=UNBOUND
)


def current_binding(default: Any = None) -> Any:
    """
    Return the binding of the stage that is currently running.

    Args:
        default: Returned when no stage has set a binding yet, or when
            called outside of a pipeline

    Returns:
        The active binding, or ``default``
    """
    value = _binding.get()
    return default if value is UNBOUND else value


def run(values: Iterable[Any], stages: Sequence[Descriptor]) -> Any:
    """
    Run ``stages`` in order against the initial ``values``.

    Args:
        values: Initial queue contents, normally the pipeline call arguments
        stages: Normalized stage descriptors

    Returns:
        The single value left in the queue, or None if the queue is empty

    Raises:
        InsufficientValuesError: a stage needs more values than are queued
        SurplusValuesError: more than one value is left after the last stage
    """
    trace = get_trace_logger()
    queue = deque(values)
    last_binding = UNBOUND
    total = len(stages)

    for position, stage in enumerate(stages, start=1):
        if len(queue) < stage.length:
            logger.debug("Stage %d of %d starved: need %d, have %d",
                         position, total, stage.length, len(queue))
            raise InsufficientValuesError(position, total, stage.length, len(queue))

        args = [queue.popleft() for _ in range(stage.length)]

        if stage.context is not REUSE_CONTEXT:
            last_binding = stage.context

        trace.debug("stage %d/%d %s consumes %d value(s), binding=%r",
                    position, total, stage.name, stage.length, last_binding)

        token = _binding.set(last_binding)
        try:
            result = stage.callback(*args)
        finally:
            _binding.reset(token)

        trace.debug("stage %d/%d returned %r", position, total, result)
        queue.append(result)

    if len(queue) > 1:
        logger.debug("Pipeline of %d stage(s) left %d values", total, len(queue))
        raise SurplusValuesError(queue)

    return queue[0] if queue else None


__all__ = ["UNBOUND", "current_binding", "run"]
