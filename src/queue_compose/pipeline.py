"""
Pipeline builder.

``build(*inputs)`` normalizes every stage input up front and returns a
``Pipeline``: an immutable, reusable callable that runs the stages against
its call arguments.

Example:
    inc_then_double = build(lambda x: x + 1, [lambda x: x * 2, 1])
    inc_then_double(3)  # -> 8

    add = build([lambda a, b: a + b, 2])
    (add >> [str, 1])(1, 2)  # -> "3"
"""

import logging
from typing import Any, Iterator, List, Tuple

from .catpy import Err, Ok, Result
from .descriptor import Descriptor, StageInput, normalize
from .engine import run
from .exceptions import ExecutionError

logger = logging.getLogger(__name__)


def _prepare(inputs: Tuple[Any, ...]) -> Tuple[Descriptor, ...]:
    stages: List[Descriptor] = []
    for raw in inputs:
        if isinstance(raw, Pipeline):
            stages.extend(raw.stages)
        else:
            stages.append(normalize(raw))
    return tuple(stages)


class Pipeline:
    """
    A composed callable built from an ordered tuple of Descriptors.

    Calling the pipeline seeds a fresh value queue with the call arguments
    and runs every stage in order. No state is kept between calls.

    ::: This is-in-layer Domain-Specific-Language-Layer.
    ::: This is a value-object.
    ::: This is stateless.
    """

    __slots__ = ("_stages",)

    def __init__(self, stages: Tuple[Descriptor, ...] = ()):
        self._stages = tuple(stages)

    @property
    def stages(self) -> Tuple[Descriptor, ...]:
        return self._stages

    @property
    def arity(self) -> int:
        """
        Number of call arguments that leave exactly one value at the end.

        Every stage takes ``length`` values and gives back one, so the queue
        shrinks by ``length - 1`` per stage. An empty pipeline has arity 1.
        """
        return max(0, 1 + sum(s.length - 1 for s in self._stages))

    def __call__(self, *args: Any) -> Any:
        return run(args, self._stages)

    def try_call(self, *args: Any) -> Result[Any, ExecutionError]:
        """
        Call the pipeline, returning Ok(value) or Err(ExecutionError).

        Exceptions raised by the stage callbacks themselves are not caught.
        """
        try:
            return Ok(run(args, self._stages))
        except ExecutionError as e:
            return Err(e)

    # -------------------------------------------------------------------------
    # Composition
    # -------------------------------------------------------------------------

    def then(self, *inputs: StageInput) -> "Pipeline":
        """Return a new pipeline with ``inputs`` appended after these stages."""
        return Pipeline(self._stages + _prepare(inputs))

    def __rshift__(self, other: StageInput) -> "Pipeline":
        """Compose: pipeline >> stage_or_pipeline"""
        return self.then(other)

    def __rrshift__(self, other: StageInput) -> "Pipeline":
        """Compose with a raw stage on the left: stage >> pipeline"""
        return Pipeline(_prepare((other,)) + self._stages)

    # -------------------------------------------------------------------------
    # Introspection
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self._stages)

    def __iter__(self) -> Iterator[Descriptor]:
        return iter(self._stages)

    def __repr__(self) -> str:
        names = ", ".join(s.name for s in self._stages)
        return f"Pipeline([{names}])"


def build(*inputs: StageInput) -> Pipeline:
    """
    Build a pipeline from stage inputs.

    Args:
        *inputs: Callables, 1-3 element lists/tuples, mapping records,
            Descriptors, or other Pipelines (whose stages are spliced in)

    Returns:
        A callable Pipeline; arity is only checked when it is called

    Raises:
        ConfigurationError: if any input cannot be normalized
    """
    pipeline = Pipeline(_prepare(inputs))
    logger.debug("Built %r", pipeline)
    return pipeline


compose = build


__all__ = ["Pipeline", "build", "compose"]
