"""
Descriptor normalization.

Every stage handed to ``build`` is turned into a canonical ``Descriptor``
before the pipeline ever runs. Three raw shapes are accepted:

- a bare callable: ``f``
- an ordered list or tuple: ``[f]``, ``[f, length]``, ``[f, context]``,
  ``[f, length, context]`` or ``[f, context, length]``
- a mapping record: ``{"callback": f, "context": c, "length": n}``

Callers that already know the shape can use ``from_function``,
``from_sequence`` or ``from_mapping`` directly; ``normalize`` dispatches
to them.
"""

import enum
import inspect
import numbers
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence, Union

from .exceptions import ConfigurationError


class ReuseContext(enum.Enum):
    """Marker for a stage that keeps the binding of the previous stage."""
    REUSE = "reuse"

    def __repr__(self) -> str:
        return "REUSE_CONTEXT"


REUSE_CONTEXT = ReuseContext.REUSE

_COUNTED_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


@dataclass(frozen=True)
class Descriptor:
    """
    Canonical stage record.

    Attributes:
        callback: The callable invoked when the pipeline reaches this stage
        context: Binding installed while the callback runs, or
            REUSE_CONTEXT to keep the previous stage's binding
        length: Number of queue values the callback consumes; the
            callback's declared arity when omitted

    ::: This is-in-layer Domain-Specific-Language-Layer.
    ::: This is a value-object.
    ::: This is stateless.
    """
    callback: Callable[..., Any]
    context: Any = REUSE_CONTEXT
    length: Optional[int] = None

    def __post_init__(self):
        _require_callable(self, self.callback)
        if self.length is None:
            object.__setattr__(self, "length", declared_arity(self.callback))
        elif isinstance(self.length, bool) or not isinstance(self.length, numbers.Integral) \
                or self.length < 0:
            raise ConfigurationError(
                self, f"has length {self.length!r}, expected a non-negative integer"
            )
        else:
            object.__setattr__(self, "length", int(self.length))

    @property
    def reuses_context(self) -> bool:
        return self.context is REUSE_CONTEXT

    @property
    def name(self) -> str:
        """Qualified name of the callback, or its repr for anonymous callables."""
        return getattr(self.callback, "__qualname__", None) or repr(self.callback)


StageInput = Union[Callable[..., Any], Sequence[Any], Mapping, Descriptor]


def is_positive_integer(thing: Any) -> bool:
    """True for integers > 0 (any numbers.Integral) and integral floats > 0; bools never count."""
    if isinstance(thing, bool):
        return False
    if isinstance(thing, numbers.Integral):
        return thing > 0
    if isinstance(thing, float):
        return thing.is_integer() and thing > 0
    return False


def declared_arity(func: Callable[..., Any]) -> int:
    """
    Count the positional parameters of ``func`` that have no default.

    ``*args``, keyword-only and defaulted parameters are not counted, so
    ``def f(a, b, c=1, *rest, key)`` has an arity of 2. A nested Pipeline
    reports the number of arguments it needs to leave exactly one value.

    Raises:
        ConfigurationError: if the signature cannot be inspected
    """
    from .pipeline import Pipeline

    if isinstance(func, Pipeline):
        return func.arity

    try:
        sig = inspect.signature(func)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(
            func, f"has no inspectable signature ({e}); give an explicit length"
        ) from e

    return sum(
        1 for p in sig.parameters.values()
        if p.kind in _COUNTED_KINDS and p.default is inspect.Parameter.empty
    )


def _require_callable(raw: Any, callback: Any) -> Callable[..., Any]:
    if not callable(callback):
        raise ConfigurationError(raw, f"has a callback {callback!r} that is not callable")
    return callback


def _explicit_length(raw: Any, length: Any) -> int:
    if not is_positive_integer(length):
        raise ConfigurationError(raw, f"has length {length!r}, expected a positive integer")
    return int(length)


def from_function(func: Callable[..., Any]) -> Descriptor:
    """Descriptor for a bare callable: reuse the binding, infer the arity."""
    callback = _require_callable(func, func)
    return Descriptor(callback=callback, context=REUSE_CONTEXT, length=declared_arity(callback))


def from_sequence(seq: Sequence[Any]) -> Descriptor:
    """
    Descriptor for ``[callback, extra?, extra?]``.

    The extras are an unordered (context, length) pair: whichever one is a
    positive integer is the length, the other is the context. With a single
    extra, a positive integer is the length and anything else the context.
    """
    if isinstance(seq, (str, bytes)) or not 1 <= len(seq) <= 3:
        raise ConfigurationError(seq, "is not a sequence of 1 to 3 elements")

    callback = _require_callable(seq, seq[0])
    extras = list(seq[1:])

    if not extras:
        return Descriptor(callback, REUSE_CONTEXT, declared_arity(callback))

    if len(extras) == 1:
        (extra,) = extras
        if is_positive_integer(extra):
            return Descriptor(callback, REUSE_CONTEXT, int(extra))
        return Descriptor(callback, extra, declared_arity(callback))

    first, second = extras
    if is_positive_integer(first):
        return Descriptor(callback, second, int(first))
    return Descriptor(callback, first, _explicit_length(seq, second))


def from_mapping(record: Mapping) -> Descriptor:
    """
    Descriptor for ``{"callback": f, "context"?: c, "length"?: n}``.

    A missing or falsy context means REUSE_CONTEXT; a missing or falsy length
    means the callback's declared arity. Other keys are ignored.
    """
    if "callback" not in record:
        raise ConfigurationError(record, "has no 'callback' key")

    callback = _require_callable(record, record["callback"])
    context = record.get("context") or REUSE_CONTEXT
    length = record.get("length")
    if length:
        length = _explicit_length(record, length)
    else:
        length = declared_arity(callback)

    return Descriptor(callback, context, length)


def normalize(raw: StageInput) -> Descriptor:
    """
    Convert one stage input into a Descriptor.

    Args:
        raw: A callable, a 1-3 element list/tuple, a mapping record, or an
            existing Descriptor (validated when it was constructed, returned
            unchanged)

    Returns:
        The canonical Descriptor

    Raises:
        ConfigurationError: if ``raw`` is none of the accepted shapes or
            resolves to an invalid callback or length
    """
    if isinstance(raw, Descriptor):
        return raw
    if callable(raw):
        return from_function(raw)
    if isinstance(raw, Mapping):
        return from_mapping(raw)
    if isinstance(raw, (list, tuple)):
        return from_sequence(raw)
    raise ConfigurationError(raw, "is not a function, list, or mapping")


__all__ = [
    "Descriptor",
    "ReuseContext",
    "REUSE_CONTEXT",
    "StageInput",
    "declared_arity",
    "is_positive_integer",
    "from_function",
    "from_sequence",
    "from_mapping",
    "normalize",
]
