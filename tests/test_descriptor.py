"""
Unit tests for stage descriptor normalization.

Tests cover:
- Arity inference from signatures
- Bare callable, sequence and mapping shapes
- Positive integer disambiguation of the (context, length) pair
- Configuration errors for malformed inputs
"""

import numbers

import pytest

from queue_compose import descriptor
from queue_compose.descriptor import (
    Descriptor,
    REUSE_CONTEXT,
    ReuseContext,
    declared_arity,
    from_function,
    from_mapping,
    from_sequence,
    is_positive_integer,
    normalize,
)
from queue_compose.exceptions import ComposeError, ConfigurationError


def one(a):
    return a


def two(a, b):
    return a + b


def three(a, b, c):
    return a + b + c


CTX = {"name": "ctx"}


class Count:
    """Integral type that is not an int subclass."""

    def __init__(self, n):
        self.n = n

    def __int__(self):
        return self.n

    __index__ = __int__

    def __gt__(self, other):
        return self.n > other

    def __lt__(self, other):
        return self.n < other

    def __repr__(self):
        return f"Count({self.n})"


numbers.Integral.register(Count)


# =============================================================================
# Arity Inference
# =============================================================================

class TestDeclaredArity:
    """Tests for declared_arity()."""

    def test_counts_required_positionals(self):
        assert declared_arity(one) == 1
        assert declared_arity(three) == 3

    def test_zero_argument_function(self):
        assert declared_arity(lambda: None) == 0

    def test_defaults_varargs_and_keyword_only_are_skipped(self):
        def f(a, b, c=1, *rest, key, **extra):
            return a

        assert declared_arity(f) == 2

    def test_positional_only(self):
        def f(a, b, /, c):
            return a

        assert declared_arity(f) == 3

    def test_bound_method_excludes_self(self):
        class Counter:
            def add(self, x, y):
                return x + y

        assert declared_arity(Counter().add) == 2

    def test_callable_instance(self):
        class Doubler:
            def __call__(self, x):
                return x * 2

        assert declared_arity(Doubler()) == 1

    def test_uninspectable_signature(self, monkeypatch):
        def refuse(func):
            raise ValueError("no signature found")

        monkeypatch.setattr(descriptor.inspect, "signature", refuse)

        with pytest.raises(ConfigurationError) as exc_info:
            declared_arity(one)

        assert "explicit length" in str(exc_info.value)
        assert exc_info.value.value is one


class TestIsPositiveInteger:
    """Tests for the length disambiguation predicate."""

    @pytest.mark.parametrize("thing", [1, 2, 10, 3.0])
    def test_accepts(self, thing):
        assert is_positive_integer(thing)

    @pytest.mark.parametrize("thing", [0, -1, 1.5, float("nan"), True, "2", None, CTX])
    def test_rejects(self, thing):
        assert not is_positive_integer(thing)

    def test_other_integral_types(self):
        assert is_positive_integer(Count(2))
        assert not is_positive_integer(Count(0))


# =============================================================================
# Shapes
# =============================================================================

class TestFromFunction:
    """Tests for the bare callable shape."""

    def test_defaults(self):
        d = from_function(two)
        assert d == Descriptor(two, REUSE_CONTEXT, 2)
        assert d.reuses_context

    def test_normalize_dispatches_callables(self):
        assert normalize(three) == Descriptor(three, REUSE_CONTEXT, 3)

    def test_not_callable(self):
        with pytest.raises(ConfigurationError):
            from_function(42)


class TestFromSequence:
    """Tests for the ordered list/tuple shape."""

    def test_single_element_matches_bare_callable(self):
        assert from_sequence([two]) == from_function(two)

    def test_length_only(self):
        assert from_sequence([one, 3]) == Descriptor(one, REUSE_CONTEXT, 3)

    def test_context_only(self):
        assert from_sequence([two, CTX]) == Descriptor(two, CTX, 2)

    def test_zero_is_a_context_not_a_length(self):
        assert from_sequence([one, 0]) == Descriptor(one, 0, 1)

    def test_bool_is_a_context(self):
        assert from_sequence([one, True]) == Descriptor(one, True, 1)

    def test_integral_float_length(self):
        d = from_sequence([one, 2.0])
        assert d.length == 2
        assert isinstance(d.length, int)

    def test_integral_length_type(self):
        d = from_sequence([one, Count(2), CTX])
        assert d == Descriptor(one, CTX, 2)
        assert type(d.length) is int

    def test_pair_order_does_not_matter(self):
        assert normalize([one, 2, CTX]) == normalize([one, CTX, 2])
        assert normalize([one, 2, CTX]) == Descriptor(one, CTX, 2)

    def test_tuple_accepted(self):
        assert normalize((one, CTX, 2)) == Descriptor(one, CTX, 2)

    def test_both_integers_first_is_length(self):
        assert from_sequence([one, 2, 5]) == Descriptor(one, 5, 2)

    def test_no_integer_in_pair(self):
        with pytest.raises(ConfigurationError) as exc_info:
            from_sequence([one, CTX, "many"])
        assert "'many'" in str(exc_info.value)

    @pytest.mark.parametrize("seq", [[], [one, 1, CTX, 4]])
    def test_bad_size(self, seq):
        with pytest.raises(ConfigurationError):
            from_sequence(seq)

    def test_first_element_not_callable(self):
        with pytest.raises(ConfigurationError) as exc_info:
            normalize([1, 2])
        assert "not callable" in str(exc_info.value)


class TestFromMapping:
    """Tests for the record shape."""

    def test_defaults(self):
        assert from_mapping({"callback": two}) == Descriptor(two, REUSE_CONTEXT, 2)

    def test_explicit_values(self):
        record = {"callback": one, "context": CTX, "length": 3}
        assert normalize(record) == Descriptor(one, CTX, 3)

    def test_falsy_values_fall_back_to_defaults(self):
        record = {"callback": two, "context": None, "length": 0}
        assert from_mapping(record) == Descriptor(two, REUSE_CONTEXT, 2)

    def test_missing_callback(self):
        with pytest.raises(ConfigurationError) as exc_info:
            from_mapping({"length": 2})
        assert "callback" in str(exc_info.value)

    def test_callback_not_callable(self):
        with pytest.raises(ConfigurationError):
            from_mapping({"callback": "two"})

    def test_invalid_length(self):
        with pytest.raises(ConfigurationError):
            from_mapping({"callback": one, "length": -2})
        with pytest.raises(ConfigurationError):
            from_mapping({"callback": one, "length": 1.5})

    def test_extra_keys_are_ignored(self):
        record = {"callback": one, "name": "first", "length": 2}
        assert from_mapping(record) == Descriptor(one, REUSE_CONTEXT, 2)


# =============================================================================
# Dispatch and Errors
# =============================================================================

class TestNormalize:
    """Tests for normalize() dispatch."""

    def test_descriptor_passes_through(self):
        d = Descriptor(one, CTX, 1)
        assert normalize(d) is d

    def test_descriptor_infers_length_when_omitted(self):
        d = normalize(Descriptor(two))
        assert d.length == 2
        assert d.reuses_context

    def test_descriptor_rejects_non_callable(self):
        with pytest.raises(ConfigurationError) as exc_info:
            Descriptor(5, length=1)
        assert "not callable" in str(exc_info.value)

    @pytest.mark.parametrize("length", [-3, 1.5, "2", True])
    def test_descriptor_rejects_bad_length(self, length):
        with pytest.raises(ConfigurationError) as exc_info:
            Descriptor(one, length=length)
        assert repr(length) in str(exc_info.value)

    def test_descriptor_accepts_zero_length(self):
        assert Descriptor(lambda: 1, length=0).length == 0

    @pytest.mark.parametrize("raw", [42, "one", None, 3.5, {1, 2}])
    def test_unsupported_shapes(self, raw):
        with pytest.raises(ConfigurationError) as exc_info:
            normalize(raw)

        err = exc_info.value
        assert err.value is raw
        assert repr(raw) in str(err)
        assert "not a function, list, or mapping" in str(err)

    def test_error_hierarchy(self):
        with pytest.raises(ComposeError):
            normalize(42)
        with pytest.raises(TypeError):
            normalize(42)

    def test_sentinel_is_distinct_from_none(self):
        assert REUSE_CONTEXT is not None
        assert isinstance(REUSE_CONTEXT, ReuseContext)
        assert list(ReuseContext) == [REUSE_CONTEXT]
        assert repr(REUSE_CONTEXT) == "REUSE_CONTEXT"
