"""
Shared pytest fixtures for queue_compose tests.

Keeps the trace logger and its environment switches isolated between
tests, and provides a few ready-made stage callables.
"""

import pytest

from queue_compose.logging_config import reset_trace_logger

LOGGING_ENV_VARS = (
    "QUEUE_COMPOSE_TRACE",
    "QUEUE_COMPOSE_LOG_DIR",
    "QUEUE_COMPOSE_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_trace_logger(monkeypatch):
    """
    Start every test with tracing disabled and no trace handlers.

    Tests that want tracing set the environment variables with monkeypatch
    and call reset_trace_logger() themselves.
    """
    for var in LOGGING_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    reset_trace_logger()

    yield

    for var in LOGGING_ENV_VARS:
        monkeypatch.delenv(var, raising=False)
    reset_trace_logger()


class Receiver:
    """Bindable object that records every value pushed to it."""

    def __init__(self, name):
        self.name = name
        self.items = []

    def push(self, value):
        self.items.append(value)
        return value

    def __repr__(self):
        return f"Receiver({self.name!r})"


@pytest.fixture
def receiver():
    return Receiver("primary")


@pytest.fixture
def other_receiver():
    return Receiver("secondary")


@pytest.fixture
def calls():
    """List that recording stages append (name, args) tuples to."""
    return []


@pytest.fixture
def recorder(calls):
    """
    Factory for stages that record their arguments.

    recorder("s1", 2) returns a two-argument callable that appends
    ("s1", (a, b)) to ``calls`` and returns the string "s1".
    """
    def make(name, arity):
        def stage(*args):
            calls.append((name, args))
            return name
        return [stage, arity] if arity else stage
    return make
