"""Shared test fixtures for the visualizer tests."""
import sys
from pathlib import Path

import pytest

# Ensure the top-level packages are importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from algorithms.step import StepBuilder
from config import Settings
from engine import PolledTimer, Stepper
from engine.session import Session


class FakeClock:
    """Monotonic clock the tests move by hand."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_steps(count: int = 4):
    """A tiny valid sequence: one node per step, one highlighted line."""
    steps = []
    for s in range(count):
        sb = StepBuilder(code="line one\nline two\nline three")
        sb.add_node(f"n{s}", s, 10 * s, 10)
        sb.highlight_lines = [1 + s % 3]
        sb.message = f"Step {s + 1}"
        steps.append(sb.build(step=s + 1, total_steps=count))
    return steps


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def timer(clock):
    return PolledTimer(clock=clock)


@pytest.fixture
def stepper(timer):
    return Stepper(timer=timer)


@pytest.fixture
def steps():
    return make_steps()


@pytest.fixture
def test_settings():
    return Settings(sorting_seed=7, backend_url=None)


@pytest.fixture
def viz(timer, test_settings):
    """A session on the local backend, driven by the fake clock."""
    return Session(timer=timer, settings=test_settings)


@pytest.fixture
def client():
    import main

    main.app.config["TESTING"] = True
    main.STORE = main.SessionStore(factory=main._new_session)
    with main.app.test_client() as c:
        yield c
