# tests/conftest.py

from collections.abc import Iterable, Iterator

import pytest

from Skirmisher import metrics
from Skirmisher.rules.dice import DiceRNG


class ScriptedSource:
    """Random source that replays fixed die faces in order.

    Each face must fall inside the range the roller asks for, so a test cannot
    accidentally feed a 7 to a d6.
    """

    def __init__(self, faces: Iterable[int]):
        self._faces = list(faces)
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        if not self._faces:
            raise AssertionError("ScriptedSource ran out of faces")
        face = self._faces.pop(0)
        assert a <= face <= b, f"scripted face {face} outside [{a}, {b}]"
        return face

    @property
    def remaining(self) -> int:
        return len(self._faces)


@pytest.fixture
def scripted_source():
    def _make(*faces: int) -> ScriptedSource:
        return ScriptedSource(faces)

    return _make


@pytest.fixture
def scripted(scripted_source):
    """Factory: ``scripted(4, 5)`` returns a DiceRNG that rolls 4 then 5."""

    def _make(*faces: int) -> DiceRNG:
        return DiceRNG(source=scripted_source(*faces))

    return _make


@pytest.fixture
def rng() -> DiceRNG:
    return DiceRNG(seed=42)


@pytest.fixture(autouse=True)
def _fresh_metrics() -> Iterator[None]:
    metrics.set_enabled(True)
    metrics.reset_counters()
    yield None
    metrics.reset_counters()
