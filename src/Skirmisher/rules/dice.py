# rules/dice.py

from __future__ import annotations

import random
import re
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

import structlog

from Skirmisher.errors import DiceExpressionError, InvalidDamageInputError, UnsupportedDieError

_DICE_RE = re.compile(r"^\s*(?P<count>\d+)?d(?P<sides>\d+)\s*(?P<mod>[+\-]\s*\d+)?\s*$")


class DieType(str, Enum):
    d4 = "d4"
    d6 = "d6"
    d8 = "d8"
    d10 = "d10"
    d12 = "d12"
    d20 = "d20"

    @property
    def sides(self) -> int:
        return int(self.value[1:])

    @classmethod
    def parse(cls, value: DieType | str | int) -> DieType:
        """Accept a DieType, "d8"/"D8", or a bare side count like 8."""
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise UnsupportedDieError(value)
        if isinstance(value, int):
            key = f"d{value}"
        elif isinstance(value, str):
            key = value.strip().lower()
            if key.isdigit():
                key = f"d{key}"
        else:
            raise UnsupportedDieError(value)
        try:
            return cls(key)
        except ValueError:
            raise UnsupportedDieError(value) from None


class RandomSource(Protocol):
    """Anything that can draw an integer in [a, b] inclusive; random.Random qualifies."""

    def randint(self, a: int, b: int) -> int:
        ...


@dataclass(frozen=True)
class DiceRoll:
    expr: str
    rolls: tuple[int, ...]
    total: int
    modifier: int
    sides: int
    count: int


class DiceRNG:
    def __init__(self, seed: int | None = None, source: RandomSource | None = None):
        self._rng = source if source is not None else random.Random(seed)
        self._log = structlog.get_logger()

    def roll_die(self, die: DieType | str | int) -> int:
        sides = DieType.parse(die).sides
        return self._rng.randint(1, sides)

    def roll_multiple(self, count: int, die: DieType | str | int) -> list[int]:
        if count < 0:
            raise InvalidDamageInputError("dice_count", count, "Must be non-negative")
        die = DieType.parse(die)
        return [self.roll_die(die) for _ in range(count)]

    def roll(self, expr: str) -> DiceRoll:
        """
        Supports: XdY+Z where Y is one of the standard polyhedral sizes.
        """
        self._log.debug("rules.dice.roll.start", expr=expr)
        count, die, mod = parse_dice_spec(expr)
        rolls = self.roll_multiple(count, die)
        out = DiceRoll(
            expr=expr,
            rolls=tuple(rolls),
            total=sum(rolls) + mod,
            modifier=mod,
            sides=die.sides,
            count=count,
        )
        self._log.debug("rules.dice.roll.result", result=out.__dict__)
        return out


def parse_dice_spec(spec: str) -> tuple[int, DieType, int]:
    """Split "2d6+3" into (2, DieType.d6, 3) without rolling anything."""
    m = _DICE_RE.match(spec.replace(" ", "").lower())
    if not m:
        raise DiceExpressionError(spec)
    count = int(m.group("count") or 1)
    return count, DieType.parse(int(m.group("sides"))), int(m.group("mod") or "0")
