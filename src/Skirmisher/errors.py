"""Error types raised by the dice engine and the damage service."""

from __future__ import annotations

from typing import Any


class SkirmisherError(ValueError):
    """Base class for every error raised by Skirmisher."""

    pass


class UnsupportedDieError(SkirmisherError):
    """Raised when a die size is not one of d4, d6, d8, d10, d12, d20."""

    def __init__(self, die: Any):
        self.die = die
        super().__init__(f"unsupported die type: {die!r}")


class DiceExpressionError(SkirmisherError):
    """Raised when a dice expression does not match XdY+Z."""

    def __init__(self, expr: str):
        self.expr = expr
        super().__init__(f"Bad dice expression: {expr}")


class DamageCalculationServiceError(SkirmisherError):
    pass


class InvalidDamageInputError(DamageCalculationServiceError):
    def __init__(self, field: str, value: Any, reason: str):
        self.field = field
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {field}: {value!r}. {reason}")


class DamageCalculationLimitError(DamageCalculationServiceError):
    def __init__(self, label: str, value: int, limit: int):
        self.label = label
        self.value = value
        self.limit = limit
        super().__init__(f"{label} {value} exceeds limit of {limit}")


class PresetNotFoundError(DamageCalculationServiceError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Damage preset not found: {name}")
