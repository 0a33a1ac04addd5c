from collections.abc import Iterable
from typing import Protocol

from Skirmisher.errors import InvalidDamageInputError

from .damage import (
    apply_resistance,
    calculate_critical_damage,
    calculate_damage,
    distribute_damage,
)
from .dice import DiceRNG, DiceRoll, DieType, RandomSource
from .types import (
    DamageInput,
    DamageResult,
    DamageTarget,
    DistributionMethod,
    ResistanceType,
    ResistedDamage,
    TargetDamage,
)


class Ruleset(Protocol):
    """
    Defines the interface for a game system's damage rules, abstracting away
    the specific mechanics of dice rolling and damage resolution.
    """
    def roll_dice(self, expr: str) -> DiceRoll:
        ...

    def roll_die(self, die: DieType | str | int) -> int:
        ...

    def roll_multiple(self, count: int, die: DieType | str | int) -> list[int]:
        ...

    def roll_damage(self, inp: DamageInput, is_critical: bool = False) -> DamageResult:
        ...

    def apply_resistance(self, result: DamageResult, resistance: ResistanceType) -> ResistedDamage:
        ...

    def distribute_damage(
        self,
        result: DamageResult,
        targets: Iterable[DamageTarget],
        method: DistributionMethod = DistributionMethod.equal,
    ) -> list[TargetDamage]:
        ...

    def apply_damage(self, current_hp: int, damage_amount: int, temp_hp: int = 0) -> tuple[int, int]:
        ...

    def apply_healing(self, current_hp: int, max_hp: int, healing_amount: int) -> int:
        ...


class Dnd5eRuleset:
    """
    D&D 5e implementation of the Ruleset interface.
    """
    def __init__(self, seed: int | None = None, source: RandomSource | None = None):
        self.rng = DiceRNG(seed, source=source)

    def roll_dice(self, expr: str) -> DiceRoll:
        return self.rng.roll(expr)

    def roll_die(self, die: DieType | str | int) -> int:
        return self.rng.roll_die(die)

    def roll_multiple(self, count: int, die: DieType | str | int) -> list[int]:
        return self.rng.roll_multiple(count, die)

    def roll_damage(self, inp: DamageInput, is_critical: bool = False) -> DamageResult:
        if is_critical:
            return calculate_critical_damage(inp, self.rng)
        return calculate_damage(inp, self.rng)

    def apply_resistance(self, result: DamageResult, resistance: ResistanceType) -> ResistedDamage:
        return apply_resistance(result, resistance)

    def distribute_damage(
        self,
        result: DamageResult,
        targets: Iterable[DamageTarget],
        method: DistributionMethod = DistributionMethod.equal,
    ) -> list[TargetDamage]:
        return distribute_damage(result, targets, method)

    def apply_damage(self, current_hp: int, damage_amount: int, temp_hp: int = 0) -> tuple[int, int]:
        if damage_amount < 0:
            raise InvalidDamageInputError("damage_amount", damage_amount, "Must be non-negative")
        damage_to_temp = min(temp_hp, damage_amount)
        new_temp_hp = temp_hp - damage_to_temp
        remaining_damage = damage_amount - damage_to_temp
        # Hit points bottom out at zero; death saves are tracked elsewhere.
        new_hp = max(0, current_hp - remaining_damage)
        return (new_hp, new_temp_hp)

    def apply_healing(self, current_hp: int, max_hp: int, healing_amount: int) -> int:
        if healing_amount < 0:
            raise InvalidDamageInputError("healing_amount", healing_amount, "Must be non-negative")
        new_hp = current_hp + healing_amount
        return min(new_hp, max_hp)
