# rules/damage.py
"""Damage rolling, resistance and multi-target distribution.

Every function here is pure apart from the dice drawn from ``rng``; results are
frozen dataclasses from :mod:`Skirmisher.rules.types`.
"""

from __future__ import annotations

import math
from collections.abc import Iterable

import structlog

from Skirmisher.errors import InvalidDamageInputError
from Skirmisher.rules.dice import DiceRNG, DieType
from Skirmisher.rules.types import (
    RESISTANCE_MULTIPLIERS,
    DamageInput,
    DamageResult,
    DamageTarget,
    DamageType,
    DistributionMethod,
    ResistanceType,
    ResistedDamage,
    TargetDamage,
)

log = structlog.get_logger()


def _check_count(inp: DamageInput) -> DieType:
    if inp.dice_count < 0:
        raise InvalidDamageInputError("dice_count", inp.dice_count, "Must be non-negative")
    return DieType.parse(inp.die)


def calculate_damage(inp: DamageInput, rng: DiceRNG) -> DamageResult:
    die = _check_count(inp)
    rolls = rng.roll_multiple(inp.dice_count, die)
    total = max(0, sum(rolls) + inp.modifier)
    log.debug(
        "rules.damage.calculated",
        dice=f"{inp.dice_count}{die.value}",
        rolls=rolls,
        modifier=inp.modifier,
        total=total,
    )
    return DamageResult(
        total=total,
        rolls=tuple(rolls),
        modifier=inp.modifier,
        damage_type=DamageType(inp.damage_type),
    )


def calculate_critical_damage(inp: DamageInput, rng: DiceRNG) -> DamageResult:
    """Roll the damage dice twice over and add the modifier once.

    The extra dice are rolled, not copied: 2d6 doubled is 4d6, which has a
    different distribution from (2d6) * 2.
    """
    die = _check_count(inp)
    rolls = rng.roll_multiple(inp.dice_count, die)
    rolls.extend(rng.roll_multiple(inp.dice_count, die))
    total = max(0, sum(rolls) + inp.modifier)
    log.debug(
        "rules.damage.critical",
        dice=f"{inp.dice_count * 2}{die.value}",
        rolls=rolls,
        modifier=inp.modifier,
        total=total,
    )
    return DamageResult(
        total=total,
        rolls=tuple(rolls),
        modifier=inp.modifier,
        damage_type=DamageType(inp.damage_type),
        critical=True,
    )


def _resist(result: DamageResult, amount: int, resistance: ResistanceType) -> dict:
    resistance = ResistanceType(resistance)
    final = math.floor(amount * RESISTANCE_MULTIPLIERS[resistance])
    return dict(
        total=result.total,
        rolls=result.rolls,
        modifier=result.modifier,
        damage_type=result.damage_type,
        critical=result.critical,
        final_damage=max(0, final),
        resistance=resistance,
        original_damage=amount,
    )


def apply_resistance(result: DamageResult, resistance: ResistanceType | str) -> ResistedDamage:
    """Scale ``result.total`` by the target's multiplier, rounding down.

    Call once per target per damage event; applying it twice compounds.
    """
    return ResistedDamage(**_resist(result, result.total, resistance))


def distribute_damage(
    result: DamageResult,
    targets: Iterable[DamageTarget],
    method: DistributionMethod | str = DistributionMethod.equal,
) -> list[TargetDamage]:
    method = DistributionMethod(method)
    # Halving happens on each target's own copy, before that target's resistance.
    amount = result.total // 2 if method is DistributionMethod.half else result.total
    out = [
        TargetDamage(
            **_resist(result, amount, t.resistance),
            target_id=t.id,
            target_name=t.name,
        )
        for t in targets
    ]
    log.debug(
        "rules.damage.distributed",
        method=method.value,
        base=result.total,
        targets=len(out),
    )
    return out
