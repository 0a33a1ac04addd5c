# test_engine.py
import pytest

from Skirmisher.errors import InvalidDamageInputError
from Skirmisher.rules.dice import DieType
from Skirmisher.rules.engine import Dnd5eRuleset
from Skirmisher.rules.types import (
    DamageInput,
    DamageResult,
    DamageTarget,
    DamageType,
    ResistanceType,
    TargetDamage,
)


@pytest.fixture
def ruleset():
    return Dnd5eRuleset(seed=42)


def test_roll_dice_expression(ruleset):
    res = ruleset.roll_dice("2d6+3")
    assert len(res.rolls) == 2
    assert res.total == sum(res.rolls) + 3


def test_roll_damage_normal(ruleset):
    res = ruleset.roll_damage(DamageInput(2, DieType.d6, 3, DamageType.slashing))
    assert isinstance(res, DamageResult)
    assert res.total >= 5  # 2 + 3 minimum
    assert res.total <= 15
    assert len(res.rolls) == 2


def test_roll_damage_critical(ruleset):
    res = ruleset.roll_damage(DamageInput(1, DieType.d8, 2, DamageType.slashing), is_critical=True)
    assert len(res.rolls) == 2  # 1d8 rolled twice
    assert res.critical
    assert res.total >= 4


def test_scripted_source_flows_through(scripted_source):
    rs = Dnd5eRuleset(source=scripted_source(5, 6, 3, 8))
    res = rs.roll_damage(DamageInput(2, DieType.d8, 4, DamageType.slashing), is_critical=True)
    assert res.total == 26


def test_resistance_and_distribution(ruleset):
    base = DamageResult(total=20, rolls=(6, 6, 8), modifier=0, damage_type=DamageType.fire)
    assert ruleset.apply_resistance(base, ResistanceType.resistant).final_damage == 10
    out = ruleset.distribute_damage(
        base, [DamageTarget("1", "A", ResistanceType.immune), DamageTarget("2", "B")]
    )
    assert all(isinstance(r, TargetDamage) for r in out)
    assert [r.final_damage for r in out] == [0, 20]


def test_apply_damage_and_healing(ruleset):
    # Damage with temp HP
    hp, temp = ruleset.apply_damage(current_hp=10, damage_amount=7, temp_hp=5)
    assert temp == 0
    assert hp == 8  # 5 temp absorbed, 2 to HP
    # Temp HP soaks the whole hit
    hp, temp = ruleset.apply_damage(current_hp=10, damage_amount=3, temp_hp=5)
    assert (hp, temp) == (10, 2)
    # HP never drops below zero
    hp, temp = ruleset.apply_damage(current_hp=4, damage_amount=30)
    assert (hp, temp) == (0, 0)
    # Healing
    healed = ruleset.apply_healing(current_hp=8, max_hp=10, healing_amount=5)
    assert healed == 10  # Not above max
    healed = ruleset.apply_healing(current_hp=5, max_hp=10, healing_amount=3)
    assert healed == 8


def test_negative_hp_changes_rejected(ruleset):
    with pytest.raises(InvalidDamageInputError):
        ruleset.apply_damage(current_hp=10, damage_amount=-1)
    with pytest.raises(InvalidDamageInputError):
        ruleset.apply_healing(current_hp=5, max_hp=10, healing_amount=-2)
