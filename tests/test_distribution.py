import pytest

from Skirmisher.rules.damage import distribute_damage
from Skirmisher.rules.types import (
    DamageResult,
    DamageTarget,
    DamageType,
    DistributionMethod,
    ResistanceType,
)


def _base(total: int) -> DamageResult:
    return DamageResult(total=total, rolls=(6, 6, 6, 6), modifier=0, damage_type=DamageType.thunder)


def test_equal_damage_to_all_targets():
    targets = [DamageTarget(str(i), f"Goblin {i}") for i in (1, 2, 3)]
    out = distribute_damage(_base(18), targets, DistributionMethod.equal)
    assert len(out) == 3
    for r in out:
        assert r.final_damage == 18
        assert r.resistance is ResistanceType.normal


def test_mixed_resistances():
    targets = [
        DamageTarget("1", "Fire Elemental", ResistanceType.immune),
        DamageTarget("2", "Ice Troll", ResistanceType.vulnerable),
        DamageTarget("3", "Stone Golem", ResistanceType.resistant),
    ]
    out = distribute_damage(_base(20), targets, "equal")
    assert [r.final_damage for r in out] == [0, 40, 10]
    assert [r.target_name for r in out] == ["Fire Elemental", "Ice Troll", "Stone Golem"]
    assert [r.target_id for r in out] == ["1", "2", "3"]


def test_half_damage():
    targets = [DamageTarget("1", "Target 1"), DamageTarget("2", "Target 2")]
    out = distribute_damage(_base(24), targets, DistributionMethod.half)
    assert [r.final_damage for r in out] == [12, 12]
    assert all(r.original_damage == 12 for r in out)
    # The shared base result is left untouched
    assert all(r.total == 24 for r in out)


def test_half_then_resistance_floors_twice():
    targets = [
        DamageTarget("a", "Resistant", ResistanceType.resistant),
        DamageTarget("b", "Vulnerable", ResistanceType.vulnerable),
    ]
    out = distribute_damage(_base(15), targets, "half")
    # floor(15 / 2) = 7 -> floor(7 / 2) = 3 and 7 * 2 = 14
    assert [r.final_damage for r in out] == [3, 14]


def test_custom_behaves_like_equal():
    targets = [DamageTarget("1", "A", ResistanceType.resistant), DamageTarget("2", "B")]
    eq = distribute_damage(_base(13), targets, DistributionMethod.equal)
    custom = distribute_damage(_base(13), targets, DistributionMethod.custom)
    assert [r.final_damage for r in eq] == [r.final_damage for r in custom] == [6, 13]


def test_default_method_is_equal():
    out = distribute_damage(_base(9), [DamageTarget("1", "A")])
    assert out[0].final_damage == 9


def test_empty_targets_yields_empty_list():
    assert distribute_damage(_base(9), [], "half") == []


def test_order_is_preserved():
    targets = [DamageTarget(str(i), f"T{i}") for i in range(10, 0, -1)]
    out = distribute_damage(_base(4), targets)
    assert [r.target_id for r in out] == [t.id for t in targets]


def test_unknown_method_rejected():
    with pytest.raises(ValueError):
        distribute_damage(_base(4), [DamageTarget("1", "A")], "split")
