import pytest
from pydantic import ValidationError

from Skirmisher.presets import COMMON_DAMAGE_PRESETS
from Skirmisher.rules.dice import DieType
from Skirmisher.rules.types import DAMAGE_TYPE_CATEGORIES, DamageType, ResistanceType
from Skirmisher.schemas import DamagePreset, TargetSpec


def test_builtin_presets_are_unique_and_valid():
    ids = [p.id for p in COMMON_DAMAGE_PRESETS]
    assert len(ids) == len(set(ids))
    fireball = next(p for p in COMMON_DAMAGE_PRESETS if p.id == "fireball")
    assert (fireball.dice_count, fireball.die, fireball.damage_type) == (8, DieType.d6, DamageType.fire)
    assert "area" in fireball.tags


def test_preset_to_input_override():
    p = DamagePreset(id="x", name="X", dice_count=2, die=8, modifier=1, damage_type="cold")
    assert p.die is DieType.d8
    assert p.to_input().modifier == 1
    assert p.to_input(modifier=-2).modifier == -2
    assert p.to_input().dice_count == 2


def test_preset_rejects_bad_die_and_negative_count():
    with pytest.raises(ValidationError):
        DamagePreset(id="x", name="X", dice_count=1, die="d7", damage_type="cold")
    with pytest.raises(ValidationError):
        DamagePreset(id="x", name="X", dice_count=-1, die="d6", damage_type="cold")


def test_target_spec_parse():
    t = TargetSpec.parse("g1:Goblin Boss:Resistant")
    assert t.resistance is ResistanceType.resistant
    target = t.to_target()
    assert (target.id, target.name) == ("g1", "Goblin Boss")
    assert TargetSpec.parse("o1:Orc").resistance is ResistanceType.normal


@pytest.mark.parametrize("text", ["onlyid", "a:b:c:d", ":Nameless", "a:b:absorbs"])
def test_target_spec_rejects(text):
    with pytest.raises(ValueError):
        TargetSpec.parse(text)


def test_damage_type_categories_cover_every_type():
    covered = [t for group in DAMAGE_TYPE_CATEGORIES.values() for t in group]
    assert sorted(covered) == sorted(DamageType)
