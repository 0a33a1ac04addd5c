from dataclasses import dataclass
from enum import Enum
from fractions import Fraction

from Skirmisher.rules.dice import DieType


class DamageType(str, Enum):
    acid = "acid"
    bludgeoning = "bludgeoning"
    cold = "cold"
    fire = "fire"
    force = "force"
    lightning = "lightning"
    necrotic = "necrotic"
    piercing = "piercing"
    poison = "poison"
    psychic = "psychic"
    radiant = "radiant"
    slashing = "slashing"
    thunder = "thunder"


class ResistanceType(str, Enum):
    normal = "normal"
    resistant = "resistant"
    vulnerable = "vulnerable"
    immune = "immune"


class DistributionMethod(str, Enum):
    equal = "equal"
    half = "half"
    # Accepted for callers that override per target themselves; behaves like equal.
    custom = "custom"


RESISTANCE_MULTIPLIERS: dict[ResistanceType, Fraction] = {
    ResistanceType.normal: Fraction(1),
    ResistanceType.resistant: Fraction(1, 2),
    ResistanceType.vulnerable: Fraction(2),
    ResistanceType.immune: Fraction(0),
}

DAMAGE_TYPE_CATEGORIES: dict[str, tuple[DamageType, ...]] = {
    "physical": (DamageType.bludgeoning, DamageType.piercing, DamageType.slashing),
    "elemental": (
        DamageType.acid,
        DamageType.cold,
        DamageType.fire,
        DamageType.lightning,
        DamageType.thunder,
    ),
    "energy": (DamageType.force, DamageType.necrotic, DamageType.radiant),
    "mental": (DamageType.psychic,),
    "toxic": (DamageType.poison,),
}


@dataclass(frozen=True)
class DamageInput:
    dice_count: int
    die: DieType
    modifier: int = 0
    damage_type: DamageType = DamageType.bludgeoning


@dataclass(frozen=True)
class DamageResult:
    total: int
    rolls: tuple[int, ...]
    modifier: int
    damage_type: DamageType
    critical: bool = False


@dataclass(frozen=True)
class ResistedDamage(DamageResult):
    final_damage: int = 0
    resistance: ResistanceType = ResistanceType.normal
    original_damage: int = 0


@dataclass(frozen=True)
class DamageTarget:
    id: str
    name: str
    resistance: ResistanceType = ResistanceType.normal


@dataclass(frozen=True)
class TargetDamage(ResistedDamage):
    target_id: str = ""
    target_name: str = ""


@dataclass(frozen=True)
class DamageStatistics:
    minimum: int
    maximum: int
    average: float
    expected_damage: float
