"""Built-in damage presets for common weapons and spells."""

from Skirmisher.schemas import DamagePreset

COMMON_DAMAGE_PRESETS: tuple[DamagePreset, ...] = (
    DamagePreset(
        id="shortsword",
        name="Shortsword",
        description="Standard shortsword attack",
        dice_count=1,
        die="d6",
        damage_type="piercing",
        tags=["weapon", "finesse", "light"],
    ),
    DamagePreset(
        id="longsword",
        name="Longsword (One-handed)",
        description="Longsword wielded in one hand",
        dice_count=1,
        die="d8",
        damage_type="slashing",
        tags=["weapon", "versatile"],
    ),
    DamagePreset(
        id="longsword-two-handed",
        name="Longsword (Two-handed)",
        description="Longsword wielded in two hands",
        dice_count=1,
        die="d10",
        damage_type="slashing",
        tags=["weapon", "versatile", "two-handed"],
    ),
    DamagePreset(
        id="fireball",
        name="Fireball",
        description="3rd level fireball spell",
        dice_count=8,
        die="d6",
        damage_type="fire",
        tags=["spell", "evocation", "area"],
    ),
    DamagePreset(
        id="burning-hands",
        name="Burning Hands",
        description="1st level burning hands spell",
        dice_count=3,
        die="d6",
        damage_type="fire",
        tags=["spell", "evocation", "area"],
    ),
    DamagePreset(
        id="magic-missile",
        name="Magic Missile",
        description="Single magic missile dart",
        dice_count=1,
        die="d4",
        modifier=1,
        damage_type="force",
        tags=["spell", "evocation", "automatic"],
    ),
)
