from __future__ import annotations

from collections.abc import Sequence

import structlog

from Skirmisher.config import LimitsConfig, Settings
from Skirmisher.errors import (
    DamageCalculationLimitError,
    DamageCalculationServiceError,
    InvalidDamageInputError,
    PresetNotFoundError,
    UnsupportedDieError,
)
from Skirmisher.metrics import inc_counter, observe_histogram
from Skirmisher.presets import COMMON_DAMAGE_PRESETS
from Skirmisher.rules.dice import DiceRoll, DieType, parse_dice_spec
from Skirmisher.rules.engine import Dnd5eRuleset, Ruleset
from Skirmisher.rules.types import (
    DamageInput,
    DamageResult,
    DamageStatistics,
    DamageTarget,
    DamageType,
    DistributionMethod,
    ResistanceType,
    ResistedDamage,
    TargetDamage,
)
from Skirmisher.schemas import DamagePreset

log = structlog.get_logger()


class DamageCalculationService:
    """Validating facade over the damage rules.

    Inputs are checked against the configured limits before any dice are rolled;
    unexpected engine failures come back as ``DamageCalculationServiceError``.
    """

    def __init__(
        self,
        ruleset: Ruleset | None = None,
        settings: Settings | None = None,
        presets: Sequence[DamagePreset] | None = None,
    ):
        seed = settings.dice_seed if settings is not None else None
        self.ruleset = ruleset if ruleset is not None else Dnd5eRuleset(seed)
        self.limits: LimitsConfig = settings.limits if settings is not None else LimitsConfig()
        self._presets: list[DamagePreset] = list(
            presets if presets is not None else COMMON_DAMAGE_PRESETS
        )

    # -- calculations -------------------------------------------------------

    def roll_expression(self, expr: str) -> DiceRoll:
        """Roll a raw ``XdY+Z`` expression after checking it against the limits."""
        count, die, mod = parse_dice_spec(expr)
        self._validate_input(DamageInput(count, die, mod))
        return self.ruleset.roll_dice(expr)

    def calculate_damage(self, inp: DamageInput) -> DamageResult:
        self._validate_input(inp)
        try:
            res = self.ruleset.roll_damage(inp)
        except DamageCalculationServiceError:
            raise
        except Exception as e:
            inc_counter("damage.calculate.error")
            raise DamageCalculationServiceError(f"Failed to calculate damage: {e}") from e
        self._record(res)
        return res

    def calculate_critical_damage(self, inp: DamageInput) -> DamageResult:
        self._validate_input(inp)
        try:
            res = self.ruleset.roll_damage(inp, is_critical=True)
        except DamageCalculationServiceError:
            raise
        except Exception as e:
            inc_counter("damage.calculate.error")
            raise DamageCalculationServiceError(
                f"Failed to calculate critical damage: {e}"
            ) from e
        inc_counter("damage.critical.ok")
        self._record(res)
        return res

    def calculate_damage_with_resistance(
        self, base: DamageResult, resistance: ResistanceType | str
    ) -> ResistedDamage:
        self._validate_base(base)
        try:
            out = self.ruleset.apply_resistance(base, ResistanceType(resistance))
        except Exception as e:
            raise DamageCalculationServiceError(f"Failed to apply resistance: {e}") from e
        inc_counter("damage.resistance.ok")
        return out

    def distribute_damage_to_targets(
        self,
        base: DamageResult,
        targets: Sequence[DamageTarget],
        method: DistributionMethod | str = DistributionMethod.equal,
    ) -> list[TargetDamage]:
        self._validate_base(base)
        self._validate_targets(targets)
        try:
            out = self.ruleset.distribute_damage(base, targets, DistributionMethod(method))
        except Exception as e:
            raise DamageCalculationServiceError(f"Failed to distribute damage: {e}") from e
        inc_counter("damage.distribute.ok")
        log.info(
            "damage.distribute.ok",
            method=DistributionMethod(method).value,
            base=base.total,
            results=[(t.target_id, t.final_damage) for t in out],
        )
        return out

    # -- presets -------------------------------------------------------------

    def get_preset_by_name(self, name: str) -> DamagePreset | None:
        return next((p for p in self._presets if p.id == name), None)

    def get_all_presets(self) -> list[DamagePreset]:
        return list(self._presets)

    def get_presets_by_tag(self, tag: str) -> list[DamagePreset]:
        return [p for p in self._presets if tag in p.tags]

    def calculate_damage_from_preset(
        self, name: str, modifier_override: int | None = None
    ) -> DamageResult:
        preset = self.get_preset_by_name(name)
        if preset is None:
            inc_counter("damage.preset.miss")
            raise PresetNotFoundError(name)
        return self.calculate_damage(preset.to_input(modifier_override))

    # -- statistics ----------------------------------------------------------

    def get_damage_statistics(self, inp: DamageInput) -> DamageStatistics:
        self._validate_input(inp)
        sides = DieType.parse(inp.die).sides
        minimum = max(0, inp.dice_count + inp.modifier)
        maximum = max(0, inp.dice_count * sides + inp.modifier)
        average = max(0.0, inp.dice_count * (1 + sides) / 2 + inp.modifier)
        return DamageStatistics(
            minimum=minimum, maximum=maximum, average=average, expected_damage=average
        )

    # -- validation ----------------------------------------------------------

    def _validate_input(self, inp: DamageInput) -> None:
        try:
            self._check_input(inp)
        except DamageCalculationServiceError as e:
            inc_counter("damage.validation.rejected")
            log.warning("damage.validation.rejected", reason=str(e))
            raise

    def _check_input(self, inp: DamageInput) -> None:
        lim = self.limits
        if inp.dice_count < 0:
            raise InvalidDamageInputError("dice_count", inp.dice_count, "Must be non-negative")
        if inp.dice_count > lim.max_dice_count:
            raise DamageCalculationLimitError("Dice count", inp.dice_count, lim.max_dice_count)
        if inp.modifier < lim.min_modifier:
            raise DamageCalculationLimitError("Modifier", inp.modifier, lim.min_modifier)
        if inp.modifier > lim.max_modifier:
            raise DamageCalculationLimitError("Modifier", inp.modifier, lim.max_modifier)
        try:
            DieType.parse(inp.die)
        except UnsupportedDieError:
            raise InvalidDamageInputError("die", inp.die, "Must be a valid dice type") from None
        if inp.damage_type not in set(DamageType):
            raise InvalidDamageInputError(
                "damage_type", inp.damage_type, "Must be a valid damage type"
            )

    def _validate_base(self, base: DamageResult | None) -> None:
        if base is None:
            raise InvalidDamageInputError("base", base, "Cannot be None")
        if isinstance(base.total, bool) or not isinstance(base.total, int) or base.total < 0:
            raise InvalidDamageInputError("total", base.total, "Must be a non-negative integer")
        if not isinstance(base.rolls, (list, tuple)):
            raise InvalidDamageInputError("rolls", base.rolls, "Must be a sequence of rolls")

    def _validate_targets(self, targets: Sequence[DamageTarget]) -> None:
        if not targets:
            raise InvalidDamageInputError("targets", len(targets or ()), "Must have at least one target")
        if len(targets) > self.limits.max_targets:
            raise DamageCalculationLimitError("Target count", len(targets), self.limits.max_targets)
        for i, t in enumerate(targets):
            if not t.id:
                raise InvalidDamageInputError(f"targets[{i}].id", t.id, "Target ID is required")
            if not t.name:
                raise InvalidDamageInputError(f"targets[{i}].name", t.name, "Target name is required")
            if not t.resistance:
                raise InvalidDamageInputError(
                    f"targets[{i}].resistance", t.resistance, "Resistance type is required"
                )

    def _record(self, res: DamageResult) -> None:
        inc_counter("damage.calculate.ok")
        observe_histogram("damage.total", res.total)
        log.info(
            "damage.calculate.ok",
            rolls=list(res.rolls),
            modifier=res.modifier,
            damage_type=res.damage_type.value,
            total=res.total,
            critical=res.critical,
        )
