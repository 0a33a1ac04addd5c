# schemas.py

from pydantic import BaseModel, ConfigDict, Field, field_validator

from Skirmisher.rules.dice import DieType
from Skirmisher.rules.types import DamageInput, DamageTarget, DamageType, ResistanceType


class DamagePreset(BaseModel):
    """A named damage template (weapon or spell) for quick rolls."""

    id: str = Field(min_length=1)
    name: str
    description: str = ""
    dice_count: int = Field(ge=0)
    die: DieType
    modifier: int = 0
    damage_type: DamageType
    tags: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, extra="forbid")

    @field_validator("die", mode="before")
    @classmethod
    def _coerce_die(cls, v):
        return DieType.parse(v)

    def to_input(self, modifier: int | None = None) -> DamageInput:
        return DamageInput(
            dice_count=self.dice_count,
            die=self.die,
            modifier=self.modifier if modifier is None else modifier,
            damage_type=self.damage_type,
        )


class TargetSpec(BaseModel):
    """External (JSON/CLI) form of a damage target."""

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    resistance: ResistanceType = ResistanceType.normal

    model_config = ConfigDict(extra="forbid")

    @classmethod
    def parse(cls, text: str) -> "TargetSpec":
        """Parse ``id:name[:resistance]``."""
        parts = text.split(":")
        if len(parts) not in (2, 3):
            raise ValueError(f"expected id:name[:resistance], got {text!r}")
        data = {"id": parts[0].strip(), "name": parts[1].strip()}
        if len(parts) == 3 and parts[2].strip():
            data["resistance"] = parts[2].strip().lower()
        return cls.model_validate(data)

    def to_target(self) -> DamageTarget:
        return DamageTarget(id=self.id, name=self.name, resistance=self.resistance)
