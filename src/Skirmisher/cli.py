"""
Command line front end for the damage service.

Examples:
  skirmisher roll 2d6+3
  skirmisher damage 2d8 --modifier 4 --type slashing --crit
  skirmisher distribute 8d6 --type fire --method half -t g1:Goblin -t e1:Efreeti:immune
  skirmisher --json stats 2d6 --modifier 3
"""
from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any

import click
import orjson
import structlog

from Skirmisher.config import load_settings
from Skirmisher.errors import SkirmisherError
from Skirmisher.logging import settings_snapshot, setup_logging
from Skirmisher.metrics import set_enabled
from Skirmisher.rules.dice import parse_dice_spec
from Skirmisher.rules.types import DamageInput, DamageType, DistributionMethod, ResistanceType
from Skirmisher.schemas import TargetSpec
from Skirmisher.services.damage_service import DamageCalculationService

log = structlog.get_logger()


def _choices(enum_cls: type[Enum]) -> click.Choice:
    return click.Choice([e.value for e in enum_cls], case_sensitive=False)


def _to_jsonable(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj):
        return {k: _to_jsonable(v) for k, v in dataclasses.asdict(obj).items()}
    if hasattr(obj, "model_dump"):
        return obj.model_dump(mode="json")
    if isinstance(obj, (list, tuple)):
        return [_to_jsonable(v) for v in obj]
    if isinstance(obj, dict):
        return {k: _to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, Enum):
        return obj.value
    return obj


def _emit(ctx: click.Context, payload: Any, text: str) -> None:
    if ctx.obj["json"]:
        click.echo(orjson.dumps(_to_jsonable(payload), option=orjson.OPT_INDENT_2).decode())
    else:
        click.echo(text)


def _damage_input(dice: str, modifier: int | None, damage_type: str) -> DamageInput:
    try:
        count, die, expr_mod = parse_dice_spec(dice)
    except SkirmisherError as e:
        raise click.BadParameter(str(e), param_hint="DICE") from e
    return DamageInput(
        dice_count=count,
        die=die,
        modifier=expr_mod if modifier is None else modifier,
        damage_type=DamageType(damage_type.lower()),
    )


def _fmt_rolls(rolls) -> str:
    return "[" + ", ".join(str(r) for r in rolls) + "]"


@click.group()
@click.option("--seed", type=int, default=None, help="Seed the dice for a reproducible run.")
@click.option("--json", "as_json", is_flag=True, help="Print results as JSON.")
@click.pass_context
def cli(ctx: click.Context, seed: int | None, as_json: bool) -> None:
    """Roll dice and resolve D&D 5e damage."""
    overrides = {"dice_seed": seed} if seed is not None else {}
    settings = load_settings(**overrides)
    setup_logging(settings)
    set_enabled(settings.metrics_enabled)
    log.debug("cli.startup", settings=settings_snapshot(settings))
    ctx.obj = {
        "json": as_json,
        "service": DamageCalculationService(settings=settings),
    }


@cli.command()
@click.argument("expr")
@click.pass_context
def roll(ctx: click.Context, expr: str) -> None:
    """Roll a dice expression such as 2d6+3."""
    svc: DamageCalculationService = ctx.obj["service"]
    try:
        res = svc.roll_expression(expr)
    except SkirmisherError as e:
        raise click.UsageError(str(e)) from e
    _emit(ctx, res, f"{expr} -> rolls {_fmt_rolls(res.rolls)} = {res.total}")


@cli.command()
@click.argument("dice")
@click.option("--modifier", "-m", type=int, default=None, help="Flat bonus; overrides any +Z in DICE.")
@click.option("--type", "damage_type", type=_choices(DamageType), default="bludgeoning")
@click.option("--crit", is_flag=True, help="Critical hit: roll the dice twice over.")
@click.option("--resistance", type=_choices(ResistanceType), default=None)
@click.pass_context
def damage(
    ctx: click.Context,
    dice: str,
    modifier: int | None,
    damage_type: str,
    crit: bool,
    resistance: str | None,
) -> None:
    """Roll damage for DICE (e.g. 2d6) and optionally apply a resistance."""
    svc: DamageCalculationService = ctx.obj["service"]
    inp = _damage_input(dice, modifier, damage_type)
    try:
        res = svc.calculate_critical_damage(inp) if crit else svc.calculate_damage(inp)
        if resistance is not None:
            res = svc.calculate_damage_with_resistance(res, resistance.lower())
    except SkirmisherError as e:
        raise click.UsageError(str(e)) from e
    crit_lbl = " (critical)" if res.critical else ""
    text = (
        f"{res.damage_type.value}{crit_lbl}: rolls {_fmt_rolls(res.rolls)} "
        f"{res.modifier:+d} = {res.total}"
    )
    final = getattr(res, "final_damage", None)
    if final is not None:
        text += f" -> {final} ({res.resistance.value})"
    _emit(ctx, res, text)


@cli.command()
@click.argument("dice")
@click.option(
    "--target",
    "-t",
    "targets",
    multiple=True,
    required=True,
    help="Target as id:name[:resistance]; repeat for each target.",
)
@click.option("--method", type=_choices(DistributionMethod), default="equal")
@click.option("--modifier", "-m", type=int, default=None)
@click.option("--type", "damage_type", type=_choices(DamageType), default="bludgeoning")
@click.option("--crit", is_flag=True)
@click.pass_context
def distribute(
    ctx: click.Context,
    dice: str,
    targets: tuple[str, ...],
    method: str,
    modifier: int | None,
    damage_type: str,
    crit: bool,
) -> None:
    """Roll DICE once and apply it to every target."""
    svc: DamageCalculationService = ctx.obj["service"]
    inp = _damage_input(dice, modifier, damage_type)
    try:
        parsed = [TargetSpec.parse(t).to_target() for t in targets]
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--target") from e
    try:
        base = svc.calculate_critical_damage(inp) if crit else svc.calculate_damage(inp)
        results = svc.distribute_damage_to_targets(base, parsed, method.lower())
    except SkirmisherError as e:
        raise click.UsageError(str(e)) from e
    lines = [f"{base.damage_type.value}: rolls {_fmt_rolls(base.rolls)} {base.modifier:+d} = {base.total}"]
    for r in results:
        lines.append(f"  {r.target_name} ({r.target_id}, {r.resistance.value}): {r.final_damage}")
    _emit(ctx, {"base": base, "targets": results}, "\n".join(lines))


@cli.command()
@click.option("--tag", default=None, help="Only presets carrying this tag.")
@click.pass_context
def presets(ctx: click.Context, tag: str | None) -> None:
    """List the built-in damage presets."""
    svc: DamageCalculationService = ctx.obj["service"]
    items = svc.get_presets_by_tag(tag) if tag else svc.get_all_presets()
    lines = []
    for p in items:
        mod = f"{p.modifier:+d}" if p.modifier else ""
        lines.append(f"{p.id}: {p.dice_count}{p.die.value}{mod} {p.damage_type.value} ({', '.join(p.tags)})")
    _emit(ctx, items, "\n".join(lines))


@cli.command()
@click.argument("dice")
@click.option("--modifier", "-m", type=int, default=None)
@click.pass_context
def stats(ctx: click.Context, dice: str, modifier: int | None) -> None:
    """Show min/max/average damage for DICE."""
    svc: DamageCalculationService = ctx.obj["service"]
    inp = _damage_input(dice, modifier, "bludgeoning")
    try:
        st = svc.get_damage_statistics(inp)
    except SkirmisherError as e:
        raise click.UsageError(str(e)) from e
    _emit(ctx, st, f"min {st.minimum} / max {st.maximum} / avg {st.average:g}")


def main() -> None:  # pragma: no cover
    cli()


if __name__ == "__main__":  # pragma: no cover
    main()
