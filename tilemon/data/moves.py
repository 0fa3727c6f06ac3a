"""Runtime loader for move data.

Parses the packaged move table once into frozen MoveDefinition values.
Malformed entries fail here, at load time, never during resolution.
"""
from __future__ import annotations
import json
from functools import lru_cache
from typing import Dict, Any, Tuple

from tilemon.battle.models import MoveDefinition, MoveEffect
from tilemon.core.errors import DataLoadError, ValidationError, UnknownMoveError
from tilemon.core.logging import logger
from tilemon.core.paths import MOVES
from tilemon.core.types import TypeId, StatusId, StatKey, MoveCategory, MoveTarget

_MOVES_FILE = MOVES / "moves.json"


def _parse_effect(move_id: str, raw: Dict[str, Any]) -> MoveEffect:
    status = raw.get("status")
    status_id = StatusId(status) if status else None
    if status_id is StatusId.NONE:
        status_id = None
    chance = raw.get("status_chance")
    if chance is not None:
        chance = float(chance)
        if not 0.0 <= chance <= 1.0:
            raise ValidationError(f"{move_id}: status_chance {chance} outside [0, 1]")
    changes: Tuple[Tuple[StatKey, int], ...] = tuple(
        (StatKey(k), int(v)) for k, v in (raw.get("stat_changes") or {}).items()
    )
    return MoveEffect(
        status=status_id,
        status_chance=chance,
        stat_changes=changes,
        target=MoveTarget(raw.get("target", MoveTarget.ENEMY.value)),
    )


def parse_move(raw: Dict[str, Any]) -> MoveDefinition:
    """Build a MoveDefinition from one JSON record, validating ranges."""
    move_id = raw.get("id")
    if not move_id:
        raise ValidationError(f"move entry without id: {raw!r}")
    try:
        category = MoveCategory(raw["category"])
        accuracy = int(raw["accuracy"])
        pp = int(raw["pp"])
        power = raw.get("power")
        move = MoveDefinition(
            id=move_id,
            name=str(raw.get("name") or move_id.replace("_", " ").title()),
            type=TypeId(raw["type"]),
            category=category,
            accuracy=accuracy,
            pp=pp,
            power=int(power) if power is not None else None,
            priority=int(raw.get("priority", 0)),
            effect=_parse_effect(move_id, raw["effect"]) if raw.get("effect") else None,
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"{move_id}: {e}") from e
    if not 0 <= move.accuracy <= 100:
        raise ValidationError(f"{move_id}: accuracy {move.accuracy} outside [0, 100]")
    if move.pp <= 0:
        raise ValidationError(f"{move_id}: pp must be positive")
    if category is not MoveCategory.STATUS and not (move.power or 0) > 0:
        raise ValidationError(f"{move_id}: damaging move without power")
    return move


@lru_cache(maxsize=None)
def all_moves() -> Dict[str, MoveDefinition]:
    try:
        raw = json.loads(_MOVES_FILE.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise DataLoadError(str(_MOVES_FILE), str(e)) from e
    table: Dict[str, MoveDefinition] = {}
    for entry in raw:
        try:
            move = parse_move(entry)
        except ValidationError as e:
            raise DataLoadError(str(_MOVES_FILE), str(e)) from e
        if move.id in table:
            raise DataLoadError(str(_MOVES_FILE), f"duplicate move id {move.id}")
        table[move.id] = move
    logger.debug("DataLoaded", kind="moves", count=len(table))
    return table


def get_move(move_id: str) -> MoveDefinition:
    try:
        return all_moves()[move_id]
    except KeyError:
        raise UnknownMoveError(move_id) from None


def has_move(move_id: str) -> bool:
    return move_id in all_moves()


__all__ = ["get_move", "all_moves", "has_move", "parse_move"]
