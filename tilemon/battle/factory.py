"""Factory helpers for constructing Combatant instances from species data.

Shared across the battle session, save records, the debug runner and tests.
"""
from __future__ import annotations
import uuid
from functools import lru_cache
from typing import Dict, Iterable, List, Optional, Tuple

from tilemon.battle.experience import clamp_level, compute_stats, experience_for_level
from tilemon.battle.models import (
    AbilityState, Combatant, MoveSlot, SpeciesDefinition, StatStages, MAX_MOVE_SLOTS,
)
from tilemon.core.errors import ValidationError
from tilemon.core.types import StatusId, TypeId
from tilemon.data.moves import get_move, has_move

# Fallback moves per type when the learnset leaves slots open
TYPE_MOVES: Dict[TypeId, Tuple[str, ...]] = {
    TypeId.ELECTRIC: ("thunder_shock", "spark", "thunderbolt", "thunder", "quick_attack", "growl"),
    TypeId.GRASS: ("vine_whip", "razor_leaf", "leaf_blade", "solar_beam", "sleep_powder", "growl"),
    TypeId.POISON: ("poison_sting", "sludge", "sludge_bomb", "tail_whip", "leer"),
    TypeId.FIRE: ("ember", "flame_wheel", "flamethrower", "fire_blast", "scratch", "growl"),
    TypeId.WATER: ("water_gun", "bubble_beam", "surf", "hydro_pump", "tail_whip", "tackle"),
    TypeId.NORMAL: ("tackle", "pound", "quick_attack", "body_slam", "slam", "hyper_fang", "growl"),
    TypeId.BUG: ("bug_bite", "x_scissor", "tackle", "growl"),
    TypeId.FLYING: ("wing_attack", "aerial_ace", "quick_attack", "growl"),
    TypeId.GROUND: ("mud_shot", "earthquake", "tackle", "tail_whip"),
    TypeId.ROCK: ("rock_throw", "rock_slide", "tackle", "harden"),
    TypeId.PSYCHIC: ("confusion", "psybeam", "psychic", "agility", "growl"),
    TypeId.ICE: ("ice_beam", "blizzard", "tackle", "harden"),
    TypeId.FIGHTING: ("karate_chop", "brick_break", "tackle", "leer"),
    TypeId.GHOST: ("shadow_ball", "tackle", "growl"),
    TypeId.DRAGON: ("dragon_breath", "dragon_claw", "scratch", "growl"),
    TypeId.DARK: ("bite", "crunch", "quick_attack", "leer"),
    TypeId.STEEL: ("metal_claw", "tackle", "harden"),
    TypeId.FAIRY: ("disarming_voice", "moonblast", "tail_whip", "growl"),
}
PADDING_MOVES = ("tackle", "growl", "quick_attack", "tail_whip")


@lru_cache(maxsize=None)
def validate_type_moves() -> None:
    """Fail fast if the suggestion table names a move the move table lacks."""
    for type_id, move_ids in TYPE_MOVES.items():
        for move_id in move_ids:
            if not has_move(move_id):
                raise ValidationError(f"suggested {type_id.value} move {move_id} is not defined")
    for move_id in PADDING_MOVES:
        if not has_move(move_id):
            raise ValidationError(f"padding move {move_id} is not defined")


def _add_unique(selected: List[str], move_ids: Iterable[str]):
    for move_id in move_ids:
        if len(selected) >= MAX_MOVE_SLOTS:
            return
        if move_id not in selected:
            selected.append(move_id)


def moves_for_level(species: SpeciesDefinition, level: int) -> List[str]:
    """The most recently unlocked (up to 4) level-up moves at or below ``level``."""
    ordered = sorted(species.level_up_moves, key=lambda e: e.level)
    return [e.move_id for e in ordered if e.level <= level][-MAX_MOVE_SLOTS:]


def suggested_moves(species: SpeciesDefinition, level: int,
                    overrides: Optional[Iterable[str]] = None) -> List[str]:
    validate_type_moves()
    overrides = list(overrides or ())
    selected: List[str] = []
    _add_unique(selected, overrides if overrides else moves_for_level(species, level))
    for type_id in species.types:
        _add_unique(selected, TYPE_MOVES.get(type_id, ()))
    _add_unique(selected, PADDING_MOVES)
    return selected


def build_move_slots(move_ids: Iterable[str]) -> List[MoveSlot]:
    slots = []
    for move_id in list(move_ids)[:MAX_MOVE_SLOTS]:
        move = get_move(move_id)
        slots.append(MoveSlot(move_id=move.id, pp=move.pp, max_pp=move.pp))
    return slots


def create_combatant(species: SpeciesDefinition, level: int,
                     move_overrides: Optional[Iterable[str]] = None, *,
                     nickname: Optional[str] = None) -> Combatant:
    level = clamp_level(level)
    stats = compute_stats(species.base_stats, level)
    return Combatant(
        uid=f"{species.key}-{uuid.uuid4().hex[:8]}",
        species=species,
        name=nickname or species.name,
        level=level,
        exp=experience_for_level(level),
        stats=stats,
        current_hp=stats.hp,
        moves=build_move_slots(suggested_moves(species, level, move_overrides)),
    )


def reset_for_new_battle(combatant: Combatant):
    combatant.stages = StatStages()
    combatant.ability_state = AbilityState()
    if combatant.status is not StatusId.SLEEP:
        combatant.status_turns = 0


__all__ = [
    "create_combatant", "compute_stats", "reset_for_new_battle", "suggested_moves",
    "moves_for_level", "build_move_slots", "validate_type_moves", "TYPE_MOVES", "PADDING_MOVES",
]
