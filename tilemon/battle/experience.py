"""Experience curve, level-up handling & move learning.

- Single growth curve: total EXP for a level is floor(4 * L^3 / 5).
- One reward may carry a combatant across several levels; stats are
  recomputed per level and current HP rises by the max-HP delta.
- Moves unlocked along the way are reported, not learned; callers decide
  what to do with them through ``learn_move``.
"""
from __future__ import annotations
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from tilemon.battle.models import (
    Combatant, EvolutionData, MoveSlot, SpeciesDefinition, StatBlock, MAX_MOVE_SLOTS,
)
from tilemon.core.logging import logger
from tilemon.data.moves import get_move

MIN_LEVEL = 1
MAX_LEVEL = 100
TRAINER_EXP_MULTIPLIER = 1.5
EXP_YIELD_DIVISOR = 7


def clamp_level(level: int) -> int:
    return max(MIN_LEVEL, min(int(level), MAX_LEVEL))


def experience_for_level(level: int) -> int:
    """Total EXP required to be at the given level."""
    return 4 * level ** 3 // 5


def compute_stats(base: StatBlock, level: int) -> StatBlock:
    def other(v: int) -> int:
        return (2 * v * level) // 100 + 5
    return StatBlock(
        hp=(2 * base.hp * level) // 100 + level + 10,
        atk=other(base.atk),
        def_=other(base.def_),
        spa=other(base.spa),
        spd=other(base.spd),
        spe=other(base.spe),
    )


def level_up_moves(species: SpeciesDefinition, from_level: int, to_level: int) -> List[str]:
    """Move ids unlocked in (from_level, to_level], table order, first occurrence kept."""
    learned: List[str] = []
    for entry in species.level_up_moves:
        if entry.level <= from_level or entry.level > to_level:
            continue
        if entry.move_id not in learned:
            learned.append(entry.move_id)
    return learned


@dataclass
class LevelUpResult:
    levels_gained: int = 0
    levels_reached: List[int] = field(default_factory=list)
    unlocked_moves: List[str] = field(default_factory=list)


def grant_experience(combatant: Combatant, amount: int) -> LevelUpResult:
    result = LevelUpResult()
    start_level = combatant.level
    combatant.exp += max(0, int(amount))
    while combatant.level < MAX_LEVEL and combatant.exp >= experience_for_level(combatant.level + 1):
        old_max = combatant.max_hp
        combatant.level += 1
        combatant.stats = compute_stats(combatant.species.base_stats, combatant.level)
        combatant.current_hp = min(combatant.max_hp, combatant.current_hp + combatant.max_hp - old_max)
        result.levels_gained += 1
        result.levels_reached.append(combatant.level)
    if result.levels_gained:
        result.unlocked_moves = level_up_moves(combatant.species, start_level, combatant.level)
        logger.debug("LevelUp", name=combatant.name, level=combatant.level,
                     gained=result.levels_gained, unlocked=",".join(result.unlocked_moves))
    return result


class LearnResult(str, Enum):
    LEARNED = "learned"
    ALREADY_KNOWN = "already-known"
    NO_FREE_SLOT = "no-slot"


def learn_move(combatant: Combatant, move_id: str) -> LearnResult:
    if combatant.slot_for(move_id) is not None:
        return LearnResult.ALREADY_KNOWN
    if len(combatant.moves) >= MAX_MOVE_SLOTS:
        return LearnResult.NO_FREE_SLOT
    move = get_move(move_id)
    combatant.moves.append(MoveSlot(move_id=move.id, pp=move.pp, max_pp=move.pp))
    return LearnResult.LEARNED


def pending_evolution(combatant: Combatant) -> Optional[EvolutionData]:
    evolution = combatant.species.evolution
    if evolution is None or combatant.level < evolution.min_level:
        return None
    return evolution


def experience_yield(defeated: Combatant, *, is_trainer: bool = False) -> int:
    """EXP awarded for knocking out ``defeated``."""
    base = defeated.species.base_exp * defeated.level / EXP_YIELD_DIVISOR
    if is_trainer:
        base *= TRAINER_EXP_MULTIPLIER
    return max(1, math.floor(base))


__all__ = [
    "experience_for_level", "compute_stats", "grant_experience", "LevelUpResult",
    "learn_move", "LearnResult", "pending_evolution", "experience_yield",
    "level_up_moves", "clamp_level", "MIN_LEVEL", "MAX_LEVEL",
]
