"""Stage math and the shared pieces of the damage formula.

Used by the resolution engine (with crit/random terms) and by the move-choice
heuristic (expected damage, no random terms).
"""
from __future__ import annotations
import math
from typing import Tuple

from tilemon.battle import abilities
from tilemon.battle.models import Combatant, MoveDefinition, clamp_stage
from tilemon.core.types import StatKey, StatusId, MoveCategory
from tilemon.data.type_chart import type_multiplier

STAB_MULTIPLIER = 1.5
BURN_MULTIPLIER = 0.5
PARALYSIS_SPEED_MULTIPLIER = 0.5


def stage_multiplier(stage: int) -> float:
    s = clamp_stage(stage)
    return (2 + s) / 2 if s >= 0 else 2 / (2 - s)


def effective_stat(combatant: Combatant, stat: StatKey) -> int:
    adjusted = math.floor(combatant.stats[stat] * stage_multiplier(combatant.stages[stat]))
    if stat is StatKey.SPE and combatant.status is StatusId.PARALYZE:
        return math.floor(adjusted * PARALYSIS_SPEED_MULTIPLIER)
    return adjusted


def battle_stats(attacker: Combatant, defender: Combatant, move: MoveDefinition) -> Tuple[int, int]:
    """Attack and defense values for a damaging move, abilities included."""
    if move.category is MoveCategory.PHYSICAL:
        attack = effective_stat(attacker, StatKey.ATK)
        defense = effective_stat(defender, StatKey.DEF)
    else:
        attack = effective_stat(attacker, StatKey.SPA)
        defense = effective_stat(defender, StatKey.SPD)
    attack = math.floor(attack * abilities.attack_boost(attacker, move))
    return attack, max(1, defense)


def base_damage(level: int, power: int, attack: int, defense: int) -> int:
    level_factor = (2 * level) / 5 + 2
    return math.floor(((level_factor * power * attack) / max(1, defense)) / 50) + 2


def stab(attacker: Combatant, move: MoveDefinition) -> float:
    return STAB_MULTIPLIER if move.type in attacker.types else 1.0


def effectiveness(move: MoveDefinition, defender: Combatant) -> float:
    return type_multiplier(move.type, defender.types)


def burn_modifier(attacker: Combatant, move: MoveDefinition) -> float:
    if (attacker.status is StatusId.BURN and move.category is MoveCategory.PHYSICAL
            and not abilities.suppresses_burn(attacker)):
        return BURN_MULTIPLIER
    return 1.0


def expected_damage(attacker: Combatant, defender: Combatant, move: MoveDefinition) -> int:
    """Damage without crit or random roll; 0 when the move cannot hurt."""
    power = move.power or 0
    mult = effectiveness(move, defender)
    if power <= 0 or move.is_status or mult == 0:
        return 0
    attack, defense = battle_stats(attacker, defender, move)
    modifier = (stab(attacker, move) * mult
                * abilities.damage_modifier(attacker, defender, move)
                * burn_modifier(attacker, move))
    return max(1, math.floor(base_damage(attacker.level, power, attack, defense) * modifier))


__all__ = [
    "stage_multiplier", "effective_stat", "battle_stats", "base_damage", "stab",
    "effectiveness", "burn_modifier", "expected_damage",
]
