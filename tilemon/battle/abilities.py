"""Ability hooks consulted at fixed points of move resolution.

Hooks:
  entry_aura      battle start (Intimidate)
  pre_hit         before accuracy-passed moves land (immunity / absorb)
  attack_boost    attack stat adjustment (Guts)
  damage_modifier low-HP starter boosts, Flash Fire boost, Thick Fat
  survive_hit     one-time endurance (Sturdy)
  contact         post-damage proc on physical hits (Static)

One-shot hooks are guarded by flags on ``Combatant.ability_state``, which
is cleared on battle entry.
"""
from __future__ import annotations
from typing import List, Optional, Tuple

from tilemon.battle import messages
from tilemon.battle.models import Combatant, MoveDefinition
from tilemon.battle.rng import RandomSource
from tilemon.core.types import TypeId, StatKey, StatusId, MoveCategory
from tilemon.data.abilities import AbilityId, ability_name

LOW_HP_BOOSTS = {
    AbilityId.OVERGROW: TypeId.GRASS,
    AbilityId.BLAZE: TypeId.FIRE,
    AbilityId.TORRENT: TypeId.WATER,
}
IMMUNITIES = {AbilityId.LEVITATE: TypeId.GROUND}
ABSORB_HEAL = {
    AbilityId.WATER_ABSORB: TypeId.WATER,
    AbilityId.VOLT_ABSORB: TypeId.ELECTRIC,
}
ABSORB_BOOST = {AbilityId.FLASH_FIRE: TypeId.FIRE}
RESISTED_BY_THICK_FAT = (TypeId.FIRE, TypeId.ICE)

LOW_HP_MULTIPLIER = 1.5
FLASH_FIRE_MULTIPLIER = 1.5
THICK_FAT_MULTIPLIER = 0.5
GUTS_MULTIPLIER = 1.5
ABSORB_HEAL_DIVISOR = 4
STATIC_CHANCE = 0.3


def _intercepted_type(ability: AbilityId) -> Optional[TypeId]:
    for table in (IMMUNITIES, ABSORB_HEAL, ABSORB_BOOST):
        if ability in table:
            return table[ability]
    return None


def entry_aura(holder: Combatant, target: Combatant) -> List[str]:
    if holder.ability is not AbilityId.INTIMIDATE or holder.ability_state.intimidate_applied:
        return []
    holder.ability_state.intimidate_applied = True
    delta = target.stages.shift(StatKey.ATK, -1)
    return [
        f"{holder.name}'s {ability_name(holder.ability)}!",
        messages.stage_message(target.name, StatKey.ATK, delta),
    ]


def would_intercept(defender: Combatant, move: MoveDefinition) -> bool:
    return _intercepted_type(defender.ability) is move.type


def pre_hit(attacker: Combatant, defender: Combatant, move: MoveDefinition) -> Optional[List[str]]:
    """Return the interception messages, or None to let the move through."""
    if not would_intercept(defender, move):
        return None
    ability = defender.ability
    name = ability_name(ability)
    if ability in IMMUNITIES:
        return [f"It doesn't affect {defender.name} thanks to its {name}!"]
    if ability in ABSORB_HEAL:
        heal = max(1, defender.max_hp // ABSORB_HEAL_DIVISOR)
        healed = min(heal, defender.max_hp - defender.current_hp)
        if healed <= 0:
            return [f"{defender.name}'s {name} made the move useless!"]
        defender.current_hp += healed
        return [f"{defender.name} restored HP using its {name}!"]
    # Flash Fire
    if defender.ability_state.flash_fire_boosted:
        return [f"{defender.name}'s {name} made the move useless!"]
    defender.ability_state.flash_fire_boosted = True
    return [f"{defender.name}'s {name} raised the power of its Fire-type moves!"]


def attack_boost(attacker: Combatant, move: MoveDefinition) -> float:
    if (attacker.ability is AbilityId.GUTS and attacker.status is not StatusId.NONE
            and move.category is MoveCategory.PHYSICAL):
        return GUTS_MULTIPLIER
    return 1.0


def suppresses_burn(attacker: Combatant) -> bool:
    return attacker.ability is AbilityId.GUTS


def damage_modifier(attacker: Combatant, defender: Combatant, move: MoveDefinition) -> float:
    mult = 1.0
    boosted_type = LOW_HP_BOOSTS.get(attacker.ability)
    if boosted_type is move.type and attacker.current_hp * 3 <= attacker.max_hp:
        mult *= LOW_HP_MULTIPLIER
    if (ABSORB_BOOST.get(attacker.ability) is move.type
            and attacker.ability_state.flash_fire_boosted):
        mult *= FLASH_FIRE_MULTIPLIER
    if defender.ability is AbilityId.THICK_FAT and move.type in RESISTED_BY_THICK_FAT:
        mult *= THICK_FAT_MULTIPLIER
    return mult


def survive_hit(defender: Combatant, damage: int) -> Tuple[int, Optional[str]]:
    if (defender.ability is not AbilityId.STURDY or defender.ability_state.sturdy_used
            or defender.current_hp < defender.max_hp or damage < defender.current_hp):
        return damage, None
    defender.ability_state.sturdy_used = True
    return defender.current_hp - 1, f"{defender.name} endured the hit!"


def contact(attacker: Combatant, defender: Combatant, move: MoveDefinition,
            damage: int, rng: RandomSource) -> Optional[str]:
    if (damage <= 0 or move.category is not MoveCategory.PHYSICAL
            or defender.ability is not AbilityId.STATIC
            or attacker.status is not StatusId.NONE):
        return None
    if rng.random() >= STATIC_CHANCE:
        return None
    attacker.status = StatusId.PARALYZE
    attacker.status_turns = 0
    return f"{defender.name}'s {ability_name(defender.ability)} paralyzed {attacker.name}!"


__all__ = [
    "entry_aura", "would_intercept", "pre_hit", "attack_boost", "suppresses_burn",
    "damage_modifier", "survive_hit", "contact",
]
