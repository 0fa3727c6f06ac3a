"""Opponent move choice.

Scores every usable slot, adds a little jitter, then picks uniformly among
the moves that land within a margin of the best score. The randomness is
deliberate so the opponent does not repeat one move forever.
"""
from __future__ import annotations
from typing import List, Optional, Tuple

from tilemon.battle import abilities, mechanics
from tilemon.battle.models import Combatant, MoveDefinition, MoveSlot, STAGE_MAX, STAGE_MIN
from tilemon.battle.rng import RandomSource, resolve, pick
from tilemon.core.types import StatusId, MoveTarget
from tilemon.data.moves import get_move

STATUS_BASELINE = 12
FRESH_STATUS_BONUS = 40
REDUNDANT_STATUS_PENALTY = 25
STAGE_STEP_BONUS = 14
CAPPED_STAGE_PENALTY = 10
STAB_BONUS = 10
SUPER_EFFECTIVE_BONUS = 25
RESISTED_PENALTY = 12
FINISHING_BONUS = 120
IMMUNE_SCORE = -100
INTERCEPT_PENALTY = 1000
SECONDARY_STATUS_BONUS = 10
JITTER = 4
SHORTLIST_MARGIN = 8


def _status_score(attacker: Combatant, defender: Combatant, move: MoveDefinition) -> float:
    score = float(STATUS_BASELINE)
    effect = move.effect
    if effect is None:
        return score
    target = attacker if effect.target is MoveTarget.SELF else defender
    if effect.status is not None:
        if target.status is StatusId.NONE:
            if mechanics.effectiveness(move, target) > 0:
                score += FRESH_STATUS_BONUS * effect.chance
        else:
            score -= REDUNDANT_STATUS_PENALTY
    for stat, amount in effect.stat_changes:
        stage = target.stages[stat]
        if amount > 0:
            score += -CAPPED_STAGE_PENALTY if stage >= STAGE_MAX else STAGE_STEP_BONUS * amount
        elif amount < 0:
            score += -CAPPED_STAGE_PENALTY if stage <= STAGE_MIN else STAGE_STEP_BONUS * -amount
    return score * (move.accuracy / 100)


def _damage_score(attacker: Combatant, defender: Combatant, move: MoveDefinition) -> float:
    mult = mechanics.effectiveness(move, defender)
    if mult == 0:
        return IMMUNE_SCORE
    expected = mechanics.expected_damage(attacker, defender, move)
    score = expected * (move.accuracy / 100)
    if move.type in attacker.types:
        score += STAB_BONUS
    if mult > 1:
        score += SUPER_EFFECTIVE_BONUS
    elif mult < 1:
        score -= RESISTED_PENALTY
    if defender.current_hp <= expected:
        score += FINISHING_BONUS
    effect = move.effect
    if effect is not None and effect.status is not None and defender.status is StatusId.NONE:
        score += SECONDARY_STATUS_BONUS * effect.chance
    return score


def score_move(attacker: Combatant, defender: Combatant, move: MoveDefinition) -> float:
    """Deterministic part of the score (no jitter)."""
    if move.is_status:
        score = _status_score(attacker, defender, move)
        hits_opponent = move.effect is None or move.effect.target is not MoveTarget.SELF
    else:
        score = _damage_score(attacker, defender, move)
        hits_opponent = True
    if hits_opponent and abilities.would_intercept(defender, move):
        score -= INTERCEPT_PENALTY
    return score


def choose_move(attacker: Combatant, defender: Combatant,
                rng: Optional[RandomSource] = None) -> Optional[MoveSlot]:
    rng = resolve(rng)
    usable = [slot for slot in attacker.moves if slot.pp > 0]
    if not usable:
        return None
    ranked: List[Tuple[float, MoveSlot]] = []
    for slot in usable:
        score = score_move(attacker, defender, get_move(slot.move_id)) + rng.random() * JITTER
        ranked.append((score, slot))
    ranked.sort(key=lambda entry: entry[0], reverse=True)
    best = ranked[0][0]
    shortlist = [slot for score, slot in ranked if score >= best - SHORTLIST_MARGIN]
    return pick(rng, shortlist)


__all__ = ["choose_move", "score_move"]
