"""Move resolution engine.

One call resolves one move from start to finish:

  1. action gate    sleep countdown, 25% full paralysis
  2. accuracy       draw in [0, 100), miss when above the move's accuracy
  3. pre-hit        defender abilities may intercept the move entirely
  4. effect         status branch (stat stages, then status) or damage branch
  5. result         MoveOutcome(hit, could_act, messages)

The engine never decrements PP and never removes fainted combatants; both
belong to whoever runs the battle loop.
"""
from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import List, Optional, Callable

from tilemon.battle import abilities, mechanics, messages
from tilemon.battle.models import Combatant, MoveDefinition
from tilemon.battle.rng import RandomSource, resolve, seeded, below
from tilemon.core.logging import logger
from tilemon.core.types import StatusId, MoveTarget

PARALYSIS_SKIP_CHANCE = 0.25
CRIT_CHANCE = 1 / 16
CRIT_MULTIPLIER = 1.5
RANDOM_FLOOR = 0.85
SLEEP_TURNS_MAX = 3
BURN_DIVISOR = 16
POISON_DIVISOR = 8


@dataclass
class MoveOutcome:
    hit: bool
    could_act: bool
    messages: List[str] = field(default_factory=list)


@dataclass
class StatusTick:
    damage: int
    message: str


class BattleEngine:
    def __init__(self, rng: Optional[RandomSource] = None,
                 message_cb: Optional[Callable[[str], None]] = None):
        self.rng = resolve(rng)
        self.message_cb = message_cb

    @classmethod
    def from_settings(cls, settings) -> "BattleEngine":
        return cls(rng=seeded(settings.data.rng_seed))

    def _emit(self, out: List[str], *texts: Optional[str]):
        for text in texts:
            if not text:
                continue
            out.append(text)
            if self.message_cb:
                self.message_cb(text)

    # ------------------------------------------------------------------
    # Action gate
    # ------------------------------------------------------------------
    def attempt_action(self, combatant: Combatant, out: List[str]) -> bool:
        if combatant.status is StatusId.SLEEP:
            combatant.status_turns = max(0, combatant.status_turns - 1)
            if combatant.status_turns > 0:
                self._emit(out, messages.fast_asleep(combatant.name))
            else:
                combatant.status = StatusId.NONE
                self._emit(out, messages.woke_up(combatant.name))
            return False
        if combatant.status is StatusId.PARALYZE and self.rng.random() < PARALYSIS_SKIP_CHANCE:
            self._emit(out, messages.fully_paralyzed(combatant.name))
            return False
        return True

    # ------------------------------------------------------------------
    # Status helpers
    # ------------------------------------------------------------------
    def inflict_status(self, target: Combatant, status: StatusId) -> str:
        if target.status is not StatusId.NONE:
            return messages.already_affected(target.name)
        target.status = status
        target.status_turns = below(self.rng, SLEEP_TURNS_MAX) + 1 if status is StatusId.SLEEP else 0
        return messages.status_inflicted(target.name, status)

    def apply_end_of_turn_status(self, combatant: Combatant) -> StatusTick:
        if combatant.status is StatusId.BURN:
            damage = max(1, combatant.max_hp // BURN_DIVISOR)
            text = f"{combatant.name} is hurt by its burn!"
        elif combatant.status is StatusId.POISON:
            damage = max(1, combatant.max_hp // POISON_DIVISOR)
            text = f"{combatant.name} is hurt by poison!"
        else:
            return StatusTick(0, "")
        combatant.current_hp = max(0, combatant.current_hp - damage)
        if self.message_cb:
            self.message_cb(text)
        return StatusTick(damage, text)

    def apply_battle_entry_abilities(self, attacker: Combatant, defender: Combatant) -> List[str]:
        """Entry auras: the defender's resolves against the entering attacker first."""
        out: List[str] = []
        self._emit(out, *abilities.entry_aura(defender, attacker))
        self._emit(out, *abilities.entry_aura(attacker, defender))
        return out

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------
    def resolve_move(self, attacker: Combatant, defender: Combatant, move: MoveDefinition) -> MoveOutcome:
        out: List[str] = []
        if not self.attempt_action(attacker, out):
            return MoveOutcome(hit=False, could_act=False, messages=out)

        if self.rng.random() * 100 > move.accuracy:
            self._emit(out, messages.missed(attacker.name))
            return MoveOutcome(hit=False, could_act=True, messages=out)

        effect = move.effect
        targets_opponent = not (move.is_status and effect is not None and effect.target is MoveTarget.SELF)
        if targets_opponent:
            intercepted = abilities.pre_hit(attacker, defender, move)
            if intercepted is not None:
                self._emit(out, *intercepted)
                logger.debug("MoveIntercepted", move=move.id, ability=defender.ability.value)
                return MoveOutcome(hit=False, could_act=True, messages=out)

        if move.is_status:
            self._resolve_status_move(attacker, defender, move, out)
        else:
            self._resolve_damaging_move(attacker, defender, move, out)
        logger.debug("MoveResolved", attacker=attacker.name, move=move.id, defender_hp=defender.current_hp)
        return MoveOutcome(hit=True, could_act=True, messages=out)

    def _resolve_status_move(self, attacker: Combatant, defender: Combatant,
                             move: MoveDefinition, out: List[str]):
        effect = move.effect
        if effect is None:
            return
        target = attacker if effect.target is MoveTarget.SELF else defender
        for stat, amount in effect.stat_changes:
            delta = target.stages.shift(stat, amount)
            self._emit(out, messages.stage_message(target.name, stat, delta))
        if effect.status is None:
            return
        if mechanics.effectiveness(move, defender) == 0:
            self._emit(out, messages.NO_EFFECT)
            return
        if self.rng.random() < effect.chance:
            self._emit(out, self.inflict_status(target, effect.status))

    def _resolve_damaging_move(self, attacker: Combatant, defender: Combatant,
                               move: MoveDefinition, out: List[str]):
        power = move.power or 0
        attack, defense = mechanics.battle_stats(attacker, defender, move)
        base = mechanics.base_damage(attacker.level, power, attack, defense)
        type_mult = mechanics.effectiveness(move, defender)
        crit = CRIT_MULTIPLIER if self.rng.random() < CRIT_CHANCE else 1.0
        roll = RANDOM_FLOOR + self.rng.random() * (1 - RANDOM_FLOOR)
        if type_mult == 0:
            self._emit(out, messages.NO_EFFECT)
            return

        modifier = (mechanics.stab(attacker, move) * type_mult * crit * roll
                    * abilities.damage_modifier(attacker, defender, move)
                    * mechanics.burn_modifier(attacker, move))
        damage = max(1, math.floor(base * modifier))
        damage, endured = abilities.survive_hit(defender, damage)
        defender.current_hp = max(0, defender.current_hp - damage)

        if crit > 1:
            self._emit(out, messages.CRITICAL_HIT)
        if type_mult > 1:
            self._emit(out, messages.SUPER_EFFECTIVE)
        elif type_mult < 1:
            self._emit(out, messages.NOT_VERY_EFFECTIVE)
        self._emit(out, endured)

        effect = move.effect
        if effect is not None and effect.status is not None:
            if self.rng.random() < effect.chance:
                self._emit(out, self.inflict_status(defender, effect.status))

        self._emit(out, abilities.contact(attacker, defender, move, damage, self.rng))


_default_engine = BattleEngine()


def resolve_move(attacker: Combatant, defender: Combatant, move: MoveDefinition,
                 rng: Optional[RandomSource] = None) -> MoveOutcome:
    engine = _default_engine if rng is None else BattleEngine(rng)
    return engine.resolve_move(attacker, defender, move)


def apply_end_of_turn_status(combatant: Combatant) -> StatusTick:
    return _default_engine.apply_end_of_turn_status(combatant)


def apply_battle_entry_abilities(attacker: Combatant, defender: Combatant) -> List[str]:
    return _default_engine.apply_battle_entry_abilities(attacker, defender)


__all__ = [
    "BattleEngine", "MoveOutcome", "StatusTick", "resolve_move",
    "apply_end_of_turn_status", "apply_battle_entry_abilities",
]
