"""Higher-level battle session orchestration for 1v1 battles.

The session is the explicit context of one battle: both combatants, the
engine (and with it the random source) and the running message log. It owns
turn order and PP bookkeeping; the engine only resolves single moves.
"""
from __future__ import annotations
from typing import Callable, List, Optional, Tuple

from tilemon.battle import mechanics
from tilemon.battle.ai import choose_move
from tilemon.battle.capture import BALL_RATES, attempt_catch
from tilemon.battle.engine import BattleEngine
from tilemon.battle.experience import LevelUpResult, experience_yield, grant_experience
from tilemon.battle.factory import reset_for_new_battle
from tilemon.battle.models import Combatant, MoveSlot, MoveDefinition
from tilemon.core.logging import logger
from tilemon.core.types import StatKey
from tilemon.data.moves import get_move

PLAYER_WIN = "PLAYER_WIN"
PLAYER_LOSS = "PLAYER_LOSS"
ONGOING = "ONGOING"


class BattleSession:
    def __init__(self, player: Combatant, enemy: Combatant, engine: Optional[BattleEngine] = None,
                 *, is_wild: bool = True):
        self.player = player
        self.enemy = enemy
        self.engine = engine or BattleEngine()
        self.is_wild = is_wild
        self.turn_counter = 0
        self.log: List[str] = []
        self.started = False
        self._exp_awarded = False

    def start(self) -> List[str]:
        reset_for_new_battle(self.player)
        reset_for_new_battle(self.enemy)
        entry = self.engine.apply_battle_entry_abilities(self.player, self.enemy)
        self.log.extend(entry)
        self.started = True
        return entry

    def is_over(self) -> bool:
        return self.player.is_fainted() or self.enemy.is_fainted()

    def outcome(self) -> str:
        if self.enemy.is_fainted() and not self.player.is_fainted():
            return PLAYER_WIN
        if self.player.is_fainted():
            return PLAYER_LOSS
        return ONGOING

    def _order(self, p_move: Optional[MoveDefinition], e_move: Optional[MoveDefinition]) -> bool:
        """True when the player acts first."""
        p_prio = p_move.priority if p_move else 0
        e_prio = e_move.priority if e_move else 0
        if p_prio != e_prio:
            return p_prio > e_prio
        p_spe = mechanics.effective_stat(self.player, StatKey.SPE)
        e_spe = mechanics.effective_stat(self.enemy, StatKey.SPE)
        if p_spe != e_spe:
            return p_spe > e_spe
        return self.engine.rng.random() < 0.5

    def _act(self, actor: Combatant, target: Combatant, slot: Optional[MoveSlot]) -> List[str]:
        if actor.is_fainted() or target.is_fainted():
            return []
        if slot is None or slot.pp <= 0:
            return [f"{actor.name} has no moves left!"]
        move = get_move(slot.move_id)
        out = [f"{actor.name} used {move.name}!"]
        slot.pp -= 1
        out.extend(self.engine.resolve_move(actor, target, move).messages)
        if target.is_fainted():
            out.append(f"{target.name} fainted!")
        if actor.is_fainted():
            out.append(f"{actor.name} fainted!")
        return out

    def step(self, player_slot_index: int = 0) -> List[str]:
        if not self.started:
            self.start()
        if self.is_over():
            return []
        p_slot = self._player_slot(player_slot_index)
        e_slot = choose_move(self.enemy, self.player, self.engine.rng)
        p_move = get_move(p_slot.move_id) if p_slot else None
        e_move = get_move(e_slot.move_id) if e_slot else None
        turn: List[str] = []
        actors: List[Tuple[Combatant, Combatant, Optional[MoveSlot]]] = [
            (self.player, self.enemy, p_slot),
            (self.enemy, self.player, e_slot),
        ]
        if not self._order(p_move, e_move):
            actors.reverse()
        for actor, target, slot in actors:
            turn.extend(self._act(actor, target, slot))
        for combatant in (actors[0][0], actors[1][0]):
            if combatant.is_fainted():
                continue
            tick = self.engine.apply_end_of_turn_status(combatant)
            if tick.damage:
                turn.append(tick.message)
                if combatant.is_fainted():
                    turn.append(f"{combatant.name} fainted!")
        self.turn_counter += 1
        self.log.extend(turn)
        logger.debug("TurnResolved", turn=self.turn_counter, player_hp=self.player.current_hp,
                     enemy_hp=self.enemy.current_hp)
        return turn

    def _player_slot(self, index: int) -> Optional[MoveSlot]:
        if 0 <= index < len(self.player.moves) and self.player.moves[index].pp > 0:
            return self.player.moves[index]
        for slot in self.player.moves:
            if slot.pp > 0:
                return slot
        return None

    def run_auto(self, max_turns: int = 200,
                 on_turn: Optional[Callable[[int, List[str]], None]] = None) -> str:
        """Both sides pick with the move-choice heuristic until one faints."""
        if not self.started:
            self.start()
        while not self.is_over() and self.turn_counter < max_turns:
            slot = choose_move(self.player, self.enemy, self.engine.rng)
            index = self.player.moves.index(slot) if slot is not None else -1
            if slot is None and not any(s.pp > 0 for s in self.enemy.moves):
                break
            turn = self.step(index)
            if on_turn:
                on_turn(self.turn_counter, turn)
        return self.outcome()

    # ---------------- Capturing -----------------
    def attempt_capture(self, ball: str = 'poke-ball') -> str:
        if not self.is_wild:
            return 'NOT_ALLOWED'
        res = attempt_catch(self.enemy, BALL_RATES.get(ball, 1.0), self.engine.rng)
        self.log.extend(res.messages)
        if res.caught:
            return 'CAPTURED'
        return f'BREAK_OUT_{res.shake_count}'

    def award_experience(self) -> Optional[LevelUpResult]:
        if self._exp_awarded or not self.enemy.is_fainted() or self.player.is_fainted():
            return None
        self._exp_awarded = True
        gained = experience_yield(self.enemy, is_trainer=not self.is_wild)
        self.log.append(f"{self.player.name} gained {gained} Exp. Points!")
        result = grant_experience(self.player, gained)
        for level in result.levels_reached:
            self.log.append(f"{self.player.name} grew to Lv. {level}!")
        return result


__all__ = ["BattleSession", "PLAYER_WIN", "PLAYER_LOSS", "ONGOING"]
