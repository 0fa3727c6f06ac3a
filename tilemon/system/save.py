"""Battle-relevant combatant records.

A record keeps only what cannot be recomputed: species, level, experience,
HP, status and move slots. Stats are derived again from species and level
on restore.
"""
from __future__ import annotations
from dataclasses import dataclass, asdict, field
from typing import Any, Dict, List, Optional

from tilemon.battle.experience import clamp_level, compute_stats, experience_for_level
from tilemon.battle.models import Combatant, MoveSlot
from tilemon.core.errors import ValidationError
from tilemon.core.types import StatusId
from tilemon.data.loader import get_species
from tilemon.data.moves import get_move


@dataclass
class MoveRecord:
    move_id: str
    pp: int
    max_pp: int


@dataclass
class CombatantRecord:
    species: str
    level: int = 5
    exp: int = 0
    hp: int = 0
    uid: str = ""
    nickname: Optional[str] = None
    status: str = StatusId.NONE.value
    status_turns: int = 0
    moves: List[MoveRecord] = field(default_factory=list)

    def to_json(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "CombatantRecord":
        try:
            moves = [MoveRecord(**m) for m in data.get("moves", [])]
            return cls(
                species=str(data["species"]),
                level=clamp_level(data.get("level", 5)),
                exp=int(data.get("exp", 0)),
                hp=int(data.get("hp", 0)),
                uid=str(data.get("uid", "")),
                nickname=data.get("nickname"),
                status=str(data.get("status", StatusId.NONE.value)),
                status_turns=int(data.get("status_turns", 0)),
                moves=moves,
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ValidationError(f"bad combatant record: {e}") from e


def snapshot(combatant: Combatant) -> CombatantRecord:
    return CombatantRecord(
        species=combatant.species.key,
        level=combatant.level,
        exp=combatant.exp,
        hp=combatant.current_hp,
        uid=combatant.uid,
        nickname=combatant.name if combatant.name != combatant.species.name else None,
        status=combatant.status.value,
        status_turns=combatant.status_turns,
        moves=[MoveRecord(s.move_id, s.pp, s.max_pp) for s in combatant.moves],
    )


def restore(record: CombatantRecord) -> Combatant:
    species = get_species(record.species)
    level = clamp_level(record.level)
    stats = compute_stats(species.base_stats, level)
    try:
        status = StatusId(record.status)
    except ValueError as e:
        raise ValidationError(f"unknown status {record.status!r}") from e
    slots = []
    for m in record.moves:
        get_move(m.move_id)
        slots.append(MoveSlot(move_id=m.move_id, pp=max(0, min(m.pp, m.max_pp)), max_pp=m.max_pp))
    return Combatant(
        uid=record.uid or species.key,
        species=species,
        name=record.nickname or species.name,
        level=level,
        # Migration: exp below the level threshold would stall level-ups
        exp=max(record.exp, experience_for_level(level)),
        stats=stats,
        current_hp=record.hp,
        moves=slots,
        status=status,
        status_turns=record.status_turns if status is StatusId.SLEEP else 0,
    )


__all__ = ["CombatantRecord", "MoveRecord", "snapshot", "restore"]
