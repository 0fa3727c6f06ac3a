"""Static definitions and mutable combatant state.

Static values (moves, species) are frozen dataclasses shared by reference;
a Combatant is the only mutable battle state and is owned by whichever
caller is currently resolving a move for it.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional, Tuple, List

from tilemon.core.types import TypeId, StatusId, StatKey, MoveCategory, MoveTarget
from tilemon.data.abilities import AbilityId

STAGE_MIN = -6
STAGE_MAX = 6
MAX_MOVE_SLOTS = 4
DEFAULT_STATUS_CHANCE = 0.5


def clamp_stage(stage: int) -> int:
    return max(STAGE_MIN, min(STAGE_MAX, int(stage)))


# ---------------------------------------------------------------------------
# Static data
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class StatBlock:
    hp: int
    atk: int
    def_: int
    spa: int
    spd: int
    spe: int

    def __getitem__(self, stat: StatKey) -> int:
        return getattr(self, _STAT_ATTR[stat])

    def as_dict(self) -> dict[str, int]:
        return {"hp": self.hp, "atk": self.atk, "def": self.def_,
                "spa": self.spa, "spd": self.spd, "spe": self.spe}


@dataclass(frozen=True)
class MoveEffect:
    status: Optional[StatusId] = None
    status_chance: Optional[float] = None  # None => DEFAULT_STATUS_CHANCE
    stat_changes: Tuple[Tuple[StatKey, int], ...] = ()
    target: MoveTarget = MoveTarget.ENEMY

    @property
    def chance(self) -> float:
        return DEFAULT_STATUS_CHANCE if self.status_chance is None else self.status_chance


@dataclass(frozen=True)
class MoveDefinition:
    id: str
    name: str
    type: TypeId
    category: MoveCategory
    accuracy: int
    pp: int
    power: Optional[int] = None
    priority: int = 0
    effect: Optional[MoveEffect] = None

    @property
    def is_status(self) -> bool:
        return self.category is MoveCategory.STATUS


@dataclass(frozen=True)
class LevelUpMove:
    level: int
    move_id: str


@dataclass(frozen=True)
class EvolutionData:
    min_level: int
    to_species_id: int
    to_species_key: str
    to_species_name: str


@dataclass(frozen=True)
class SpeciesDefinition:
    key: str
    id: int
    name: str
    types: Tuple[TypeId, ...]
    base_stats: StatBlock
    base_exp: int
    ability: AbilityId
    level_up_moves: Tuple[LevelUpMove, ...] = ()
    evolution: Optional[EvolutionData] = None


# ---------------------------------------------------------------------------
# Mutable battle state
# ---------------------------------------------------------------------------
_STAT_ATTR = {
    StatKey.ATK: "atk",
    StatKey.DEF: "def_",
    StatKey.SPA: "spa",
    StatKey.SPD: "spd",
    StatKey.SPE: "spe",
}


@dataclass
class StatStages:
    atk: int = 0
    def_: int = 0
    spa: int = 0
    spd: int = 0
    spe: int = 0

    def __getitem__(self, stat: StatKey) -> int:
        return getattr(self, _STAT_ATTR[stat])

    def shift(self, stat: StatKey, delta: int) -> int:
        """Apply delta clamped to [-6, 6]; return the change actually applied."""
        before = self[stat]
        after = clamp_stage(before + delta)
        setattr(self, _STAT_ATTR[stat], after)
        return after - before


@dataclass
class AbilityState:
    flash_fire_boosted: bool = False
    sturdy_used: bool = False
    intimidate_applied: bool = False


@dataclass
class MoveSlot:
    move_id: str
    pp: int
    max_pp: int

    @property
    def usable(self) -> bool:
        return self.pp > 0


@dataclass
class Combatant:
    uid: str
    species: SpeciesDefinition
    name: str
    level: int
    exp: int
    stats: StatBlock
    current_hp: int
    moves: List[MoveSlot] = field(default_factory=list)
    status: StatusId = StatusId.NONE
    status_turns: int = 0
    stages: StatStages = field(default_factory=StatStages)
    ability_state: AbilityState = field(default_factory=AbilityState)

    def __post_init__(self):
        self.current_hp = max(0, min(int(self.current_hp), self.stats.hp))
        if len(self.moves) > MAX_MOVE_SLOTS:
            self.moves = self.moves[:MAX_MOVE_SLOTS]

    @property
    def types(self) -> Tuple[TypeId, ...]:
        return self.species.types

    @property
    def ability(self) -> AbilityId:
        return self.species.ability

    @property
    def max_hp(self) -> int:
        return self.stats.hp

    def is_fainted(self) -> bool:
        return self.current_hp <= 0

    def slot_for(self, move_id: str) -> Optional[MoveSlot]:
        for slot in self.moves:
            if slot.move_id == move_id:
                return slot
        return None


__all__ = [
    "StatBlock", "MoveEffect", "MoveDefinition", "LevelUpMove", "EvolutionData",
    "SpeciesDefinition", "StatStages", "AbilityState", "MoveSlot", "Combatant",
    "clamp_stage", "STAGE_MIN", "STAGE_MAX", "MAX_MOVE_SLOTS", "DEFAULT_STATUS_CHANCE",
]
