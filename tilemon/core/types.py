"""Closed vocabularies shared by the battle engine and the data layer.

Provides:
  TypeId: the 18 elemental types
  StatusId: major status conditions (at most one per combatant)
  StatKey: stats that take part in stage mechanics (hp excluded)
  MoveCategory / MoveTarget: move classification
  helpers for short labels used in battle text.
"""
from __future__ import annotations
from enum import Enum
from typing import Dict


class TypeId(str, Enum):
    NORMAL = "normal"
    FIRE = "fire"
    WATER = "water"
    ELECTRIC = "electric"
    GRASS = "grass"
    ICE = "ice"
    FIGHTING = "fighting"
    POISON = "poison"
    GROUND = "ground"
    FLYING = "flying"
    PSYCHIC = "psychic"
    BUG = "bug"
    ROCK = "rock"
    GHOST = "ghost"
    DRAGON = "dragon"
    DARK = "dark"
    STEEL = "steel"
    FAIRY = "fairy"


class StatusId(str, Enum):
    NONE = "none"
    PARALYZE = "paralyze"
    BURN = "burn"
    POISON = "poison"
    SLEEP = "sleep"


class StatKey(str, Enum):
    ATK = "atk"
    DEF = "def"
    SPA = "spa"
    SPD = "spd"
    SPE = "spe"


class MoveCategory(str, Enum):
    PHYSICAL = "physical"
    SPECIAL = "special"
    STATUS = "status"


class MoveTarget(str, Enum):
    SELF = "self"
    ENEMY = "enemy"


STAT_LABELS: Dict[StatKey, str] = {
    StatKey.ATK: "Attack",
    StatKey.DEF: "Defense",
    StatKey.SPA: "Sp. Atk",
    StatKey.SPD: "Sp. Def",
    StatKey.SPE: "Speed",
}

STATUS_LABELS: Dict[StatusId, str] = {
    StatusId.PARALYZE: "PAR",
    StatusId.BURN: "BRN",
    StatusId.POISON: "PSN",
    StatusId.SLEEP: "SLP",
}

TYPE_ABBREVIATIONS: Dict[TypeId, str] = {
    TypeId.NORMAL: "NRM",
    TypeId.FIRE: "FIR",
    TypeId.WATER: "WTR",
    TypeId.ELECTRIC: "ELE",
    TypeId.GRASS: "GRS",
    TypeId.ICE: "ICE",
    TypeId.FIGHTING: "FGT",
    TypeId.POISON: "PSN",
    TypeId.GROUND: "GRN",
    TypeId.FLYING: "FLY",
    TypeId.PSYCHIC: "PSY",
    TypeId.BUG: "BUG",
    TypeId.ROCK: "RCK",
    TypeId.GHOST: "GHO",
    TypeId.DRAGON: "DRA",
    TypeId.DARK: "DRK",
    TypeId.STEEL: "STL",
    TypeId.FAIRY: "FAI",
}


def stat_label(stat: StatKey) -> str:
    return STAT_LABELS.get(stat, stat.value)


def status_label(status: StatusId) -> str:
    """Three-letter badge for a status, empty string when healthy."""
    return STATUS_LABELS.get(status, "")


def type_abbreviation(type_id: TypeId) -> str:
    return TYPE_ABBREVIATIONS[type_id]


def format_types(types) -> str:
    return "/".join(type_abbreviation(t) for t in types)


__all__ = [
    "TypeId", "StatusId", "StatKey", "MoveCategory", "MoveTarget",
    "stat_label", "status_label", "type_abbreviation", "format_types",
]
