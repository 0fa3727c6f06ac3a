"""Ability identifiers and display data.

Behavior lives in :mod:`tilemon.battle.abilities`; this module only knows the
closed set of ids, their names/descriptions (packaged JSON) and how to pick
one for species data that does not declare it.
"""
from __future__ import annotations
import json
from enum import Enum
from functools import lru_cache
from typing import Dict, Iterable, Optional, NamedTuple

from tilemon.core.errors import DataLoadError
from tilemon.core.logging import logger
from tilemon.core.paths import ABILITIES
from tilemon.core.types import TypeId


class AbilityId(str, Enum):
    OVERGROW = "overgrow"
    BLAZE = "blaze"
    TORRENT = "torrent"
    STATIC = "static"
    INTIMIDATE = "intimidate"
    LEVITATE = "levitate"
    STURDY = "sturdy"
    WATER_ABSORB = "water_absorb"
    VOLT_ABSORB = "volt_absorb"
    FLASH_FIRE = "flash_fire"
    THICK_FAT = "thick_fat"
    GUTS = "guts"


class AbilityInfo(NamedTuple):
    id: AbilityId
    name: str
    description: str


_ABILITIES_FILE = ABILITIES / "abilities.json"

# PokeAPI uses dashes; anything outside this map has no battle behavior here.
_POKEAPI_NAMES: Dict[str, AbilityId] = {
    a.value.replace("_", "-"): a for a in AbilityId
}

# Checked in order; first matching type wins.
_TYPE_DEFAULTS = (
    ((TypeId.FIRE,), AbilityId.BLAZE),
    ((TypeId.WATER,), AbilityId.TORRENT),
    ((TypeId.GRASS,), AbilityId.OVERGROW),
    ((TypeId.ELECTRIC,), AbilityId.STATIC),
    ((TypeId.FLYING, TypeId.GHOST), AbilityId.LEVITATE),
    ((TypeId.ROCK, TypeId.STEEL), AbilityId.STURDY),
    ((TypeId.POISON,), AbilityId.GUTS),
)


@lru_cache(maxsize=None)
def all_abilities() -> Dict[AbilityId, AbilityInfo]:
    try:
        raw = json.loads(_ABILITIES_FILE.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise DataLoadError(str(_ABILITIES_FILE), str(e)) from e
    table: Dict[AbilityId, AbilityInfo] = {}
    for entry in raw:
        try:
            aid = AbilityId(entry["id"])
            table[aid] = AbilityInfo(aid, str(entry["name"]), str(entry.get("description", "")))
        except (KeyError, ValueError) as e:
            raise DataLoadError(str(_ABILITIES_FILE), f"bad ability entry {entry!r}: {e}") from e
    missing = [a.value for a in AbilityId if a not in table]
    if missing:
        raise DataLoadError(str(_ABILITIES_FILE), f"missing abilities: {', '.join(missing)}")
    logger.debug("DataLoaded", kind="abilities", count=len(table))
    return table


def get_ability(ability: AbilityId) -> AbilityInfo:
    return all_abilities()[ability]


def ability_name(ability: Optional[AbilityId]) -> str:
    if ability is None:
        return ""
    return get_ability(ability).name


def resolve_ability_from_pokeapi(raw_name: str) -> Optional[AbilityId]:
    return _POKEAPI_NAMES.get(raw_name.strip().lower())


def default_ability_for_types(types: Iterable[TypeId]) -> AbilityId:
    types = tuple(types)
    for candidates, ability in _TYPE_DEFAULTS:
        if any(t in types for t in candidates):
            return ability
    return AbilityId.STURDY


__all__ = [
    "AbilityId", "AbilityInfo", "all_abilities", "get_ability", "ability_name",
    "resolve_ability_from_pokeapi", "default_ability_for_types",
]
