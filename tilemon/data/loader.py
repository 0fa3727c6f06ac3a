"""Runtime loader utilities for species data.

Provides cached access to the packaged species table and a mapper for
already-fetched PokeAPI ``/pokemon`` payloads. Fetching itself happens
outside the engine; only resolved SpeciesDefinition values reach battle code.
"""
from __future__ import annotations
import json
from functools import lru_cache
from typing import Dict, Any, Iterable, Optional, Tuple

from tilemon.battle.models import SpeciesDefinition, StatBlock, LevelUpMove, EvolutionData
from tilemon.core.errors import DataLoadError, ValidationError, UnknownSpeciesError
from tilemon.core.logging import logger
from tilemon.core.paths import POKEMON
from tilemon.core.types import TypeId
from tilemon.data.abilities import AbilityId, default_ability_for_types, resolve_ability_from_pokeapi
from tilemon.data.moves import has_move

_SPECIES_FILE = POKEMON / "species.json"

# PokeAPI stat names -> our stat block fields
_POKEAPI_STATS = {
    "hp": "hp",
    "attack": "atk",
    "defense": "def",
    "special-attack": "spa",
    "special-defense": "spd",
    "speed": "spe",
}
_DEFAULT_BASE_STAT = 50
_DEFAULT_BASE_EXP = 64


def normalize_key(value: str) -> str:
    return "".join(ch for ch in value.strip().lower() if ch.isalnum() or ch == "-")


def _stat_block(raw: Dict[str, Any]) -> StatBlock:
    values = {k: int(raw[k]) for k in ("hp", "atk", "def", "spa", "spd", "spe")}
    if any(v <= 0 for v in values.values()):
        raise ValidationError(f"base stats must be positive: {values}")
    return StatBlock(hp=values["hp"], atk=values["atk"], def_=values["def"],
                     spa=values["spa"], spd=values["spd"], spe=values["spe"])


def _types(raw: Iterable[str]) -> Tuple[TypeId, ...]:
    types = tuple(TypeId(t) for t in raw)
    if not 1 <= len(types) <= 2:
        raise ValidationError(f"species needs 1-2 types, got {len(types)}")
    return types


def _learnset(raw: Iterable[Dict[str, Any]]) -> Tuple[LevelUpMove, ...]:
    entries = []
    for e in raw:
        mv = LevelUpMove(level=int(e["level"]), move_id=str(e["move"]))
        if not has_move(mv.move_id):
            raise ValidationError(f"learnset references unknown move {mv.move_id}")
        entries.append(mv)
    return tuple(entries)


def _evolution(raw: Optional[Dict[str, Any]]) -> Optional[EvolutionData]:
    if not raw:
        return None
    return EvolutionData(
        min_level=int(raw["min_level"]),
        to_species_id=int(raw["to_species_id"]),
        to_species_key=str(raw["to_species_key"]),
        to_species_name=str(raw["to_species_name"]),
    )


def parse_species(raw: Dict[str, Any]) -> SpeciesDefinition:
    try:
        types = _types(raw["types"])
        ability_raw = raw.get("ability")
        ability = AbilityId(ability_raw) if ability_raw else default_ability_for_types(types)
        return SpeciesDefinition(
            key=normalize_key(raw["key"]),
            id=int(raw["id"]),
            name=str(raw["name"]),
            types=types,
            base_stats=_stat_block(raw["base_stats"]),
            base_exp=int(raw.get("base_exp", _DEFAULT_BASE_EXP)),
            ability=ability,
            level_up_moves=_learnset(raw.get("level_up_moves") or ()),
            evolution=_evolution(raw.get("evolution")),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"species {raw.get('key')!r}: {e}") from e


@lru_cache(maxsize=None)
def _table() -> Dict[str, SpeciesDefinition]:
    try:
        raw = json.loads(_SPECIES_FILE.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise DataLoadError(str(_SPECIES_FILE), str(e)) from e
    table: Dict[str, SpeciesDefinition] = {}
    for entry in raw:
        try:
            sp = parse_species(entry)
        except ValidationError as e:
            raise DataLoadError(str(_SPECIES_FILE), str(e)) from e
        table[sp.key] = sp
    logger.debug("DataLoaded", kind="species", count=len(table))
    return table


def get_species(key: str) -> SpeciesDefinition:
    try:
        return _table()[normalize_key(key)]
    except KeyError:
        raise UnknownSpeciesError(key) from None


@lru_cache(maxsize=None)
def all_species_keys() -> Tuple[str, ...]:
    return tuple(_table())


def find_by_id(species_id: int) -> Optional[SpeciesDefinition]:
    for sp in _table().values():
        if sp.id == species_id:
            return sp
    return None


def find_by_name(name: str) -> Optional[SpeciesDefinition]:
    return _table().get(normalize_key(name))


def level_up_learnset(key: str) -> list[LevelUpMove]:
    return list(get_species(key).level_up_moves)  # copy


def species_from_pokeapi(data: Dict[str, Any], *,
                         level_up_moves: Iterable[Dict[str, Any]] = (),
                         evolution: Optional[Dict[str, Any]] = None) -> SpeciesDefinition:
    """Map a resolved PokeAPI ``/pokemon/{id}`` document to a species.

    Missing stats default to 50 and missing base experience to 64. The first
    ability the engine knows is used, otherwise one is picked from the types.
    """
    try:
        slots = sorted(data.get("types") or [], key=lambda e: e.get("slot", 0))
        types = _types(e["type"]["name"] for e in slots)
        stats = {name: _DEFAULT_BASE_STAT for name in _POKEAPI_STATS.values()}
        for entry in data.get("stats") or []:
            field = _POKEAPI_STATS.get(entry["stat"]["name"])
            if field:
                stats[field] = int(entry["base_stat"])
        ability: Optional[AbilityId] = None
        for entry in sorted(data.get("abilities") or [], key=lambda e: e.get("slot", 0)):
            ability = resolve_ability_from_pokeapi(entry["ability"]["name"])
            if ability:
                break
        name = str(data["name"])
        return SpeciesDefinition(
            key=normalize_key(name),
            id=int(data["id"]),
            name=name[:1].upper() + name[1:],
            types=types,
            base_stats=_stat_block(stats),
            base_exp=int(data.get("base_experience") or _DEFAULT_BASE_EXP),
            ability=ability or default_ability_for_types(types),
            level_up_moves=_learnset(level_up_moves),
            evolution=_evolution(evolution),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"unusable PokeAPI payload: {e}") from e


__all__ = [
    "get_species", "all_species_keys", "find_by_id", "find_by_name", "level_up_learnset",
    "parse_species", "species_from_pokeapi", "normalize_key",
]
