"""Type effectiveness table (18 types, fairy included).

Built from three adjacency lists per attacking type; any pair not listed
is neutral (1x).
"""
from __future__ import annotations
from typing import Dict, Iterable, List

from tilemon.core.errors import ValidationError
from tilemon.core.types import TypeId as T

_DOUBLE: Dict[T, List[T]] = {
    T.NORMAL: [],
    T.FIRE: [T.GRASS, T.ICE, T.BUG, T.STEEL],
    T.WATER: [T.FIRE, T.GROUND, T.ROCK],
    T.ELECTRIC: [T.WATER, T.FLYING],
    T.GRASS: [T.WATER, T.GROUND, T.ROCK],
    T.ICE: [T.GRASS, T.GROUND, T.FLYING, T.DRAGON],
    T.FIGHTING: [T.NORMAL, T.ICE, T.ROCK, T.DARK, T.STEEL],
    T.POISON: [T.GRASS, T.FAIRY],
    T.GROUND: [T.FIRE, T.ELECTRIC, T.POISON, T.ROCK, T.STEEL],
    T.FLYING: [T.GRASS, T.FIGHTING, T.BUG],
    T.PSYCHIC: [T.FIGHTING, T.POISON],
    T.BUG: [T.GRASS, T.PSYCHIC, T.DARK],
    T.ROCK: [T.FIRE, T.ICE, T.FLYING, T.BUG],
    T.GHOST: [T.PSYCHIC, T.GHOST],
    T.DRAGON: [T.DRAGON],
    T.DARK: [T.PSYCHIC, T.GHOST],
    T.STEEL: [T.ICE, T.ROCK, T.FAIRY],
    T.FAIRY: [T.FIGHTING, T.DRAGON, T.DARK],
}

_HALF: Dict[T, List[T]] = {
    T.NORMAL: [T.ROCK, T.STEEL],
    T.FIRE: [T.FIRE, T.WATER, T.ROCK, T.DRAGON],
    T.WATER: [T.WATER, T.GRASS, T.DRAGON],
    T.ELECTRIC: [T.ELECTRIC, T.GRASS, T.DRAGON],
    T.GRASS: [T.FIRE, T.GRASS, T.POISON, T.FLYING, T.BUG, T.DRAGON, T.STEEL],
    T.ICE: [T.FIRE, T.WATER, T.ICE, T.STEEL],
    T.FIGHTING: [T.POISON, T.FLYING, T.PSYCHIC, T.BUG, T.FAIRY],
    T.POISON: [T.POISON, T.GROUND, T.ROCK, T.GHOST],
    T.GROUND: [T.GRASS, T.BUG],
    T.FLYING: [T.ELECTRIC, T.ROCK, T.STEEL],
    T.PSYCHIC: [T.PSYCHIC, T.STEEL],
    T.BUG: [T.FIRE, T.FIGHTING, T.POISON, T.FLYING, T.GHOST, T.STEEL, T.FAIRY],
    T.ROCK: [T.FIGHTING, T.GROUND, T.STEEL],
    T.GHOST: [T.DARK],
    T.DRAGON: [T.STEEL],
    T.DARK: [T.FIGHTING, T.DARK, T.FAIRY],
    T.STEEL: [T.FIRE, T.WATER, T.ELECTRIC, T.STEEL],
    T.FAIRY: [T.FIRE, T.POISON, T.STEEL],
}

_ZERO: Dict[T, List[T]] = {
    T.NORMAL: [T.GHOST],
    T.FIRE: [],
    T.WATER: [],
    T.ELECTRIC: [T.GROUND],
    T.GRASS: [],
    T.ICE: [],
    T.FIGHTING: [T.GHOST],
    T.POISON: [T.STEEL],
    T.GROUND: [T.FLYING],
    T.FLYING: [],
    T.PSYCHIC: [T.DARK],
    T.BUG: [],
    T.ROCK: [],
    T.GHOST: [T.NORMAL],
    T.DRAGON: [T.FAIRY],
    T.DARK: [],
    T.STEEL: [],
    T.FAIRY: [],
}


def _build_chart() -> Dict[T, Dict[T, float]]:
    chart: Dict[T, Dict[T, float]] = {}
    for attack in T:
        try:
            lists = ((_DOUBLE[attack], 2.0), (_HALF[attack], 0.5), (_ZERO[attack], 0.0))
        except KeyError as e:
            raise ValidationError(f"type chart has no entry for {attack.value}") from e
        row: Dict[T, float] = {}
        for targets, factor in lists:
            for d in targets:
                if d in row:
                    raise ValidationError(f"type chart lists {attack.value}->{d.value} twice")
                row[d] = factor
        chart[attack] = row
    return chart


TYPE_CHART = _build_chart()


def type_multiplier(attack_type: T, defender_types: Iterable[T]) -> float:
    """Product of the pairwise factors; 0 means total immunity."""
    row = TYPE_CHART[attack_type]
    mult = 1.0
    for t in defender_types:
        mult *= row.get(t, 1.0)
    return mult


__all__ = ["TYPE_CHART", "type_multiplier"]
