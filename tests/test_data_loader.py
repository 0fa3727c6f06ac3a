import pytest

from tilemon.core.errors import ValidationError, UnknownMoveError, UnknownSpeciesError
from tilemon.core.types import TypeId, MoveCategory, MoveTarget, StatKey, StatusId
from tilemon.data.abilities import AbilityId
from tilemon.data.loader import (
    get_species, find_by_id, find_by_name, level_up_learnset, parse_species,
    species_from_pokeapi, all_species_keys,
)
from tilemon.data.moves import get_move, parse_move, all_moves


def test_species_lookup_is_normalized():
    sp = get_species(" Bulbasaur ")
    assert sp.key == "bulbasaur"
    assert sp.types == (TypeId.GRASS, TypeId.POISON)
    assert sp.base_stats.hp == 45
    assert sp.ability is AbilityId.OVERGROW
    assert sp.evolution.to_species_key == "ivysaur"
    assert "pikachu" in all_species_keys()


def test_unknown_species_is_a_key_error():
    with pytest.raises(UnknownSpeciesError):
        get_species("missingno")
    with pytest.raises(KeyError):
        get_species("missingno")


def test_find_helpers():
    assert find_by_id(25).name == "Pikachu"
    assert find_by_id(9999) is None
    assert find_by_name("Snorlax").id == 143
    moves = level_up_learnset("geodude")
    moves.clear()
    assert len(level_up_learnset("geodude")) == 3


def test_move_table_entries():
    ember = get_move("ember")
    assert ember.type is TypeId.FIRE
    assert ember.category is MoveCategory.SPECIAL
    assert ember.effect.status is StatusId.BURN
    assert ember.effect.chance == 0.1
    dance = get_move("swords_dance")
    assert dance.is_status
    assert dance.effect.target is MoveTarget.SELF
    assert dance.effect.stat_changes == ((StatKey.ATK, 2),)
    assert get_move("thunder_wave").effect.chance == 0.5
    assert get_move("quick_attack").priority == 1
    assert all(m.pp > 0 for m in all_moves().values())


def test_unknown_move_is_a_key_error():
    with pytest.raises(UnknownMoveError) as exc:
        get_move("splash_of_doom")
    assert isinstance(exc.value, KeyError)
    assert "splash_of_doom" in str(exc.value)


@pytest.mark.parametrize("patch", [
    {"accuracy": 101},
    {"pp": 0},
    {"power": None},
    {"effect": {"status": "burn", "status_chance": 1.5}},
    {"type": "shadow"},
])
def test_bad_move_definitions_fail_validation(patch):
    raw = {"id": "x", "name": "X", "type": "normal", "category": "physical",
           "power": 40, "accuracy": 100, "pp": 10}
    raw.update(patch)
    with pytest.raises(ValidationError):
        parse_move(raw)


def _raw_species(**kw):
    raw = {"key": "testmon", "id": 9000, "name": "Testmon", "types": ["fire"],
           "base_stats": {"hp": 50, "atk": 50, "def": 50, "spa": 50, "spd": 50, "spe": 50},
           "base_exp": 50}
    raw.update(kw)
    return raw


def test_species_validation():
    assert parse_species(_raw_species()).ability is AbilityId.BLAZE
    with pytest.raises(ValidationError):
        parse_species(_raw_species(types=["fire", "water", "grass"]))
    with pytest.raises(ValidationError):
        parse_species(_raw_species(types=[]))
    with pytest.raises(ValidationError):
        parse_species(_raw_species(level_up_moves=[{"level": 3, "move": "nope"}]))


def test_species_from_pokeapi_payload():
    payload = {
        "id": 133, "name": "eevee", "base_experience": 65,
        "types": [{"slot": 1, "type": {"name": "normal"}}],
        "stats": [
            {"base_stat": 55, "stat": {"name": "hp"}},
            {"base_stat": 55, "stat": {"name": "attack"}},
            {"base_stat": 55, "stat": {"name": "speed"}},
        ],
        "abilities": [
            {"slot": 1, "ability": {"name": "run-away"}},
            {"slot": 3, "ability": {"name": "thick-fat"}},
        ],
    }
    sp = species_from_pokeapi(payload, level_up_moves=[{"level": 1, "move": "tackle"}])
    assert sp.key == "eevee" and sp.name == "Eevee"
    assert sp.types == (TypeId.NORMAL,)
    assert sp.base_stats.hp == 55 and sp.base_stats.spe == 55
    assert sp.base_stats.def_ == 50
    assert sp.base_exp == 65
    assert sp.ability is AbilityId.THICK_FAT
    assert sp.level_up_moves[0].move_id == "tackle"

    payload["abilities"] = [{"slot": 1, "ability": {"name": "adaptability"}}]
    del payload["base_experience"]
    sp = species_from_pokeapi(payload)
    assert sp.ability is AbilityId.STURDY
    assert sp.base_exp == 64


def test_species_from_bad_payload():
    with pytest.raises(ValidationError):
        species_from_pokeapi({"name": "eevee"})
