from tilemon.battle import abilities, mechanics, messages
from tilemon.battle.engine import BattleEngine
from tilemon.battle.factory import create_combatant
from tilemon.core.types import StatusId
from tilemon.data.abilities import AbilityId, ability_name, default_ability_for_types, resolve_ability_from_pokeapi
from tilemon.core.types import TypeId
from tilemon.data.loader import get_species
from tilemon.data.moves import get_move


def mon(key, level=10, moves=None):
    return create_combatant(get_species(key), level, moves)


def test_levitate_blocks_ground_moves(scripted):
    att, dfn = mon("geodude"), mon("gastly")
    rng = scripted([0.0])
    out = BattleEngine(rng).resolve_move(att, dfn, get_move("earthquake"))
    assert not out.hit and out.could_act
    assert out.messages == ["It doesn't affect Gastly thanks to its Levitate!"]
    assert dfn.current_hp == dfn.max_hp
    assert rng.calls == 1


def test_water_absorb_heals_quarter(scripted):
    att, dfn = mon("squirtle"), mon("lapras", 20)
    assert dfn.max_hp == 82
    dfn.current_hp = 50
    out = BattleEngine(scripted([0.0])).resolve_move(att, dfn, get_move("water_gun"))
    assert out.messages == ["Lapras restored HP using its Water Absorb!"]
    assert dfn.current_hp == 70
    dfn.current_hp = 80
    BattleEngine(scripted([0.0])).resolve_move(att, dfn, get_move("water_gun"))
    assert dfn.current_hp == 82
    out = BattleEngine(scripted([0.0])).resolve_move(att, dfn, get_move("water_gun"))
    assert out.messages == ["Lapras's Water Absorb made the move useless!"]


def test_volt_absorb_swallows_status_moves(scripted):
    att, dfn = mon("pikachu"), mon("jolteon")
    out = BattleEngine(scripted([0.0, 0.0])).resolve_move(att, dfn, get_move("thunder_wave"))
    assert not out.hit
    assert dfn.status is StatusId.NONE
    assert out.messages == ["Jolteon's Volt Absorb made the move useless!"]


def test_flash_fire_sets_boost_once(scripted):
    att, holder = mon("charmander"), mon("vulpix")
    ember = get_move("ember")
    target = mon("bulbasaur")
    assert abilities.damage_modifier(holder, target, ember) == 1.0
    out = BattleEngine(scripted([0.0])).resolve_move(att, holder, ember)
    assert out.messages == ["Vulpix's Flash Fire raised the power of its Fire-type moves!"]
    assert holder.ability_state.flash_fire_boosted
    assert holder.current_hp == holder.max_hp
    out = BattleEngine(scripted([0.0])).resolve_move(att, holder, ember)
    assert out.messages == ["Vulpix's Flash Fire made the move useless!"]
    assert abilities.damage_modifier(holder, target, ember) == 1.5
    assert abilities.damage_modifier(holder, target, get_move("tackle")) == 1.0


def test_sturdy_endures_one_knockout(scripted):
    att, dfn = mon("lapras", 50), mon("geodude", 5)
    out = BattleEngine(scripted([0.0, 0.5, 0.0])).resolve_move(att, dfn, get_move("water_gun"))
    assert dfn.current_hp == 1
    assert out.messages == [messages.SUPER_EFFECTIVE, "Geodude endured the hit!"]
    assert dfn.ability_state.sturdy_used
    BattleEngine(scripted([0.0, 0.5, 0.0])).resolve_move(att, dfn, get_move("water_gun"))
    assert dfn.is_fainted()


def test_sturdy_needs_full_hp():
    dfn = mon("geodude", 5)
    dfn.current_hp -= 1
    assert abilities.survive_hit(dfn, 999) == (999, None)


def test_static_paralyzes_physical_attacker(scripted):
    att, dfn = mon("charmander"), mon("pikachu")
    out = BattleEngine(scripted([0.0, 0.5, 0.0, 0.1])).resolve_move(att, dfn, get_move("scratch"))
    assert out.messages[-1] == "Pikachu's Static paralyzed Charmander!"
    assert att.status is StatusId.PARALYZE

    att = mon("charmander")
    out = BattleEngine(scripted([0.0, 0.5, 0.0, 0.5])).resolve_move(att, dfn, get_move("scratch"))
    assert att.status is StatusId.NONE
    assert not any("Static" in m for m in out.messages)


def test_static_ignores_special_moves(scripted):
    att, dfn = mon("charmander"), mon("pikachu")
    rng = scripted([0.0, 0.5, 0.0, 0.99])
    BattleEngine(rng).resolve_move(att, dfn, get_move("ember"))
    # accuracy, crit, roll, secondary burn; no contact draw
    assert rng.calls == 4
    assert att.status is StatusId.NONE


def test_guts_boosts_and_ignores_burn():
    machop = mon("machop")
    chop = get_move("karate_chop")
    assert abilities.attack_boost(machop, chop) == 1.0
    machop.status = StatusId.BURN
    assert abilities.attack_boost(machop, chop) == 1.5
    assert mechanics.burn_modifier(machop, chop) == 1.0
    attack, _ = mechanics.battle_stats(machop, mon("snorlax"), chop)
    assert attack == int(machop.stats.atk * 1.5)


def test_thick_fat_and_low_hp_boost():
    charmander, snorlax = mon("charmander"), mon("snorlax")
    ember, tackle = get_move("ember"), get_move("tackle")
    assert abilities.damage_modifier(charmander, snorlax, ember) == 0.5
    assert abilities.damage_modifier(charmander, snorlax, tackle) == 1.0
    charmander.current_hp = charmander.max_hp // 3
    assert abilities.damage_modifier(charmander, mon("bulbasaur"), ember) == 1.5
    assert abilities.damage_modifier(charmander, mon("bulbasaur"), tackle) == 1.0


def test_would_intercept():
    assert abilities.would_intercept(mon("gastly"), get_move("earthquake"))
    assert abilities.would_intercept(mon("lapras"), get_move("surf"))
    assert not abilities.would_intercept(mon("lapras"), get_move("thunderbolt"))
    assert not abilities.would_intercept(mon("pikachu"), get_move("thunderbolt"))


def test_ability_table_helpers():
    assert ability_name(AbilityId.WATER_ABSORB) == "Water Absorb"
    assert resolve_ability_from_pokeapi("flash-fire") is AbilityId.FLASH_FIRE
    assert resolve_ability_from_pokeapi("run-away") is None
    assert default_ability_for_types([TypeId.ROCK, TypeId.GROUND]) is AbilityId.STURDY
    assert default_ability_for_types([TypeId.GHOST, TypeId.POISON]) is AbilityId.LEVITATE
    assert default_ability_for_types([TypeId.POISON]) is AbilityId.GUTS
    assert default_ability_for_types([TypeId.WATER, TypeId.FIRE]) is AbilityId.BLAZE
    assert default_ability_for_types([TypeId.NORMAL]) is AbilityId.STURDY
