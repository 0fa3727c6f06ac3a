from tilemon.battle.experience import (
    experience_for_level, compute_stats, grant_experience, learn_move, LearnResult,
    pending_evolution, experience_yield, level_up_moves, MAX_LEVEL,
)
from tilemon.battle.factory import create_combatant
from tilemon.data.loader import get_species


def test_experience_curve():
    assert experience_for_level(1) == 0
    assert experience_for_level(10) == 800
    assert experience_for_level(5) == 100
    values = [experience_for_level(n) for n in range(1, MAX_LEVEL + 1)]
    assert values == sorted(set(values))


def test_compute_stats_level_5_hp():
    stats = compute_stats(get_species("bulbasaur").base_stats, 5)
    assert stats.hp == 19
    assert stats.atk == (2 * 49 * 5) // 100 + 5


def test_compute_stats_is_idempotent():
    base = get_species("snorlax").base_stats
    assert compute_stats(base, 37) == compute_stats(base, 37)


def test_exact_threshold_grants_one_level_and_hp_delta():
    mon = create_combatant(get_species("bulbasaur"), 9)
    mon.current_hp -= 5
    hp_before = mon.current_hp
    max_before = mon.max_hp
    res = grant_experience(mon, experience_for_level(10) - mon.exp)
    assert res.levels_gained == 1
    assert res.levels_reached == [10]
    assert mon.level == 10
    expected_max = compute_stats(mon.species.base_stats, 10).hp
    assert mon.max_hp == expected_max
    assert mon.current_hp == hp_before + (expected_max - max_before)


def test_one_below_threshold_does_not_level():
    mon = create_combatant(get_species("bulbasaur"), 9)
    res = grant_experience(mon, experience_for_level(10) - mon.exp - 1)
    assert res.levels_gained == 0
    assert mon.level == 9


def test_multi_level_grant_and_unlocked_moves():
    mon = create_combatant(get_species("bulbasaur"), 5)
    res = grant_experience(mon, experience_for_level(14) - mon.exp)
    assert res.levels_reached == list(range(6, 15))
    assert res.levels_gained == 9
    assert res.unlocked_moves == ["vine_whip", "sleep_powder"]
    # unlocked moves are reported, not learned
    assert mon.slot_for("sleep_powder") is None


def test_level_cap():
    mon = create_combatant(get_species("pikachu"), 99)
    grant_experience(mon, 10 ** 9)
    assert mon.level == MAX_LEVEL
    res = grant_experience(mon, 10 ** 9)
    assert res.levels_gained == 0


def test_level_up_moves_window():
    sp = get_species("charmander")
    assert level_up_moves(sp, 1, 13) == ["ember", "quick_attack"]
    assert level_up_moves(sp, 0, 1) == ["scratch", "growl"]
    assert level_up_moves(sp, 13, 50) == []


def test_learn_move_results():
    mon = create_combatant(get_species("pikachu"), 5, ["thunder_shock", "growl"])
    mon.moves = mon.moves[:2]
    assert learn_move(mon, "growl") is LearnResult.ALREADY_KNOWN
    assert learn_move(mon, "thunder_wave") is LearnResult.LEARNED
    slot = mon.slot_for("thunder_wave")
    assert slot is not None and slot.pp == slot.max_pp == 20
    assert learn_move(mon, "spark") is LearnResult.LEARNED
    assert len(mon.moves) == 4
    assert learn_move(mon, "thunderbolt") is LearnResult.NO_FREE_SLOT
    assert mon.slot_for("thunderbolt") is None


def test_pending_evolution():
    mon = create_combatant(get_species("charmander"), 15)
    assert pending_evolution(mon) is None
    grant_experience(mon, experience_for_level(16) - mon.exp)
    evo = pending_evolution(mon)
    assert evo is not None
    assert evo.to_species_key == "charmeleon"
    # the species swap is the caller's business
    assert mon.species.key == "charmander"
    assert pending_evolution(create_combatant(get_species("pikachu"), 80)) is None


def test_experience_yield():
    defeated = create_combatant(get_species("bulbasaur"), 7)
    assert experience_yield(defeated) == 64 * 7 // 7
    assert experience_yield(defeated, is_trainer=True) == 96
    weak = create_combatant(get_species("bulbasaur"), 1)
    assert experience_yield(weak) == 9
