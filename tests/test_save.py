import json

import pytest

from tilemon.battle.factory import create_combatant
from tilemon.core.errors import ValidationError, UnknownSpeciesError
from tilemon.core.types import StatusId
from tilemon.data.loader import get_species
from tilemon.system.save import CombatantRecord, snapshot, restore


def test_round_trip_reproduces_stats():
    mon = create_combatant(get_species("wartortle"), 23, nickname="Shelly")
    mon.current_hp -= 7
    mon.status, mon.status_turns = StatusId.SLEEP, 2
    mon.moves[0].pp -= 3
    blob = json.dumps(snapshot(mon).to_json())
    back = restore(CombatantRecord.from_json(json.loads(blob)))
    assert back.stats == mon.stats
    assert back.current_hp == mon.current_hp
    assert back.name == "Shelly"
    assert back.exp == mon.exp
    assert (back.status, back.status_turns) == (StatusId.SLEEP, 2)
    assert [(s.move_id, s.pp, s.max_pp) for s in back.moves] == \
        [(s.move_id, s.pp, s.max_pp) for s in mon.moves]


def test_stale_exp_is_raised_to_level_floor():
    rec = CombatantRecord(species="pikachu", level=10, exp=5, hp=20)
    assert restore(rec).exp == 800


def test_bad_records():
    with pytest.raises(ValidationError):
        CombatantRecord.from_json({"level": 5})
    with pytest.raises(ValidationError):
        restore(CombatantRecord(species="pikachu", status="frozen"))
    with pytest.raises(UnknownSpeciesError):
        restore(CombatantRecord(species="missingno"))
