from tilemon import cli
from tilemon.system.settings import Settings, SettingsData


def _quiet_settings(monkeypatch, tmp_path):
    monkeypatch.setattr(Settings, "load", classmethod(lambda cls, path=None: cls(SettingsData(), tmp_path / "s.json")))


def test_runner_plays_a_battle(monkeypatch, tmp_path, capsys):
    _quiet_settings(monkeypatch, tmp_path)
    assert cli.run(["charmander", "bulbasaur", "12", "4"]) == 0
    out = capsys.readouterr().out
    assert "Charmander" in out and "Bulbasaur" in out


def test_runner_rejects_unknown_species(monkeypatch, tmp_path):
    _quiet_settings(monkeypatch, tmp_path)
    assert cli.run(["missingno"]) == 1


def test_runner_rejects_bad_level(monkeypatch, tmp_path):
    _quiet_settings(monkeypatch, tmp_path)
    assert cli.run(["pikachu", "geodude", "high"]) == 2
