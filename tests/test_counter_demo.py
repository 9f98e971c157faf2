"""Tests for the counter demo script."""

import json
import random
import sys
import typing

import pytest

from scripts import counter_demo


class TestCosts:
    """Test cost helpers."""

    def test_resource_cost(self):
        assert counter_demo.unit_resource_cost({"food": 60, "wood": 20}) == 80
        assert counter_demo.unit_resource_cost({"food": 140, "gold": 100, "stone": 0}) == 240

    def test_missing_costs(self):
        assert counter_demo.unit_resource_cost(None) == 0
        assert counter_demo.unit_resource_cost({}) == 0

    def test_load_cost_lookup(self, tmp_path):
        path = tmp_path / "units.json"
        path.write_text(json.dumps({"units": [
            {"id": "knight_2", "baseId": "knight", "costs": {"food": 140, "gold": 100}},
            {"id": "Spearman", "costs": {"food": 60, "wood": 20}},
        ]}))
        assert counter_demo.load_cost_lookup(path) == {"knight": 240, "spearman": 80}

    def test_fallback_values(self):
        assert counter_demo.unit_value({"id": "knight"}, {}) == 240
        assert counter_demo.unit_value({"id": "knight"}, {"knight": 250}) == 250
        assert counter_demo.unit_value({"id": "scout"}, {}) == counter_demo.DEFAULT_COST


class TestDrawArmy:
    """Test seeded army sampling."""

    def test_same_seed_same_army(self):
        first = counter_demo.draw_army(random.Random("abc"), {})
        second = counter_demo.draw_army(random.Random("abc"), {})
        assert first == second

    def test_army_shape(self):
        army = counter_demo.draw_army(random.Random("xyz"), {})
        assert len(army) == counter_demo.ARMY_SIZE
        assert len({u.unit_id for u in army}) == counter_demo.ARMY_SIZE
        for unit in army:
            assert counter_demo.MIN_COUNT <= unit.count <= counter_demo.MAX_COUNT


class TestRoster:
    """Test merging reference units into the sample roster."""

    def test_without_extra_units(self):
        assert counter_demo.build_roster([]) == counter_demo.SAMPLE_UNITS

    def test_appends_new_units_only(self):
        horseman = {"id": "horseman", "name": "Horseman", "classes": ["Light Melee Cavalry"]}
        roster = counter_demo.build_roster([
            horseman,
            {"id": "knight", "name": "Knight (file)"},
            {"name": "No Id"},
            dict(horseman, name="Horseman again"),
        ])
        assert roster == [*counter_demo.SAMPLE_UNITS, horseman]

    def test_draws_from_given_roster(self):
        roster = [
            {"id": "horseman", "name": "Horseman", "classes": ["Light Melee Cavalry"]},
            {"id": "scout", "classes": None},
        ]
        army = counter_demo.draw_army(random.Random("abc"), {}, roster)
        assert {u.unit_id for u in army} == {"horseman", "scout"}
        scout = next(u for u in army if u.unit_id == "scout")
        assert scout.name == "scout"
        assert scout.classes == []
        assert scout.effective_value == counter_demo.DEFAULT_COST


class TestMain:
    """Test the demo entry point."""

    def test_prints_report(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["counter_demo.py", "--seed", "s1"])
        counter_demo.main()
        out = capsys.readouterr().out
        assert "Unit classification:" in out
        assert "Spearman: spearman" in out
        assert "Knight: heavy_melee_cavalry" in out
        assert "Seed used: s1" in out
        assert "Value-adjusted matchup:" in out
        assert "Raw Values:" in out
        assert "Count-based matchup:" in out

    def test_output_is_deterministic(self, monkeypatch, capsys):
        monkeypatch.setattr(sys, "argv", ["counter_demo.py", "--seed", "s2"])
        counter_demo.main()
        first = capsys.readouterr().out
        counter_demo.main()
        assert capsys.readouterr().out == first

    def test_missing_units_file(self, monkeypatch, capsys, tmp_path):
        missing = tmp_path / "nope.json"
        monkeypatch.setattr(sys, "argv", ["counter_demo.py", "--units", str(missing)])
        with pytest.raises(SystemExit) as exc:
            counter_demo.main()
        assert exc.value.code == 1
        assert "ERROR: units file not found" in capsys.readouterr().out

    def test_units_file_extends_roster(self, monkeypatch, capsys, tmp_path):
        path = tmp_path / "units.json"
        path.write_text(json.dumps({"units": [
            {"id": "horseman", "name": "Horseman", "baseId": "horseman",
             "costs": {"food": 100, "wood": 20},
             "classes": ["Light Melee Cavalry"], "displayClasses": ["Cavalry"]},
            {"id": "knight", "name": "Knight", "baseId": "knight",
             "costs": {"food": 140, "gold": 100}},
        ]}))
        monkeypatch.setattr(sys, "argv", ["counter_demo.py", "--units", str(path)])
        counter_demo.main()
        out = capsys.readouterr().out
        assert f"Loaded 2 units from {path}" in out
        assert "Horseman: light_melee_cavalry" in out
        assert out.count("Knight: heavy_melee_cavalry") == 1

    def test_main_is_annotated(self):
        assert typing.get_type_hints(counter_demo.main) == {"return": type(None)}
