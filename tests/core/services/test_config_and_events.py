"""
test_config_and_events.py
-------------------------
Tests for config loading, named presets and the event bus.
"""

import json

import pytest

from conftest import EventRecorder
from dino_deputy.core.runtime.presets import (
    BanditTier,
    GamePreset,
    get_preset,
    load_presets,
)
from dino_deputy.core.services import config_manager
from dino_deputy.core.services.config_manager import load_config
from dino_deputy.core.services.event_manager import (
    EventManager,
    JumpEvent,
    ShotFiredEvent,
)


# ===========================================================
# Config Loading
# ===========================================================

class TestLoadConfig:

    def test_merges_over_defaults_and_drops_notes(self, tmp_path):
        path = tmp_path / "tuning.json"
        path.write_text(json.dumps({"_notes": "hi", "b": {"y": 2}}), encoding="utf-8")

        data = load_config(str(path), default_dict={"a": 1, "b": {"x": 1}})

        assert data == {"a": 1, "b": {"x": 1, "y": 2}}

    def test_missing_file_returns_defaults(self):
        assert load_config("does_not_exist.json", default_dict={"a": 1}) == {"a": 1}

    def test_strict_missing_file_raises(self):
        with pytest.raises(FileNotFoundError):
            load_config("does_not_exist.json", strict=True)

    def test_defaults_are_not_mutated(self, tmp_path):
        path = tmp_path / "tuning.json"
        path.write_text(json.dumps({"b": {"x": 9}}), encoding="utf-8")
        defaults = {"b": {"x": 1}}

        load_config(str(path), default_dict=defaults)

        assert defaults == {"b": {"x": 1}}


# ===========================================================
# Presets
# ===========================================================

class TestPresets:

    def test_bundled_presets(self):
        assert {"frontier", "classic"} <= set(load_presets())

    def test_frontier_is_the_dataclass_default(self):
        assert get_preset("frontier") == GamePreset()

    def test_classic_overrides(self, classic):
        assert classic.shoot_cooldown == 20
        assert not classic.shoot_requires_release
        assert not classic.thieves_enabled
        assert classic.death_freeze_frames == 0
        assert classic.bandit_tiers == (BanditTier(1, 150, 3, 0.7),)

    def test_unknown_preset(self):
        with pytest.raises(ValueError):
            get_preset("spaghetti")

    def test_unknown_keys_are_ignored(self):
        preset = GamePreset.from_dict("custom", {"shoot_cooldown": 5, "laser": True})
        assert preset.name == "custom"
        assert preset.shoot_cooldown == 5

    def test_tiers_sorted_by_level(self):
        preset = GamePreset.from_dict("custom", {"bandit_tiers": [
            {"min_level": 4, "interval": 90, "max_alive": 5, "chance": 0.8},
            {"min_level": 1, "interval": 130, "max_alive": 3, "chance": 0.5},
        ]})
        assert [t.min_level for t in preset.bandit_tiers] == [1, 4]
        assert preset.bandit_tier(2).interval == 130

    def test_user_data_dir_can_add_presets(self, tmp_path, monkeypatch):
        (tmp_path / "presets.json").write_text(
            json.dumps({"speedrun": {"shoot_cooldown": 6}}), encoding="utf-8"
        )
        monkeypatch.setattr(config_manager, "USER_DIRS", [])
        config_manager.add_search_dir(str(tmp_path))
        try:
            assert get_preset("speedrun").shoot_cooldown == 6
        finally:
            monkeypatch.undo()
            config_manager.rebuild_file_index()

    def test_nested_presets_files_are_not_picked_up(self, tmp_path, monkeypatch):
        decoy = tmp_path / "sub" / "deep"
        decoy.mkdir(parents=True)
        (decoy / "presets.json").write_text(
            json.dumps({"frontier": {"bullet_speed": 1}}), encoding="utf-8"
        )
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr(config_manager, "USER_DIRS", [])
        config_manager.add_search_dir(str(tmp_path))
        try:
            assert get_preset("frontier").bullet_speed == 22
        finally:
            monkeypatch.undo()
            config_manager.rebuild_file_index()


# ===========================================================
# Event Bus
# ===========================================================

class TestEventManager:

    def test_dispatch_by_exact_type(self):
        events = EventManager()
        recorder = EventRecorder(events, JumpEvent)

        events.dispatch(JumpEvent(2))
        events.dispatch(ShotFiredEvent((0, 0)))

        assert recorder.received == [JumpEvent(2)]

    def test_duplicate_subscription_ignored(self):
        events = EventManager()
        calls = []
        events.subscribe(JumpEvent, calls.append)
        events.subscribe(JumpEvent, calls.append)

        events.dispatch(JumpEvent(1))

        assert len(calls) == 1
        assert events.get_subscriber_count(JumpEvent) == 1

    def test_failing_callback_does_not_block_others(self):
        events = EventManager()
        calls = []

        def explode(event):
            raise RuntimeError("boom")

        events.subscribe(JumpEvent, explode)
        events.subscribe(JumpEvent, calls.append)
        events.dispatch(JumpEvent(1))

        assert calls == [JumpEvent(1)]

