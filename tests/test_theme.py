"""Tests for the persisted theme preference."""

from __future__ import annotations

import json
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from godservices.application.use_cases.theme import THEME_KEY, ThemeController
from godservices.infrastructure.preferences import JsonPreferenceStore


def test_default_theme_is_dark(tmp_path: Path) -> None:
    controller = ThemeController(JsonPreferenceStore(tmp_path / "prefs.json"))

    state = controller.init_theme()

    assert state.theme == "dark"
    assert state.show_sun_icon is True
    assert state.show_moon_icon is False


def test_toggle_persists_choice(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "prefs.json"
    controller = ThemeController(JsonPreferenceStore(path))

    assert controller.toggle_theme().theme == "light"
    assert json.loads(path.read_text(encoding="utf-8")) == {THEME_KEY: "light"}

    reloaded = ThemeController(JsonPreferenceStore(path)).init_theme()
    assert reloaded.theme == "light"
    assert reloaded.show_moon_icon is True

    assert controller.toggle_theme().theme == "dark"


def test_unknown_stored_value_falls_back_to_dark(tmp_path: Path) -> None:
    path = tmp_path / "prefs.json"
    path.write_text(json.dumps({THEME_KEY: "sepia"}), encoding="utf-8")

    assert ThemeController(JsonPreferenceStore(path)).init_theme().theme == "dark"


def test_corrupt_preferences_file_is_ignored(tmp_path: Path) -> None:
    path = tmp_path / "prefs.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonPreferenceStore(path)

    assert store.get(THEME_KEY) is None
    store.set(THEME_KEY, "light")
    assert store.get(THEME_KEY) == "light"


def test_store_keeps_other_keys(tmp_path: Path) -> None:
    store = JsonPreferenceStore(tmp_path / "prefs.json")
    store.set("language", "en")
    store.set(THEME_KEY, "light")

    assert store.get("language") == "en"
    assert store.get(THEME_KEY) == "light"


def test_owners_keep_separate_themes(tmp_path: Path) -> None:
    store = JsonPreferenceStore(tmp_path / "prefs.json")
    alice = ThemeController(store, owner="user:C1")
    bob = ThemeController(store, owner="user:W2")

    assert alice.toggle_theme().theme == "light"

    assert bob.init_theme().theme == "dark"
    assert alice.init_theme().theme == "light"
    assert store.get(f"{THEME_KEY}:user:C1") == "light"


def test_concurrent_toggles_are_serialized(tmp_path: Path) -> None:
    store = JsonPreferenceStore(tmp_path / "prefs.json")
    controller = ThemeController(store, owner="client:abc")

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: controller.toggle_theme().theme, range(20)))

    assert results.count("light") == 10
    assert results.count("dark") == 10
    assert controller.init_theme().theme == "dark"
