"""Settings persistence through QSettings INI files."""

from __future__ import annotations

import numpy as np

from transformviz.config import MATRIX_KEY, SIZE_X_KEY, SIZE_Y_KEY
from transformviz.model.geometry import identity_matrix
from transformviz.model.io import SettingsStore
from transformviz.model.presets import rotation, translation
from transformviz.model.state import AppState


def test_empty_store_has_nothing(store: SettingsStore) -> None:
    assert store.load_matrix() is None
    assert store.load_size() == (None, None)


def test_matrix_round_trip_is_exact(store: SettingsStore) -> None:
    m = rotation(30.0)
    assert store.save_matrix(m)
    assert np.array_equal(store.load_matrix(), m)


def test_values_survive_a_new_store(store: SettingsStore, settings_path: str) -> None:
    store.save_matrix(translation(80.0, 40.0))
    store.save_size(3.5, 2.0)

    reopened = SettingsStore.from_file(settings_path)
    assert np.array_equal(reopened.load_matrix(), translation(80.0, 40.0))
    assert reopened.load_size() == (3.5, 2.0)


def test_matrix_uses_json_under_fixed_key(store: SettingsStore) -> None:
    store.save_matrix(identity_matrix())
    raw = store.settings.value(MATRIX_KEY)
    assert raw == "[[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]]"


def test_malformed_matrix_is_ignored(store: SettingsStore) -> None:
    for raw in ("not json", "[[1, 2], [3, 4]]", '{"a": 1}', '[[1, 0, 0], [0, 1, 0], [0, 0, "x"]]'):
        store.settings.setValue(MATRIX_KEY, raw)
        assert store.load_matrix() is None


def test_each_size_is_validated_on_its_own(store: SettingsStore) -> None:
    store.settings.setValue(SIZE_X_KEY, "-4")
    store.settings.setValue(SIZE_Y_KEY, "2.5")
    assert store.load_size() == (None, 2.5)

    store.settings.setValue(SIZE_X_KEY, "wide")
    store.settings.setValue(SIZE_Y_KEY, "0")
    assert store.load_size() == (None, None)


def test_load_state_applies_valid_values_only(store: SettingsStore) -> None:
    store.settings.setValue(MATRIX_KEY, "garbage")
    store.settings.setValue(SIZE_X_KEY, "8")
    store.settings.setValue(SIZE_Y_KEY, "nan")

    state = AppState()
    store.load_state(state)

    assert np.array_equal(state.matrix, identity_matrix())
    assert (state.width, state.height) == (8.0, 5.0)


def test_save_state_then_load_state(store: SettingsStore) -> None:
    state = AppState()
    state.set_matrix(rotation(45.0))
    state.set_size(width=1.5, height=6.0)
    assert store.save_state(state)

    restored = AppState()
    store.load_state(restored)

    assert np.array_equal(restored.matrix, state.matrix)
    assert (restored.width, restored.height) == (1.5, 6.0)
    assert restored.cell_texts == state.cell_texts


class _BrokenSettings:
    def setValue(self, key, value):
        raise OSError("disk full")

    def value(self, key):
        raise OSError("disk gone")


def test_write_failure_returns_false() -> None:
    store = SettingsStore(_BrokenSettings())
    assert not store.save_matrix(identity_matrix())
    assert not store.save_size(1.0, 1.0)


def test_read_failure_is_treated_as_missing() -> None:
    store = SettingsStore(_BrokenSettings())
    assert store.load_matrix() is None
    assert store.load_size() == (None, None)
