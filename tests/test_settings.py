import json
import os
import time

import pygame

from diver.settings import Settings


def make_settings(tmp_path):
    s = Settings(load=False)
    s.SETTINGS_FILE = str(tmp_path / "settings.json")
    return s


def test_settings_no_write_on_same_value(tmp_path):
    s = make_settings(tmp_path)
    s._dirty = True
    s.flush()
    path = tmp_path / "settings.json"
    assert path.exists()
    first_mtime = os.path.getmtime(path)
    time.sleep(0.01)
    s.jump_buffer_time = s.jump_buffer_time
    s.flush()
    assert os.path.getmtime(path) == first_mtime


def test_jump_buffer_time_clamped_and_persisted(tmp_path):
    s = make_settings(tmp_path)
    s.jump_buffer_time = 2.0
    assert s.jump_buffer_time == 0.5
    data = json.loads((tmp_path / "settings.json").read_text())
    assert data["jump_buffer_time"] == 0.5


def test_loaded_bindings_merge_over_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"key_bindings": {"Movement": {"jump": [pygame.K_c]}}}))
    s = Settings(load=False)
    s.SETTINGS_FILE = str(path)
    s.load_settings()
    assert s.key_bindings["Movement"]["jump"] == [pygame.K_c]
    assert s.key_bindings["Movement"]["dive"] == [pygame.K_x, pygame.K_LSHIFT]


def test_corrupt_file_regenerated(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{broken")
    s = Settings(load=False)
    s.SETTINGS_FILE = str(path)
    s.load_settings()
    assert json.loads(path.read_text())["jump_buffer_time"] == s.jump_buffer_time


def test_bind_replaces_keys(tmp_path):
    s = make_settings(tmp_path)
    s.bind("dive", [pygame.K_v])
    assert s.key_bindings["Movement"]["dive"] == [pygame.K_v]
    saved = json.loads((tmp_path / "settings.json").read_text())
    assert saved["key_bindings"]["Movement"]["dive"] == [pygame.K_v]
