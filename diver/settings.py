import json
import os

import pygame

from diver.constants import JUMP_BUFFER_TIME
from diver.logger import get_logger

log = get_logger("settings")


class Settings:
    SETTINGS_FILE = "data/settings.json"

    def __init__(self, load=True):
        self._jump_buffer_time = JUMP_BUFFER_TIME
        self.tuning_profile = "data/tuning.json"
        self._dirty = False
        # Default key bindings (pygame key integers)
        self.key_bindings = {
            "Movement": {
                "left": [pygame.K_LEFT, pygame.K_a],
                "right": [pygame.K_RIGHT, pygame.K_d],
                "up": [pygame.K_UP, pygame.K_w],
                "jump": [pygame.K_SPACE, pygame.K_z],
                "dive": [pygame.K_x, pygame.K_LSHIFT],
            },
        }
        if load:
            self.load_settings()

    @property
    def jump_buffer_time(self):
        return self._jump_buffer_time

    @jump_buffer_time.setter
    def jump_buffer_time(self, value):
        new_val = max(0.0, min(0.5, round(float(value), 3)))
        if new_val != self._jump_buffer_time:
            self._jump_buffer_time = new_val
            self._dirty = True
            self.flush()

    def bind(self, action, keys):
        """Replace the keys bound to a movement action."""
        keys = list(keys)
        if self.key_bindings["Movement"].get(action) != keys:
            self.key_bindings["Movement"][action] = keys
            self._dirty = True
            self.flush()

    def load_settings(self):
        """Load settings from the JSON file."""
        if os.path.exists(self.SETTINGS_FILE):
            try:
                with open(self.SETTINGS_FILE, "r") as f:
                    data = json.load(f)
                    self._jump_buffer_time = float(data.get("jump_buffer_time", self._jump_buffer_time))
                    self.tuning_profile = str(data.get("tuning_profile", self.tuning_profile))

                    # Merge loaded bindings over defaults so new actions keep their default keys
                    loaded_bindings = data.get("key_bindings", {})
                    for group, binds in loaded_bindings.items():
                        if group in self.key_bindings:
                            for action, keys in binds.items():
                                self.key_bindings[group][action] = keys

            except (json.JSONDecodeError, IOError, TypeError, ValueError) as e:
                log.warn("Error loading settings; regenerating", e)
                self._dirty = True
                self.flush()
        else:
            self._dirty = True
            self.flush()

    def save_settings(self):
        if self._dirty:
            self.flush()

    def flush(self):
        """Write settings to disk if dirty and clear dirty flag."""
        if not self._dirty:
            return
        data = {
            "jump_buffer_time": self._jump_buffer_time,
            "tuning_profile": self.tuning_profile,
            "key_bindings": self.key_bindings,
        }
        try:
            os.makedirs(os.path.dirname(self.SETTINGS_FILE), exist_ok=True)
            with open(self.SETTINGS_FILE, "w") as f:
                json.dump(data, f, indent=4)
            self._dirty = False
            log.debug("Settings flushed")
        except IOError as e:
            log.error("Error saving settings", e)


settings = Settings(load=os.environ.get("DIVER_TESTING") != "1")
