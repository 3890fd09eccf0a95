"""Keyboard routing for character movement.

Transforms raw pygame events into movement *actions* understood by
``BufferedInput.apply_action``. Bindings come from
``settings.key_bindings["Movement"]``; held actions get a ``stop_`` twin on
key release, so the input source can track what is currently down.

- Stateless mapping: an ordered list of predicate rules, each a
  function(event) -> action|None. The first matching rule wins for an
  event.
- Consecutive duplicate actions (two keys bound to the same action going
  down together) are collapsed; a press, release, press sequence within one
  frame is kept whole so the final held state matches the keyboard.
"""

from __future__ import annotations

from typing import Callable, Iterable, List

import pygame

Action = str
Rule = Callable[[pygame.event.Event], Action | None]

# Actions that track a held key and emit a release action
HELD_ACTIONS = ("left", "right", "up", "jump")


def _key_rule(key: int, action: Action, event_type=pygame.KEYDOWN) -> Rule:
    def _r(e: pygame.event.Event):
        if e.type == event_type and getattr(e, "key", None) == key:
            return action
        return None

    return _r


class InputRouter:
    """Maps pygame key events to movement actions."""

    def __init__(self) -> None:
        self._rules: List[Rule] = []
        self._register_default_rules()

    def _register_default_rules(self) -> None:
        from diver.settings import settings

        binds = settings.key_bindings.get("Movement", {})
        for act, keys in binds.items():
            for k in keys:
                self._rules.append(_key_rule(k, act, pygame.KEYDOWN))
                if act in HELD_ACTIONS:
                    self._rules.append(_key_rule(k, "stop_" + act, pygame.KEYUP))

    def register_rules(self, rules: Iterable[Rule], append: bool = True) -> None:
        if append:
            self._rules.extend(rules)
        else:
            self._rules = list(rules)

    def process(self, events: Iterable[pygame.event.Event]) -> List[Action]:
        actions: List[Action] = []
        for e in events:
            for rule in self._rules:
                a = rule(e)
                if a:
                    if not actions or actions[-1] != a:
                        actions.append(a)
                    break
        return actions


__all__ = ["InputRouter", "Action", "HELD_ACTIONS"]
