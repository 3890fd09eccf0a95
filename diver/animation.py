"""Blend-tree parameter store.

``BlendTreeParams`` is the concrete ``Animator``: it keeps the latest value of
each parameter path (``"Grounded/current"``, ``"FallSpeed/blend_position"``
...) for whatever plays the animations, plus an ordered log of writes that
tests and debug tooling can inspect.
"""

from __future__ import annotations

from typing import Any, Dict, List, Tuple


class BlendTreeParams:
    def __init__(self, log_limit: int = 512):
        self.params: Dict[str, Any] = {}
        self.writes: List[Tuple[str, Any]] = []
        self.log_limit = log_limit

    def set_param(self, path: str, value: Any) -> None:
        self.params[path] = value
        self.writes.append((path, value))
        if len(self.writes) > self.log_limit:
            del self.writes[: len(self.writes) - self.log_limit]

    def get(self, path: str, default: Any = None) -> Any:
        return self.params.get(path, default)

    def writes_to(self, path: str) -> List[Any]:
        return [value for p, value in self.writes if p == path]

    def clear_log(self) -> None:
        self.writes.clear()


__all__ = ["BlendTreeParams"]
