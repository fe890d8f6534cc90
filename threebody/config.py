"""Initial conditions read from a JSON document."""

from __future__ import annotations

import json
import os
from collections.abc import Mapping
from typing import Any

from .body import Body


def _triple(item: Mapping[str, Any], key: str, index: int) -> tuple[float, float, float]:
    try:
        values = item[key]
        x, y, z = (float(v) for v in values[:3])
    except (KeyError, TypeError, ValueError) as exc:
        raise ValueError(f"body {index}: '{key}' must be a list of three numbers") from exc
    return x, y, z


class ConfigManager:
    """Holds a parsed configuration file; a missing file reads as empty."""

    def __init__(self, json_path: str | os.PathLike[str]) -> None:
        try:
            with open(json_path, encoding="utf-8") as handle:
                self._root: Any = json.load(handle)
        except OSError:
            self._root = {}

    def load_initial_bodies(self) -> list[Body]:
        """Build the bodies listed under ``"bodies"``; mass and radius default to 1."""
        entries = self._root.get("bodies") if isinstance(self._root, dict) else None
        if entries is None:
            return []
        if not isinstance(entries, list):
            raise ValueError("'bodies' must be a list")

        bodies = []
        for index, item in enumerate(entries):
            if not isinstance(item, dict):
                raise ValueError(f"body {index}: expected an object")
            try:
                mass = float(item.get("mass", 1.0))
                radius = float(item.get("radius", 1.0))
            except (TypeError, ValueError) as exc:
                raise ValueError(f"body {index}: mass and radius must be numbers") from exc
            position = _triple(item, "position", index)
            velocity = _triple(item, "velocity", index)
            color = _triple(item, "color", index)
            bodies.append(Body(mass, position, velocity, radius, color))
        return bodies