# config_manager.py - JSON config manager

from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    "max_suggestions": 5,
    "strategy": "contextual",  # frequency | contextual
    "log_level": "WARNING",
    "show_probabilities": True,
}


def _coerce(current: Any, val: Any) -> Any:
    # bool("false") is True, so parse flags by hand
    if isinstance(current, bool) and isinstance(val, str):
        low = val.strip().lower()
        if low in ("1", "true", "yes", "on"):
            return True
        if low in ("0", "false", "no", "off"):
            return False
        raise ValueError(f"not a boolean: {val!r}")
    return type(current)(val)


class Config:
    """
    Settings with defaults, optionally backed by a JSON file.
    Nothing touches the disk unless a path is given.
    """

    def __init__(self, path: Optional[str] = None):
        self.path = path
        self.data: Dict[str, Any] = dict(DEFAULTS)
        self._load()

    def _load(self):
        if not self.path or not os.path.exists(self.path):
            return
        try:
            with open(self.path, "r", encoding="utf8") as f:
                loaded = json.load(f)
        except json.JSONDecodeError as e:
            logger.warning("config %s is not valid JSON, using defaults: %s", self.path, e)
            return
        if not isinstance(loaded, dict):
            logger.warning("config %s is not a JSON object, using defaults", self.path)
            return
        for k, v in loaded.items():
            if k not in self.data:
                logger.warning("ignoring unknown config option %r", k)
                continue
            try:
                self.data[k] = _coerce(self.data[k], v)
            except (TypeError, ValueError):
                logger.warning("config option %r has bad value %r, keeping %r", k, v, self.data[k])

    def save(self):
        if not self.path:
            return
        with open(self.path, "w", encoding="utf8") as f:
            json.dump(self.data, f, indent=2)

    def get(self, key: str) -> Any:
        return self.data[key]

    def set(self, key: str, val: Any) -> None:
        if key not in self.data:
            raise KeyError(f"no such option: {key}")
        self.data[key] = _coerce(self.data[key], val)
        self.save()

    def as_dict(self) -> Dict[str, Any]:
        return dict(self.data)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]
