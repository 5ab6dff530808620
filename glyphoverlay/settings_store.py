from __future__ import annotations

import json
import logging
from copy import deepcopy
from pathlib import Path
from typing import Any, Mapping

from glyphoverlay.errors import SettingsStoreError
from glyphoverlay.settings_models import OverlayConfig, default_overlay_settings

logger = logging.getLogger(__name__)


def merge_with_defaults(data: Mapping[str, Any], defaults: Mapping[str, Any]) -> dict[str, Any]:
    """Fill keys missing from ``data`` with copies of their defaults, recursing into objects."""
    merged = {key: deepcopy(value) for key, value in defaults.items()}
    for key, value in data.items():
        default_value = defaults.get(key)
        if isinstance(value, Mapping) and isinstance(default_value, Mapping):
            merged[key] = merge_with_defaults(value, default_value)
        else:
            merged[key] = deepcopy(value)
    return merged


def _key_parts(key: str) -> list[str]:
    parts = [part for part in str(key or "").split(".") if part]
    if not parts:
        raise ValueError("Settings key cannot be empty.")
    return parts


class OverlaySettingsStore:
    """JSON-backed overlay settings addressed with dotted keys (``colors.set``).

    A file that is missing or cannot be parsed never stops the overlay: the
    store falls back to defaults and records the problem in ``last_error``.
    Only writing is allowed to fail loudly.
    """

    def __init__(self, path: Path | None, *, defaults: Mapping[str, Any] | None = None) -> None:
        self.path = Path(path) if path is not None else None
        self.defaults: dict[str, Any] = deepcopy(dict(default_overlay_settings() if defaults is None else defaults))
        self.data: dict[str, Any] = merge_with_defaults({}, self.defaults)
        self.dirty: bool = False
        self.last_error: str | None = None

    def load(self) -> dict[str, Any]:
        self.last_error = None
        self.dirty = False
        raw: Any = {}
        if self.path is None or not self.path.exists():
            # a first run writes the defaults out on the next save
            self.dirty = self.path is not None
        else:
            try:
                raw = json.loads(self.path.read_text(encoding="utf-8"))
            except (OSError, ValueError) as exc:
                self.last_error = str(exc)
                logger.warning("Could not read overlay settings '%s': %s", self.path, exc)
                raw = {}
            if not isinstance(raw, dict):
                self.last_error = (
                    f"Settings root in '{self.path}' must be a JSON object, "
                    f"found {type(raw).__name__}."
                )
                logger.warning(self.last_error)
                raw = {}
        self.data = merge_with_defaults(raw, self.defaults)
        return self.data

    def save(self) -> None:
        if self.path is None:
            self.dirty = False
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(self.data, indent=2, sort_keys=True), encoding="utf-8")
        except OSError as exc:
            raise SettingsStoreError(
                f"Could not write settings file '{self.path}': {exc}"
            ) from exc
        logger.debug("Saved overlay settings to %s", self.path)
        self.dirty = False
        self.last_error = None

    def get(self, key: str, default: Any = None) -> Any:
        node: Any = self.data
        for part in _key_parts(key):
            if not isinstance(node, Mapping) or part not in node:
                return default
            node = node[part]
        return node

    def set(self, key: str, value: Any) -> bool:
        """Store ``value`` under a dotted key; returns whether anything changed."""
        *parents, leaf = _key_parts(key)
        node = self.data
        for part in parents:
            child = node.get(part)
            if not isinstance(child, dict):
                child = node[part] = {}
            node = child
        if leaf in node and node[leaf] == value:
            return False
        node[leaf] = value
        self.dirty = True
        return True

    def restore_defaults(self) -> None:
        self.data = merge_with_defaults({}, self.defaults)
        self.dirty = True

    def config(self) -> OverlayConfig:
        return OverlayConfig.from_mapping(self.data)
