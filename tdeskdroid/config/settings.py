"""Converter settings, optionally read from tdeskdroid.yaml."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from tdeskdroid.errors import ErrorCode, TDeskDroidError

CONFIG_FILENAME = "tdeskdroid.yaml"
CONFIG_ENV_VAR = "TDESKDROID_CONFIG"

DEFAULTS: dict[str, Any] = {
    "work_dir": "wip",
    "output_dir": "atthemes",
    "theme_map": "theme.map",
    "trans_map": "trans.map",
    "canvas_size": 1920,
    "jpeg_quality": 90,
    "log_file": "logs/tdeskdroid.log",
}


class AppSettings:
    """Holds converter configuration rooted at a working directory."""

    def __init__(self, root: str | Path = ".", values: Mapping[str, Any] | None = None) -> None:
        self._root = Path(root)
        self._values: dict[str, Any] = dict(DEFAULTS)
        if values:
            self._values.update(_validate(values, source="settings"))

    @classmethod
    def load(cls, root: str | Path = ".") -> AppSettings:
        """Build settings from defaults plus the optional YAML config file."""
        root = Path(root)
        env_path = os.environ.get(CONFIG_ENV_VAR, "").strip()
        if env_path:
            config_path = Path(env_path)
            if not config_path.is_file():
                raise TDeskDroidError(ErrorCode.CONFIG_MISSING, path=config_path)
        else:
            config_path = root / CONFIG_FILENAME
            if not config_path.is_file():
                return cls(root)

        try:
            data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, yaml.YAMLError) as exc:
            raise TDeskDroidError(
                ErrorCode.CONFIG_INVALID, path=config_path, details={"original": str(exc)}
            ) from exc
        if data is None:
            return cls(root)
        if not isinstance(data, dict):
            raise TDeskDroidError(
                ErrorCode.CONFIG_INVALID,
                path=config_path,
                details={"reason": "expected a mapping at top level"},
            )
        return cls(root, _validate(data, source=str(config_path)))

    # -- directories --

    @property
    def root(self) -> Path:
        return self._root

    @property
    def work_dir(self) -> Path:
        return self._resolve(self._values["work_dir"])

    @property
    def output_dir(self) -> Path:
        return self._resolve(self._values["output_dir"])

    @property
    def log_path(self) -> Path:
        return self.work_dir / self._values["log_file"]

    # -- mapping files --

    @property
    def theme_map_path(self) -> Path:
        return self._resolve(self._values["theme_map"])

    @property
    def trans_map_path(self) -> Path:
        return self._resolve(self._values["trans_map"])

    # -- wallpaper --

    @property
    def canvas_size(self) -> int:
        return self._values["canvas_size"]

    @property
    def jpeg_quality(self) -> int:
        return self._values["jpeg_quality"]

    # -- helpers --

    def _resolve(self, value: str) -> Path:
        path = Path(value)
        if path.is_absolute():
            return path
        return self._root / path


def _validate(values: Mapping[str, Any], *, source: str) -> dict[str, Any]:
    unknown = sorted(key for key in values if key not in DEFAULTS)
    if unknown:
        raise TDeskDroidError(
            ErrorCode.CONFIG_INVALID,
            details={"source": source, "unsupported_keys": ", ".join(map(str, unknown))},
        )

    cleaned: dict[str, Any] = {}
    for key, value in values.items():
        expected = type(DEFAULTS[key])
        # bool is an int subclass; reject it for numeric settings
        if not isinstance(value, expected) or isinstance(value, bool):
            raise TDeskDroidError(
                ErrorCode.CONFIG_INVALID,
                details={"source": source, "key": key, "expected": expected.__name__},
            )
        if expected is str and not value.strip():
            raise TDeskDroidError(
                ErrorCode.CONFIG_INVALID,
                details={"source": source, "key": key, "reason": "empty"},
            )
        cleaned[key] = value

    if "canvas_size" in cleaned and cleaned["canvas_size"] <= 0:
        raise TDeskDroidError(
            ErrorCode.CONFIG_INVALID, details={"source": source, "key": "canvas_size"}
        )
    if "jpeg_quality" in cleaned and not 1 <= cleaned["jpeg_quality"] <= 100:
        raise TDeskDroidError(
            ErrorCode.CONFIG_INVALID, details={"source": source, "key": "jpeg_quality"}
        )
    return cleaned
