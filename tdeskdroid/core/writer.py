"""Build and write .attheme files."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Mapping

from tdeskdroid.errors import ErrorCode, TDeskDroidError, classify_exception

logger = logging.getLogger(__name__)

WALLPAPER_KEY = "chat_wallpaper"
WALLPAPER_START = b"WPS\n"
WALLPAPER_END = b"\nWPE"
MISSING_COLOR = "00ff00"
DEFAULT_ALPHA = "ff"
CHUNK_SIZE = 1024


def _rgba_to_argb(value: str) -> str:
    return value[6:] + value[:6]


def build_color_table(
    translation: Mapping[str, str],
    symbols: Mapping[str, str],
    alpha: Mapping[str, str],
    overrides: Mapping[str, str],
    missing: list[str] | None = None,
) -> dict[str, str]:
    """Resolve every mobile key to its AARRGGBB value.

    Translated keys are uppercased and keep a bare RRGGBB when no alpha
    prefix is known. Keys present only as overrides default to ``ff`` alpha
    and are written as given. Desktop keys that could not be resolved
    are appended to *missing* when given.
    """
    pending = dict(overrides)
    colors: dict[str, str] = {}

    for key, desktop_key in translation.items():
        if pending.get(key):
            value = pending.pop(key)
        else:
            value = symbols.get(desktop_key, "")

        if len(value) == 6:
            color = alpha.get(key, "") + value
        elif len(value) == 8:
            color = _rgba_to_argb(value)
        else:
            logger.warning("Key %s missing from .tdesktop-theme", desktop_key)
            if missing is not None:
                missing.append(desktop_key)
            color = MISSING_COLOR
        colors[key] = color.upper()

    for key, value in pending.items():
        if len(value) == 6:
            colors[key] = (alpha.get(key) or DEFAULT_ALPHA) + value
        elif len(value) == 8:
            colors[key] = _rgba_to_argb(value)
        else:
            logger.warning("Override %s=%s is not a 6 or 8 digit color, skipped", key, value)

    return colors


def write_attheme(
    path: str | Path,
    colors: Mapping[str, str],
    wallpaper: str | Path | None = None,
) -> bool:
    """Write *colors* to *path*, embedding *wallpaper* when no color is bound.

    Returns True when a ``WPS``/``WPE`` block was appended.
    """
    path = Path(path)
    embed = not colors.get(WALLPAPER_KEY)
    if embed and wallpaper is None:
        raise TDeskDroidError(
            ErrorCode.WRITE_FAILED,
            message=f"{WALLPAPER_KEY} has no color and no wallpaper image was produced.",
            path=path,
        )
    if embed and not Path(wallpaper).is_file():
        raise TDeskDroidError(ErrorCode.FILE_NOT_FOUND, path=Path(wallpaper))

    try:
        with open(path, "wb") as out:
            for key, value in colors.items():
                out.write(f"{key}=#{value}\n".encode("utf-8"))
            if embed:
                with open(wallpaper, "rb") as src:
                    out.write(WALLPAPER_START)
                    for chunk in iter(lambda: src.read(CHUNK_SIZE), b""):
                        out.write(chunk)
                    out.write(WALLPAPER_END)
    except OSError as exc:
        error = classify_exception(exc, path)
        if error.code is ErrorCode.OPERATION_FAILED:
            error = TDeskDroidError(ErrorCode.WRITE_FAILED, path=path, details={"original": str(exc)})
        raise error from exc

    return embed
