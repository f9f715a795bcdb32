"""Parse colors.tdesktop-theme into a flat symbol table."""

from __future__ import annotations

from pathlib import Path

from tdeskdroid.errors import ErrorCode, TDeskDroidError

MANIFEST_FILENAME = "colors.tdesktop-theme"

# Absorbs lookups of keys that only exist to be overridden.
SENTINEL_KEY = "whatever"
SENTINEL_COLOR = "ff00ff"


def parse_manifest(theme_dir: str | Path) -> dict[str, str]:
    """Return desktop-key -> hex color (no ``#``) for an extracted theme.

    Aliases are resolved against the rules parsed so far, so a rule that
    refers to a key defined further down resolves to an empty string.
    """
    path = Path(theme_dir) / MANIFEST_FILENAME
    try:
        with open(path, encoding="utf-8") as fh:
            return parse_manifest_lines(fh)
    except FileNotFoundError as exc:
        raise TDeskDroidError(ErrorCode.MANIFEST_MISSING, path=path) from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise TDeskDroidError(
            ErrorCode.MANIFEST_UNREADABLE, path=path, details={"original": str(exc)}
        ) from exc


def parse_manifest_lines(lines) -> dict[str, str]:
    """Parse an iterable of manifest lines."""
    symbols: dict[str, str] = {}
    for raw in lines:
        rule = raw.rstrip("\r\n").split(": ")
        if len(rule) < 2:
            continue
        key = rule[0]
        value = rule[1].split(";")[0]
        if value.startswith("#"):
            value = value[1:]
        else:
            value = symbols.get(value, "")
        symbols[key] = value
    symbols[SENTINEL_KEY] = SENTINEL_COLOR
    return symbols
