"""Read the key=value mapping files that drive a conversion."""

from __future__ import annotations

import logging
from pathlib import Path

from tdeskdroid.errors import ErrorCode, TDeskDroidError

logger = logging.getLogger(__name__)


def read_map_file(path: str | Path) -> dict[str, str]:
    """Read ``key=value`` rules; a missing file yields an empty table."""
    path = Path(path)
    rules: dict[str, str] = {}
    try:
        with open(path, encoding="utf-8") as fh:
            for lineno, raw in enumerate(fh, start=1):
                rule = raw.rstrip("\r\n").split("=")
                if len(rule) < 2:
                    logger.debug("%s:%d: no '=' in rule, skipped", path, lineno)
                    continue
                rules[rule[0]] = rule[1]
    except FileNotFoundError:
        logger.debug("map file not found: %s", path)
    except (OSError, UnicodeDecodeError) as exc:
        raise TDeskDroidError(
            ErrorCode.MAP_UNREADABLE, path=path, details={"original": str(exc)}
        ) from exc
    return rules


def read_override_files(stem: str, root: str | Path = ".") -> dict[str, str]:
    """Merge override maps for every dotted prefix of *stem*.

    ``a.b.c`` reads ``a.map``, ``a.b.map`` and ``a.b.c.map``; later files win.
    """
    root = Path(root)
    overrides: dict[str, str] = {}
    prefix = ""
    for part in stem.split("."):
        prefix += part + "."
        path = root / f"{prefix}map"
        logger.info("Looking for overrides at %s", path)
        for key, value in read_map_file(path).items():
            overrides[key] = value.removeprefix("#")
    return overrides
