"""Unpack desktop theme archives into a scratch folder."""

from __future__ import annotations

import logging
import shutil
import zipfile
from pathlib import Path

from tdeskdroid.errors import ErrorCode, TDeskDroidError, classify_exception

logger = logging.getLogger(__name__)


def extract_archive(archive: str | Path, dest: str | Path) -> list[Path]:
    """Extract every entry of *archive* under *dest* and return the written paths."""
    archive = Path(archive)
    dest = Path(dest)
    dest.mkdir(parents=True, exist_ok=True)
    dest_root = dest.resolve()

    written: list[Path] = []
    try:
        with zipfile.ZipFile(archive) as zf:
            for info in zf.infolist():
                written.append(_extract_entry(zf, info, dest, dest_root))
    except zipfile.BadZipFile as exc:
        raise TDeskDroidError(
            ErrorCode.ARCHIVE_CORRUPT, path=archive, details={"original": str(exc)}
        ) from exc
    except OSError as exc:
        raise classify_exception(exc, archive) from exc

    logger.debug("extracted %d entries from %s into %s", len(written), archive, dest)
    return written


def _extract_entry(
    zf: zipfile.ZipFile,
    info: zipfile.ZipInfo,
    dest: Path,
    dest_root: Path,
) -> Path:
    target = dest / info.filename
    resolved = target.resolve()
    if resolved != dest_root and dest_root not in resolved.parents:
        raise TDeskDroidError(
            ErrorCode.ARCHIVE_UNSAFE_PATH,
            path=Path(zf.filename or ""),
            details={"entry": info.filename},
        )

    mode = (info.external_attr >> 16) & 0o777
    if info.is_dir():
        target.mkdir(parents=True, exist_ok=True)
        if mode:
            target.chmod(mode | 0o700)
        return target

    target.parent.mkdir(parents=True, exist_ok=True)
    with zf.open(info) as src, open(target, "wb") as out:
        shutil.copyfileobj(src, out)
    if mode:
        target.chmod(mode | 0o600)
    return target
