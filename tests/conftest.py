"""Shared fixtures for building desktop theme archives."""

from __future__ import annotations

import io
import logging
import zipfile
from pathlib import Path

import pytest
from PIL import Image


@pytest.fixture(autouse=True)
def reset_tdeskdroid_logger():
    """Undo handlers installed by run_app so caplog keeps working."""
    yield
    logger = logging.getLogger("tdeskdroid")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)


def png_bytes(size: tuple[int, int], color=(10, 20, 30, 255), fmt: str = "PNG") -> bytes:
    mode = "RGBA" if fmt == "PNG" else "RGB"
    img = Image.new(mode, size, color if mode == "RGBA" else color[:3])
    buf = io.BytesIO()
    img.save(buf, format=fmt)
    return buf.getvalue()


def write_theme_archive(path: Path, manifest: str, files: dict[str, bytes] | None = None) -> Path:
    with zipfile.ZipFile(path, "w") as zf:
        zf.writestr("colors.tdesktop-theme", manifest)
        for name, data in (files or {}).items():
            zf.writestr(name, data)
    return path


@pytest.fixture
def make_theme(tmp_path):
    def _make(stem: str, manifest: str, files: dict[str, bytes] | None = None) -> Path:
        return write_theme_archive(tmp_path / f"{stem}.tdesktop-theme", manifest, files)
    return _make
