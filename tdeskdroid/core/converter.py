"""Convert desktop theme archives into .attheme files."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Mapping

from tdeskdroid.config.settings import AppSettings
from tdeskdroid.core.archive import extract_archive
from tdeskdroid.core.background import compose_background
from tdeskdroid.core.manifest import parse_manifest
from tdeskdroid.core.mappings import read_map_file, read_override_files
from tdeskdroid.core.scanner import THEME_EXTENSION, DesktopTheme, ThemeScanner
from tdeskdroid.core.writer import WALLPAPER_KEY, build_color_table, write_attheme
from tdeskdroid.errors import ErrorCode, TDeskDroidError, classify_exception

logger = logging.getLogger(__name__)

ATTHEME_EXTENSION = ".attheme"


@dataclass
class ConversionResult:
    """Outcome of converting one desktop theme."""
    stem: str
    output: Path
    colors_written: int = 0
    wallpaper_embedded: bool = False
    missing_keys: list[str] = field(default_factory=list)


def prepare_folders(settings: AppSettings) -> None:
    """Create the scratch and output directories."""
    for folder in (settings.work_dir, settings.output_dir):
        try:
            folder.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise classify_exception(exc, folder) from exc


def load_translation(settings: AppSettings) -> dict[str, str]:
    """Read theme.map; without it nothing would be written."""
    translation = read_map_file(settings.theme_map_path)
    if not translation:
        raise TDeskDroidError(ErrorCode.MAP_MISSING, path=settings.theme_map_path)
    return translation


class ThemeConverter:
    """Runs the extract, parse, map, compose and write steps for one theme."""

    def __init__(
        self,
        settings: AppSettings,
        translation: Mapping[str, str],
        alpha: Mapping[str, str],
    ) -> None:
        self._settings = settings
        self._translation = dict(translation)
        self._alpha = dict(alpha)

    def convert(self, theme: DesktopTheme) -> ConversionResult:
        stem = theme.stem
        logger.info("Converting %s", stem)
        theme_dir = self._settings.work_dir / stem
        output = self._settings.output_dir / f"{stem}{ATTHEME_EXTENSION}"

        logger.debug("extracting %s (%d bytes) into %s", theme.path, theme.size, theme_dir)
        extract_archive(theme.path, theme_dir)
        symbols = parse_manifest(theme_dir)
        overrides = read_override_files(stem, self._settings.root)

        missing: list[str] = []
        colors = build_color_table(self._translation, symbols, self._alpha, overrides, missing)
        wallpaper = None
        if not colors.get(WALLPAPER_KEY):
            wallpaper = compose_background(
                theme_dir,
                size=self._settings.canvas_size,
                quality=self._settings.jpeg_quality,
            )
        embedded = write_attheme(output, colors, wallpaper)

        return ConversionResult(
            stem=stem,
            output=output,
            colors_written=len(colors),
            wallpaper_embedded=embedded,
            missing_keys=missing,
        )


def run_conversion(
    settings: AppSettings,
    progress_cb: Callable[[int, int, str], None] | None = None,
) -> list[ConversionResult]:
    """Convert every desktop theme in the settings root, stopping on the first fatal error."""
    prepare_folders(settings)
    themes = ThemeScanner(settings.root).scan()
    if not themes:
        logger.info("No %s files found in %s", THEME_EXTENSION, settings.root.resolve())
        return []

    translation = load_translation(settings)
    alpha = read_map_file(settings.trans_map_path)
    converter = ThemeConverter(settings, translation, alpha)

    results: list[ConversionResult] = []
    for i, theme in enumerate(themes):
        if progress_cb:
            progress_cb(i + 1, len(themes), theme.stem)
        results.append(converter.convert(theme))
    return results
