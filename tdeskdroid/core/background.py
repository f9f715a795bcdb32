"""Locate the theme background and render it as a mobile wallpaper JPEG."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from tdeskdroid.errors import ErrorCode, TDeskDroidError

logger = logging.getLogger(__name__)

CONVERTED_FILENAME = "converted.jpg"
CANVAS_SIZE = 1920
JPEG_QUALITY = 90

# Probe order: tiles win over full-size backgrounds, JPEG over PNG.
_CANDIDATES: tuple[tuple[str, bool, str], ...] = (
    ("tiled.jpg", True, "JPEG"),
    ("tiled.png", True, "PNG"),
    ("background.jpg", False, "JPEG"),
    ("background.png", False, "PNG"),
)


@dataclass(frozen=True, slots=True)
class BackgroundAsset:
    """The background image found in an extracted theme."""

    path: Path | None
    tiled: bool = False
    encoding: str = ""

    @property
    def present(self) -> bool:
        return self.path is not None

    @property
    def is_jpeg(self) -> bool:
        return self.encoding == "JPEG"


def find_background(theme_dir: str | Path) -> BackgroundAsset:
    """Return the highest-priority background asset in *theme_dir*."""
    theme_dir = Path(theme_dir)
    for name, tiled, encoding in _CANDIDATES:
        candidate = theme_dir / name
        if candidate.is_file():
            return BackgroundAsset(path=candidate, tiled=tiled, encoding=encoding)
    return BackgroundAsset(path=None)


def tile_image(tile: Image.Image, size: int = CANVAS_SIZE) -> Image.Image:
    """Repeat *tile* over a square RGBA canvas, copying pixels without blending."""
    canvas = Image.new("RGBA", (size, size))
    tile = tile.convert("RGBA")
    tile_w, tile_h = tile.size
    step_x = size // tile_w
    step_y = size // tile_h
    # Inclusive bounds so a partial last row and column are drawn.
    for x in range(step_x + 1):
        for y in range(step_y + 1):
            canvas.paste(tile, (x * tile_w, y * tile_h))
    return canvas


def flatten_onto_black(image: Image.Image) -> Image.Image:
    """Drop alpha the way a premultiplied encoder does: translucent pixels darken."""
    if image.mode == "RGB":
        return image
    rgba = image.convert("RGBA")
    black = Image.new("RGBA", rgba.size, (0, 0, 0, 255))
    return Image.alpha_composite(black, rgba).convert("RGB")


def compose_background(
    theme_dir: str | Path,
    *,
    size: int = CANVAS_SIZE,
    quality: int = JPEG_QUALITY,
) -> Path:
    """Write ``converted.jpg`` into *theme_dir* and return its path."""
    theme_dir = Path(theme_dir)
    asset = find_background(theme_dir)
    output = theme_dir / CONVERTED_FILENAME

    if not asset.present:
        logger.warning("Bg not found in %s, using a blank %dx%d wallpaper", theme_dir, size, size)
        image = Image.new("RGB", (size, size))
    else:
        image = _decode(asset)
        if asset.tiled:
            image = tile_image(image, size)

    flatten_onto_black(image).save(output, format="JPEG", quality=quality)
    logger.debug("wrote %s (tiled=%s source=%s)", output, asset.tiled, asset.path)
    return output


def _decode(asset: BackgroundAsset) -> Image.Image:
    try:
        with Image.open(asset.path, formats=[asset.encoding]) as img:
            img.load()
            return img.copy()
    except (OSError, UnidentifiedImageError) as exc:
        raise TDeskDroidError(
            ErrorCode.BACKGROUND_UNREADABLE, path=asset.path, details={"original": str(exc)}
        ) from exc
