"""Find desktop theme archives in a directory."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

THEME_EXTENSION = ".tdesktop-theme"


@dataclass
class DesktopTheme:
    """Lightweight descriptor for a discovered desktop theme archive."""
    path: Path
    stem: str = field(init=False)
    size: int = field(init=False)

    def __post_init__(self) -> None:
        self.stem = self.path.name.removesuffix(THEME_EXTENSION)
        self.size = self.path.stat().st_size


class ThemeScanner:
    """Lists ``*.tdesktop-theme`` files directly inside a directory."""

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)

    def scan(self) -> list[DesktopTheme]:
        """Return all theme archives in the root directory, sorted by name."""
        return list(self.scan_iter())

    def scan_iter(self):
        """Yield theme archives one at a time."""
        for p in sorted(self._root.iterdir()):
            if not p.name.endswith(THEME_EXTENSION) or not p.is_file():
                continue
            try:
                yield DesktopTheme(path=p)
            except OSError:
                continue
