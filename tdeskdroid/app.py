"""Console bootstrap."""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
import sys

from tdeskdroid.config.settings import AppSettings
from tdeskdroid.core.converter import run_conversion
from tdeskdroid.errors import TDeskDroidError, classify_exception, format_error_for_user

FOOTER = """
Converting done.
If you have any bugs feel free to open an issue with the theme attached."""


def _configure_logger(settings: AppSettings) -> logging.Logger:
    logger = logging.getLogger("tdeskdroid")
    if logger.handlers:
        return logger

    logger.setLevel(logging.INFO)
    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(console)

    log_path = settings.log_path
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = RotatingFileHandler(
        log_path,
        maxBytes=512_000,
        backupCount=3,
        encoding="utf-8",
    )
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def _log_progress(step: int, total: int, stem: str) -> None:
    logging.getLogger("tdeskdroid").info("Theme %d of %d: %s", step, total, stem)


def run_app(root: str | Path = ".") -> int:
    """Convert every desktop theme in *root* and return the process exit code."""
    try:
        settings = AppSettings.load(root)
        logger = _configure_logger(settings)
    except (TDeskDroidError, OSError) as exc:
        print(format_error_for_user(exc), file=sys.stderr)
        return 1

    try:
        results = run_conversion(settings, progress_cb=_log_progress)
    except (TDeskDroidError, OSError) as exc:
        error = classify_exception(exc)
        logger.error("%s", format_error_for_user(error))
        logger.debug("fatal error: %s", error.to_dict())
        return 1

    missing = sum(len(result.missing_keys) for result in results)
    logger.info("%d theme(s) converted into %s, %d missing key(s)",
                len(results), settings.output_dir, missing)
    logger.info(FOOTER)
    return 0
