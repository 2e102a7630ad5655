# scenes/loader.py

import logging
from pathlib import Path

from core.levels import discover_levels

logger = logging.getLogger(__name__)


def register_all(registry, levels_dir: Path, launcher=None):
    """
    Register every level file found in `levels_dir` under its file name
    (without extension).  `launcher` defaults to building a LevelScene.
    """
    if launcher is None:
        from scenes.level import launch as launcher
    for path in discover_levels(levels_dir):
        registry.register(path.stem, path, launcher=launcher)
    logger.info("Registered %d levels from %s", len(registry), levels_dir)
