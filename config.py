"""
Global settings shared across modules.
"""
import os
from pathlib import Path

# Window ---------------------------------------------------------------
WIDTH, HEIGHT = 900, 640
FPS           = 60
FONT_NAME     = None            # pygame default font

# Paths ----------------------------------------------------------------
PROJECT_ROOT = Path(__file__).parent
LEVELS_DIR   = Path(os.getenv("PIPEWORKS_LEVELS_DIR", PROJECT_ROOT / "levels"))

# Logging --------------------------------------------------------------
LOG_LEVEL  = os.getenv("PIPEWORKS_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - [%(name)s:%(funcName)s:%(lineno)d] - %(levelname)s - %(message)s"
