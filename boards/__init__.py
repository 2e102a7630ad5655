"""
Expose the public board classes.
"""
from .grid_board import GridBoard

__all__ = ["GridBoard"]
