"""Minesweeper with a grid that grows after every win, played in a pygame window."""

__version__ = "1.0.0"
__all__ = ["__version__"]