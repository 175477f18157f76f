"""Falling-block puzzle game: a seedable game-state engine with pygame and gymnasium adapters."""

__version__ = "0.1.0"
