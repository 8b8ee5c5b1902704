"""A falling-block puzzle game on a 10x20 grid, with its grid, pieces and drawing helpers."""

__version__ = "1.0.0"