"""Cat tower defense: a pygame game and its display-free rules for maps, waves, towers and progress."""

__version__ = "0.1.0"