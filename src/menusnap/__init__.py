"""MenuSnap - rank restaurant menu items by healthiness from a photo."""

__version__ = "1.0.0"
