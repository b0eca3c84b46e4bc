"""A tile-based collect-and-escape game with map validation and XPM textures."""

__version__ = "0.1.0"