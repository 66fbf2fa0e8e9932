"""Dream Image Generator backend and generation core."""

__version__ = "0.1.0"
