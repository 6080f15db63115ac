"""Load, edit and save 8-bit and 24-bit BMP images, with an interactive 8-bit editor."""

__version__ = "0.1.0"
__all__ = ["bmp8", "bmp24", "utils", "cli"]