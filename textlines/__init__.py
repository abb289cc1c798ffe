"""Text line segmentation helpers: geometry, search areas, line contours and line image extraction."""

__version__ = "0.1.0"
__all__ = ["geometry", "search", "contours", "extraction"]