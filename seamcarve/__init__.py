"""Content-aware image resizing by seam carving, with text-image and PNG conversion."""

__version__ = "0.1.0"
__all__ = [
    "graph",
    "options",
    "parallel",
    "parallel_seams",
    "sequential",
    "textimage",
]