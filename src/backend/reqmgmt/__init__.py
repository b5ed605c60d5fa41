"""Requirements management search and resource catalog backend."""

__version__ = "1.0.0"
