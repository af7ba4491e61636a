"""Desktop environment switch script generator."""

__version__ = "0.1.0"
