"""Interactive console currency converter."""

__version__ = "0.1.0"
