"""Feature-based commit tracking and release assembly on top of git."""

__version__ = "0.1.0"
