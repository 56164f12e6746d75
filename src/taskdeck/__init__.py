"""taskdeck: terminal client for a REST task collection."""

__version__ = "0.1.0"
