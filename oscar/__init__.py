"""OSCAR voice notes core."""

__version__ = "0.1.0"
