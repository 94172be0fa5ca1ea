"""Syntegra psikotes admin and participant portal."""

__version__ = "0.1.0"
