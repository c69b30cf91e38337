"""Contour: keystroke-level intent detection and dispatch engine."""

__version__ = "0.1.0"
