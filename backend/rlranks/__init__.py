"""Rocket League rank resolution service."""

__version__ = "0.1.0"
