"""Looping replay of a day of aircraft state vectors."""

__version__ = "0.1.0"
