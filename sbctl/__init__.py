"""Secure Boot helpers: configuration, signing database, ESP, DMI quirks and status."""

__version__ = "0.1.0"