"""Decrypt and decode advertised data from battery monitors and solar controllers."""

__version__ = "0.1.0"