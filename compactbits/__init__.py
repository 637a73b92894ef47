"""Vectors of fixed-width unsigned values packed into 64-bit words."""

__version__ = "0.1.0"