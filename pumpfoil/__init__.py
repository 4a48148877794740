"""Pumpfoil: pumping run detection and session statistics."""

__version__ = "0.1.0"
