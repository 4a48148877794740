"""
Command-line tools.

Usage:
    pumpfoil detect session.gpx --threshold 9
    python -m pumpfoil.tools.cli defaults
"""
