"""
Quake Report Tools - Python package for Quake 3 Arena server logs

This package parses Quake 3 Arena dedicated server games logs into games and
kill events, and aggregates them into per-game kill reports.
"""

__version__ = '1.0.0'
