# Configuration package initialization
"""
Quake Report Tools - Configuration System

This package provides a lightweight configuration system for the Quake report tools.

Quick Usage:
    from config import Config

    config = Config(profile='my_server')
    value = config.get('report.indent', 2)
"""

from config.config import Config

__all__ = ['Config']
