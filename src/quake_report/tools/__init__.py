"""
Quake Report Command Line Tools

This package provides the command line tools built on the games log parser
and the report aggregator.
"""

from .report_tool import QuakeReportTool

__all__ = [
    'QuakeReportTool',
]
