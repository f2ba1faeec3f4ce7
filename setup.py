#!/usr/bin/env python

from setuptools import setup, find_packages

setup(
    name="quake_report",
    version="1.0.0",
    description="Python tools to turn Quake 3 Arena server games logs into per-game kill reports",
    author="GeNe FRAG",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    include_package_data=True,
    python_requires=">=3.7",
    install_requires=[
        "pandas>=1.0.0",
        "openpyxl>=3.0.0",
        "matplotlib>=3.0.0",
    ],
    extras_require={
        "test": ["pytest>=6.0"],
    },
    entry_points={
        "console_scripts": [
            "quake-report=quake_report.tools.report_tool:main",
        ],
    },
)
