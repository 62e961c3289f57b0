"""
setup.py for ctrf-reporter.

Package sources live under ``src/``; the ``ctrf-reporter`` console script
exposes the event replay CLI.
"""

from setuptools import find_packages, setup

setup(
    name="ctrf-reporter",
    version="0.1.0",
    description="Aggregate Cypress run events into a CTRF JSON report",
    python_requires=">=3.9",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "click>=8.1",
        "loguru>=0.7",
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "ctrf-reporter=ctrf_reporter.cli:main",
        ],
    },
)
