"""
ctrf-reporter: CTRF JSON reports from Cypress run events.
"""

__version__ = "0.1.0"
__author__ = "ctrf-reporter Team"
__description__ = "Aggregate Cypress run events into a CTRF JSON report"

from .exceptions import ConfigurationError, CtrfReporterError
from .reporter import GenerateCtrfReport, normalize_filename
from .reporter_config import RunConfiguration

__all__ = [
    "ConfigurationError",
    "CtrfReporterError",
    "GenerateCtrfReport",
    "RunConfiguration",
    "normalize_filename",
]
