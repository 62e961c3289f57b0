"""
Custom exceptions used across ctrf-reporter.
"""


class CtrfReporterError(RuntimeError):
    """Base class for errors raised by the reporter itself."""

    pass


class ConfigurationError(CtrfReporterError):
    """Raised when the reporter cannot be constructed from the given options.

    This is fatal: without a subscription callable the reporter never sees
    any run events, so there is nothing to aggregate.
    """

    pass
