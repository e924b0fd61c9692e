"""
Domain exceptions raised while measuring a boundary.

Every failure is terminal for the request that triggered it; nothing in
the core retries.
"""


class MeasurementError(Exception):
    """Base class for measurement failures."""
    pass


class ValidationError(MeasurementError, ValueError):
    """The candidate boundary is not an acceptable coordinate ring."""
    pass


class ComputationError(MeasurementError):
    """Area or distance math produced a non-finite result."""
    pass


class PersistenceError(MeasurementError):
    """The measurement store could not append or read records."""
    pass
