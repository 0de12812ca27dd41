"""
Scatter Errors
==============
Exceptions raised by the scatter pipeline.

All of them derive from ValueError, so callers that already guard input
validation with ``except ValueError`` keep working.
"""


class ScatterError(ValueError):
    """Base class for every error raised by blockscatter."""


class InvalidGeometry(ScatterError):
    """The mesh cannot be scattered on (no triangles, zero area, bad arrays)."""


class InvalidConfiguration(ScatterError):
    """Counts, items or options are out of range."""
