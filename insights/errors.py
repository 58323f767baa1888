"""Hard failures raised by the insight pipeline.

Both propagate to the caller; the pipeline never turns them into a
fallback insight.
"""


class InsightError(Exception):
    """Base class for failures that leave a transaction without an insight."""


class LookupFailure(InsightError):
    """The signature directory could not be queried or answered unusably."""


class DecodeFailure(InsightError):
    """Call data could not be decoded against the resolved parameter types."""
