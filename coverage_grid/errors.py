class CoverageGridError(Exception):
    """
    Base class for errors surfaced to callers of the schedule engine.
    """


class ScheduleValidationError(CoverageGridError):
    """
    The request itself is unusable (missing or malformed date range).
    Raised before any record is fetched.
    """


class ScheduleFetchError(CoverageGridError):
    """
    One of the upstream record fetches failed. The whole aggregation is
    abandoned; the original exception is chained as ``__cause__``.
    """

    def __init__(self, source: str, message: str = "Failed to fetch schedule"):
        super().__init__(message)
        self.source = source
