"""Errors raised by the analyzer core and its HTTP layer"""


class AnalyzerError(Exception):
    """Base class for analyzer errors"""


class InvalidRequestError(AnalyzerError, ValueError):
    """Request rejected before any store access (e.g. negative max_results)"""


class StoreUnavailableError(AnalyzerError):
    """A backing store failed while serving a request"""

    def __init__(self, message: str, cause: Exception = None):
        super().__init__(message)
        self.cause = cause
