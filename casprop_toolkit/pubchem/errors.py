"""Exceptions raised by the PubChem client."""


class PubChemError(Exception):
    """Base exception for PubChem API errors."""

    pass


class CompoundNotFoundError(PubChemError):
    """Raised when PubChem answers 404 for a request."""

    def __init__(self, message: str = "Compound not found in PubChem"):
        super().__init__(message)


class PubChemHTTPError(PubChemError):
    """Raised for a non-2xx status that is neither retryable nor 404."""

    def __init__(self, status: int, reason: str = ""):
        self.status = status
        self.reason = reason
        super().__init__(f"HTTP {status}: {reason}")


class MaxRetriesExceededError(PubChemError):
    """Raised when every attempt of a request was rate limited or unavailable."""

    def __init__(self, message: str = "Max retries exceeded"):
        super().__init__(message)
