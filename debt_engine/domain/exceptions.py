"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class FinanceServiceError(DomainException):
    """Finance API returned an error, timed out, or sent malformed data"""

    pass


class UpstreamDataError(DomainException):
    """Loans or the finance summary could not be fetched for a calculation"""

    pass
