"""
Balancing errors.

Raised before any search work starts (bad input) or by the persistence
layer (missing match, concurrent update). Routes map them to HTTP statuses.
"""


class BalanceError(Exception):
    """Base class for team balancing failures."""
    status_code = 500


class BalanceValidationError(BalanceError, ValueError):
    """Input violates a precondition; fix the input before retrying."""
    status_code = 400


class MatchNotFoundError(BalanceError, LookupError):
    """No upcoming match with the requested id."""
    status_code = 404


class ConcurrencyConflict(BalanceError):
    """The match changed since the caller last read it."""
    status_code = 409
