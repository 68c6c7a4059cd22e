"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidInputError(DomainException):
    """Caller supplied data that violates a precondition (empty participants, bad amounts, bad dates)"""

    pass


class UnknownParticipantError(InvalidInputError):
    """Expense payer is not a member of the trip"""

    def __init__(self, participant: str):
        super().__init__(f"Expense paid by unknown participant: {participant!r}")
        self.participant = participant


class ArithmeticDegenerateError(DomainException):
    """Computation produced NaN/Infinity or broke a numeric invariant"""

    pass


class StoreAPIError(DomainException):
    """Wealth tracker backend returned an error or is unavailable"""

    pass
