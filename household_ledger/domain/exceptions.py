"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidDateFormatError(DomainException):
    """Transaction date does not follow the DD/MM/YYYY convention"""

    def __init__(self, value: str, transaction_id: str | None = None):
        self.value = value
        self.transaction_id = transaction_id
        if transaction_id is None:
            message = f"Invalid date {value!r}: expected DD/MM/YYYY"
        else:
            message = f"Invalid date {value!r} on transaction {transaction_id}: expected DD/MM/YYYY"
        super().__init__(message)


class TransactionNotFoundError(DomainException):
    """No transaction exists with the requested id"""

    pass


class DuplicateTransactionError(DomainException):
    """A transaction with the same id already exists"""

    pass


class SettlementOutOfRangeError(DomainException):
    """Fixed transaction settled for a month before it starts applying"""

    pass
