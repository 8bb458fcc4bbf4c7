"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class ParseError(DomainException):
    """Statement could not be turned into transactions"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingColumnError(ParseError):
    """A required column has no matching header"""

    def __init__(self, column: str):
        super().__init__(
            f'Required column "{column}" not found. Expected headers: date, description, amount.'
        )
        self.column = column


class EmptyOrUnparseableError(ParseError):
    """File is empty or yields no structurally valid rows"""

    def __init__(self):
        super().__init__("Could not parse the CSV file. Check that it's a valid CSV.")


class NoValidTransactionsError(ParseError):
    """Every row was dropped for a bad date or amount"""

    def __init__(self):
        super().__init__(
            "No valid transactions found in the CSV. "
            "Check that the date and amount columns contain valid values."
        )


class InvalidBalanceError(DomainException):
    """Manually entered balance is not a number"""

    pass


class LLMServiceError(DomainException):
    """Language model service returned an error or is unavailable"""

    pass
