"""Custom exception classes."""
from src.utils.validation import first_error


class ValidationError(Exception):
    """Raised when registration data fails validation."""

    def __init__(self, errors):
        self.errors = dict(errors)
        first = first_error(self.errors)
        super().__init__(first.message if first is not None else "Invalid registration")


class DuplicateEmailError(Exception):
    """Raised when the email is already registered."""

    def __init__(self, message: str = "Email is already registered"):
        super().__init__(message)


class ConflictError(Exception):
    """Raised when the store rejects an insert on a uniqueness constraint."""
    pass


class StoreUnavailableError(Exception):
    """Raised when the record store fails for any reason other than 'no rows'."""
    pass
