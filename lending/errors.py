class LendingError(Exception):
    """Base exception for lending errors. `status_code` is used by the HTTP layer."""

    status_code = 400

    def __init__(self, message: str = ""):
        super().__init__(message or self.__class__.__doc__)
        self.message = message or self.__class__.__doc__


class NotFound(LendingError):
    """Referenced entity does not exist."""

    status_code = 404


class Conflict(LendingError):
    """Unique constraint or isolation violation; the caller may retry."""

    status_code = 409


class BorrowLimitExceeded(LendingError):
    """Member already holds the maximum number of open loans."""

    status_code = 409


class CopyUnavailable(LendingError):
    """Copy is already on an open loan."""

    status_code = 409


class AlreadyReturned(LendingError):
    """Loan has already been returned."""

    status_code = 409


class ValidationError(LendingError, ValueError):
    """Malformed input."""

    status_code = 400
