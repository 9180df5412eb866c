"""
Domain exceptions for the explore service.

Every exception carries a stable ``code`` that callers can enumerate, plus the
HTTP status the interface layer maps it to. Messages are safe to show to
clients; driver errors and query text never end up in them.
"""


class ExploreError(Exception):
    """Base class for every failure the service reports to its callers."""

    code = "internal"
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_detail(self) -> dict:
        return {"error": self.code, "message": self.message}


class ValidationError(ExploreError):
    """Malformed input such as a bad pagination token or an empty identifier."""

    code = "invalid_argument"
    status_code = 400


class NotFoundError(ExploreError):
    """Point lookup or delete found no decision for the pair."""

    code = "not_found"
    status_code = 404


class RepositoryError(ExploreError):
    """The decision store failed; the operation had no partial effect."""

    code = "repository_error"
    status_code = 503


class DeadlineExceededError(RepositoryError):
    """A repository call did not finish before the caller's deadline and was cancelled."""

    code = "deadline_exceeded"
    status_code = 504
