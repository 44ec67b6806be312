"""Exceptions raised below the HTTP layer.

Services and credential helpers raise these; the error handlers in
``main`` and the route handlers translate them into status codes.
"""


class StorageError(Exception):
    """Base exception for persistence failures."""
    pass


class QueryTimeoutError(StorageError):
    """A storage call did not finish within the configured timeout."""
    pass


class NoRowsAffectedError(StorageError):
    """An UPDATE or DELETE matched no row."""
    pass


class DuplicateAttendeeError(StorageError):
    """The user already attends the event."""
    pass


class CredentialError(Exception):
    """Base exception for password and token failures."""
    pass


class MalformedHashError(CredentialError):
    """A stored password value is not a bcrypt hash."""
    pass


class TokenError(CredentialError):
    """An access token failed verification."""
    pass


class TokenExpiredError(TokenError):
    """An access token is past its expiry."""
    pass
