"""Domain-level exceptions.

Every rejected request raises a DomainException subclass; the CLI turns
them into a one-line error and exit code 1.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class PersistenceError(DomainException):
    """The store rejected a write (constraint violation, I/O failure).

    Nothing from the failed operation is visible afterwards.
    """


class AccessDeniedError(DomainException):
    """The supplied staff passphrase did not match."""
