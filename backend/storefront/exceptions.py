"""
Domain exceptions raised by the storefront services.

Routers translate these into HTTP responses (see ``storefront.main``).
"""


class StorefrontError(Exception):
    """Base class for all domain errors."""


class ValidationError(StorefrontError):
    """Submitted data is missing required fields or is malformed."""

    def __init__(self, message: str, fields=None):
        super().__init__(message)
        self.fields = list(fields or [])


class NotFoundError(StorefrontError):
    """The targeted record does not exist."""


class InvalidTransitionError(StorefrontError):
    """
    The application is not in a state that allows the requested transition.

    Services report this case as a False result; routers raise it so the
    HTTP layer answers 409.
    """


class ConflictError(StorefrontError):
    """The write would break a uniqueness policy (one active application per
    merchant, one account per email)."""


class PersistenceError(StorefrontError):
    """The database failed to read or write."""


class ProvisioningError(StorefrontError):
    """Store creation or seeding failed after an approval was recorded."""


class SlugConflictError(StorefrontError):
    """Another store already uses the requested subdomain."""

    def __init__(self, subdomain: str):
        super().__init__(f"Subdomain already taken: {subdomain}")
        self.subdomain = subdomain
