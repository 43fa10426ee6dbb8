# storefront/domain/errors.py


class StoreError(Exception):
    """Base class for catalog and cart failures."""


class ValidationError(StoreError, ValueError):
    """Malformed input, nothing was changed."""


class NotFoundError(StoreError, LookupError):
    """Unknown product id or cart line, nothing was changed."""


class StorageError(StoreError):
    """
    Durability write failed.
    The in-memory change is NOT rolled back, so the caller should treat
    the state as uncertain rather than assume the mutation failed.
    """
