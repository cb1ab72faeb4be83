"""Errors raised by the franchise store."""


class FranchiseStoreError(Exception):
    """Base class for store errors."""


class FranchiseNotFound(FranchiseStoreError):
    """No franchise exists with the requested id."""

    def __init__(self, franchise_id: str):
        super().__init__(f"Franchise {franchise_id} not found")
        self.franchise_id = franchise_id


class FranchiseValidationError(FranchiseStoreError):
    """A required field is missing or blank."""

    def __init__(self, errors: dict[str, str]):
        details = ", ".join(f"{name}: {reason}" for name, reason in errors.items())
        super().__init__(f"Franchise validation failed: {details}")
        self.errors = errors


class StoreUnavailable(FranchiseStoreError):
    """The store could not be reached or the query failed."""


class InvalidFranchiseId(StoreUnavailable):
    """The id does not have the store's identifier format.

    Treated as a store failure, not as a missing record.
    """
