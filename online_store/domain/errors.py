# online_store/domain/errors.py


class StoreError(Exception):
    """Bazowy wyjatek domeny sklepu."""


class NotFoundError(StoreError):
    pass


class InvalidStateError(StoreError):
    pass


class ValidationFailedError(StoreError):
    def __init__(self, message: str, errors: dict[str, str] | None = None):
        super().__init__(message)
        self.errors = errors or {}


class ConflictError(StoreError):
    """Kolizja wspolbieznosci (wersja koszyka, lock) albo duplikat."""
