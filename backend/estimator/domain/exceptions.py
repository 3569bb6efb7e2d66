"""Domain-specific exceptions — framework-independent."""


class EntityNotFoundError(Exception):
    """Raised when a requested entity does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} with id '{entity_id}' not found")


class RecordValidationError(Exception):
    """Raised when a record is missing a required field or carries bad input.

    The message is meant to be shown to the caller as-is.
    """

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class AuthenticationError(Exception):
    """Raised when a request carries no access token or an invalid one."""

    def __init__(self, message: str = "Invalid access token"):
        self.message = message
        super().__init__(message)


class IdentityProviderError(Exception):
    """Raised when the external identity provider rejects a request.

    ``status_code`` is the provider's HTTP status, or 0 when the provider
    could not be reached at all.
    """

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"[identity] {status_code}: {message}")


class RecordStoreError(Exception):
    """Raised when the key-value persistence layer fails."""

    def __init__(self, operation: str, key: str):
        self.operation = operation
        self.key = key
        super().__init__(f"Record store {operation} failed for key '{key}'")


class OperationInProgressError(Exception):
    """Raised when an editor action is invoked while the same action is in flight."""

    def __init__(self, action: str):
        self.action = action
        super().__init__(f"'{action}' is already in progress")


class EstimateApiError(Exception):
    """Raised when the estimate API answers with an unexpected error status."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"[estimate-api] {status_code}: {message}")
