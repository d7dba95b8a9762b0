"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Raised when a required input is missing or empty."""

    def __init__(self, field: str, message: str | None = None):
        self.field = field
        super().__init__(message or f"{field} must be defined")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class StorageError(DomainError):
    """Raised when the underlying persistence layer fails."""

    pass


class DuplicateCredentialError(StorageError):
    """Raised when a provider client id is already linked to another user."""

    def __init__(self, provider: str, client_id: str):
        self.provider = provider
        self.client_id = client_id
        super().__init__(f"{provider} client id already linked: {client_id}")
