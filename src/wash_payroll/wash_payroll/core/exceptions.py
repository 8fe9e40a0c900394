class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced record (e.g. a worker) does not exist."""


class InvalidCategoryError(ValidationError):
    """Raised when a salary settings category name is not recognised."""


class UnknownEmployeeTypeError(ValidationError):
    """Raised by the standalone calculator for an unsupported employee type."""


class SettingsConfigurationError(DomainError):
    """Raised when the active settings lack a tariff the calculation needs."""


class StorageError(DomainError):
    """Raised when the underlying database read/write fails."""
