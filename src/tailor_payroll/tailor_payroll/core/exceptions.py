class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class ConfigurationError(DomainError):
    """Raised when an employee has no active salary structure."""


class RuleNotFoundError(DomainError):
    """Raised when no active commission rule matches an order type."""


class CalculationDegraded(DomainError):
    """Raised when tax computation fails and generation continues without tax."""


class PersistenceError(DomainError):
    """Raised when the store rejects a read or write."""


class PayrollLockedError(DomainError):
    """Raised when a payroll outside DRAFT is mutated or moved illegally."""
