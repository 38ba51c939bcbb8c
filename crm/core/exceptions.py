"""Custom exceptions for the CRM application."""


class CRMException(Exception):
    """Base exception for CRM application."""

    pass


class ValidationError(CRMException):
    """Raised when validation fails."""

    pass


class NotFoundError(CRMException):
    """Raised when a referenced customer, stage, employee or other record is missing."""

    pass


class InUseError(CRMException):
    """Raised when a record cannot be deleted because other records reference it."""

    pass


class DatabaseError(CRMException):
    """Raised when a database operation fails."""

    pass


class ServiceError(CRMException):
    """Raised when a service operation fails."""

    pass


class ConfigurationError(CRMException):
    """Raised when configuration is invalid."""

    pass


class AuthenticationError(CRMException):
    """Raised when authentication fails."""

    pass


class AuthorizationError(CRMException):
    """Raised when an authenticated user lacks a required scope."""

    pass
