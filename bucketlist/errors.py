"""Custom exception classes for the application."""


class AppError(Exception):
    """Base application error class."""

    def __init__(self, message, status_code=400):
        """Initialize the error."""
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class ValidationError(AppError):
    """Raised when user input fails validation."""

    def __init__(self, message="Validation failed."):
        """Initialize the error."""
        super().__init__(message, 400)


class InvalidSlotIndex(ValidationError):
    """Raised when a slot index is not an integer in the range 0-3."""

    def __init__(self, message="Invalid slot index. Must be 0-3."):
        """Initialize the error."""
        super().__init__(message)


class CannotRemoveOwner(ValidationError):
    """Raised when an owner tries to remove themselves from their bucket."""

    def __init__(self, message="Cannot remove the bucket owner."):
        """Initialize the error."""
        super().__init__(message)


class NotAuthenticated(AppError):
    """Raised when a request carries no valid session."""

    def __init__(self, message="Not authenticated."):
        """Initialize the error."""
        super().__init__(message, 401)


class Forbidden(AppError):
    """Raised when the caller lacks the relationship an action requires."""

    def __init__(self, message="Access denied."):
        """Initialize the error."""
        super().__init__(message, 403)


class NotFoundError(AppError):
    """Raised when a resource is not found."""

    def __init__(self, message="Resource not found."):
        """Initialize the error."""
        super().__init__(message, 404)


class UserNotFound(NotFoundError):
    def __init__(self, message="User not found."):
        super().__init__(message)


class BucketNotFound(NotFoundError):
    def __init__(self, message="Bucket not found."):
        super().__init__(message)


class InvalidOrExpiredInvite(NotFoundError):
    """Raised for unknown and expired invite codes alike."""

    def __init__(self, message="Invalid or expired invite code."):
        """Initialize the error."""
        super().__init__(message)


class DuplicateResourceError(AppError):
    """Raised when trying to create a resource that already exists."""

    def __init__(self, message="Resource already exists."):
        """Initialize the error."""
        super().__init__(message, 409)
