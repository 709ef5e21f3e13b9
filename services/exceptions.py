class ServiceError(Exception):
    """Base class for predictable service-layer exceptions."""


class NotFoundError(ServiceError):
    """Raised by a model service when the targeted entity does not exist."""


class ValidationError(ServiceError):
    """Raised when a payload or query violates the service's rules."""
