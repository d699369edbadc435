class ServiceError(Exception):
    """Business-rule failure carrying the HTTP status it maps to."""

    status = 400

    def __init__(self, message, status=None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status


class ValidationError(ServiceError):
    status = 400


class ConflictError(ServiceError):
    status = 400


class NotFoundError(ServiceError):
    status = 404


class ForbiddenError(ServiceError):
    status = 403


class PaymentGatewayError(ServiceError):
    status = 502


class MetadataTooLarge(ValidationError):
    """Condensed payment metadata still exceeds the gateway's per-value cap."""
