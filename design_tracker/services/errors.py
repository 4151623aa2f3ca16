"""Error kinds raised by the services and rendered by the app error handler."""


class TrackerError(Exception):
    """Base error. Carries a human-readable message and an HTTP status."""

    kind = 'error'
    status_code = 400

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {'error': self.kind, 'message': self.message}


class Forbidden(TrackerError):
    """Role or ownership does not allow the operation."""
    kind = 'forbidden'
    status_code = 403


class InvalidState(TrackerError):
    """Transition is not valid from the request's current status."""
    kind = 'invalid_state'
    status_code = 409


class PayloadTooLarge(TrackerError):
    kind = 'payload_too_large'
    status_code = 413


class NotFound(TrackerError):
    kind = 'not_found'
    status_code = 404


class ValidationError(TrackerError):
    kind = 'validation_error'
    status_code = 400


class StoreError(TrackerError):
    """Connectivity or constraint failure in the database."""
    kind = 'store_error'
    status_code = 500
