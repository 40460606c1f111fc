"""Error kinds raised by the services and rendered by the API as ``{"error": msg}``."""


class ServiceError(Exception):
    status_code = 400
    default_message = 'Request failed'

    def __init__(self, message=None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthorized(ServiceError):
    status_code = 401
    default_message = 'Unauthorized'


class Forbidden(ServiceError):
    status_code = 403
    default_message = 'Forbidden'


class ValidationError(ServiceError):
    default_message = 'Invalid request'


class AlreadyRegistered(ServiceError):
    default_message = 'Already registered'


class ResourceFull(ServiceError):
    default_message = 'Resource is full'


class InvalidTransition(ServiceError):
    default_message = 'Invalid status transition'


class ResourceNotFound(ServiceError):
    status_code = 404
    default_message = 'Resource not found'


class ProviderNotFound(ResourceNotFound):
    default_message = 'Mentor not found'


class StoreFailure(ServiceError):
    """Raised when the backing store rejects or fails an operation.

    ``detail`` keeps the underlying error for the logs; clients only ever see
    the generic message.
    """
    status_code = 500
    default_message = 'Internal server error'

    def __init__(self, detail=None, message=None):
        self.detail = detail
        super().__init__(message)


class DuplicateRow(StoreFailure):
    """A unique constraint rejected an insert."""
    status_code = 400
    default_message = 'Duplicate record'


class GenerationError(Exception):
    """The text-generation service failed or returned an unusable payload."""
