class ApiError(Exception):
    """Error that maps onto a JSON ``{"error": ...}`` response."""
    status = 500

    def __init__(self, message, status=None):
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status


class Unauthenticated(ApiError):
    status = 401

    def __init__(self, message='Unauthorized'):
        super().__init__(message)


class NotFound(ApiError):
    status = 404


class ValidationFailed(ApiError):
    status = 400
