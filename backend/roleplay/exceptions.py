"""Domain exceptions rendered as ``{message, code, status}`` responses."""


class AppError(Exception):
    """Base application error class."""

    status_code = 400
    code = "BAD_REQUEST"

    def __init__(self, message, status_code=None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict:
        return {"message": self.message, "code": self.code, "status": self.status_code}


class BadRequestError(AppError):
    """Malformed or missing credentials or payload."""

    def __init__(self, message="Bad request"):
        super().__init__(message, 400)


class UnauthorizedError(AppError):
    def __init__(self, message="Authentication required"):
        super().__init__(message, 401)


class ForbiddenError(AppError):
    """The acting user is not allowed to perform the operation."""

    def __init__(self, message="Not authorized to perform this action"):
        super().__init__(message, 403)


class NotFoundError(AppError):
    def __init__(self, message="Resource not found"):
        super().__init__(message, 404)


class ConflictError(AppError):
    """Raised when trying to create a resource that already exists."""

    def __init__(self, message="Resource already exists"):
        super().__init__(message, 409)


class UnprocessableEntityError(AppError):
    """A business rule rejects an otherwise well-formed request."""

    def __init__(self, message="Unprocessable entity"):
        super().__init__(message, 422)


class TokenExpiredError(AppError):
    code = "TOKEN_EXPIRED"

    def __init__(self, message="Token has expired"):
        super().__init__(message, 410)


class MailDeliveryError(AppError):
    """Outbound email could not be handed to the mail server."""

    code = "MAIL_DELIVERY_FAILED"

    def __init__(self, message="Failed to send email"):
        super().__init__(message, 503)
