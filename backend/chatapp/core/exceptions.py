"""
Domain exceptions raised by the services and mapped to HTTP responses in main.py.
"""


class ChatAppError(Exception):
    """Base class for errors that are reported to the client."""
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str = None):
        self.message = message or self.default_message
        super().__init__(self.message)


# 401
class UnauthorizedError(ChatAppError):
    status_code = 401
    default_message = "Not authenticated"


class InvalidCredentialsError(UnauthorizedError):
    default_message = "Incorrect username or password"


# 403
class ForbiddenError(ChatAppError):
    status_code = 403
    default_message = "Insufficient permissions"


# 404
class NotFoundError(ChatAppError):
    status_code = 404
    default_message = "Not found"


class UserNotFoundError(NotFoundError):
    default_message = "User not found"


class AnonymousUserNotFoundError(NotFoundError):
    default_message = "Anonymous user not found"


# 409
class ConflictError(ChatAppError):
    status_code = 409
    default_message = "Conflict"


class UserAlreadyExistsError(ConflictError):
    default_message = "User already exists"


# 400
class InvalidInputError(ChatAppError):
    status_code = 400
    default_message = "Invalid input"


class EmptyContentError(InvalidInputError):
    default_message = "Message content must not be empty"


class CannotDeleteAnonymousError(InvalidInputError):
    default_message = "The anonymous user cannot be deleted"


# Token verification failures. Internal only: the API collapses them into UnauthorizedError.
class TokenError(Exception):
    """Base class for token verification failures."""


class TokenExpiredError(TokenError):
    pass


class TokenMalformedError(TokenError):
    pass


class TokenSignatureError(TokenError):
    pass
