"""Authentication and user account exceptions."""

from journey_planner.services.exceptions import ConflictError, NotFoundError, ServiceError, ValidationError


class InvalidCredentials(ServiceError):
    """Username or password is wrong."""

    pass


class InvalidSessionToken(ServiceError):
    """Session token is missing, expired or tampered with."""

    pass


class IncorrectCurrentPassword(ServiceError):
    """Current password supplied for a password change does not match."""

    pass


class UserNotFound(NotFoundError):
    """User not found."""

    pass


class UserAlreadyExists(ConflictError):
    """Username is already taken."""

    pass


class InvalidUserInput(ValidationError):
    """Username, password or role input is unusable."""

    pass
