"""Authentication exceptions."""

from edi_dashboard.services.exceptions import AuthenticationError, PermissionDeniedError


class InvalidCredentials(AuthenticationError):
    """Username/password combination rejected."""

    pass


class NotAuthenticated(AuthenticationError):
    """Request has no authenticated session."""

    pass


class AdminRequired(PermissionDeniedError):
    """Action is restricted to admin users."""

    pass
