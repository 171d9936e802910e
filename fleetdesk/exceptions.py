"""Error kinds shared by the repository, the session layer and the screens."""


class FleetDeskError(Exception):
    """Base class – every error here is caught by the screen that started the call."""

    default_message = "Something went wrong."

    def __init__(self, message=None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    def __str__(self):
        return self.message


class AuthError(FleetDeskError):
    """Bad credentials, failed reset request, failed sign-out, dead recovery link."""

    default_message = "Authentication failed."


class RepositoryError(FleetDeskError):
    """Database failure on read or write, or an unknown account id."""

    default_message = "The account store could not complete the request."


class ValidationError(FleetDeskError):
    """A required account field is missing."""

    default_message = "Required fields are missing."

    def __init__(self, message=None, fields=()):
        super().__init__(message)
        self.fields = tuple(fields)
