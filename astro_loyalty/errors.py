"""Exceptions raised by the Astro Loyalty client."""


class AstroLoyaltyError(Exception):
    """Base class for every error this package raises."""


class AuthenticationError(AstroLoyaltyError):
    """The token exchange did not succeed."""


class ApiError(AstroLoyaltyError):
    """An endpoint call failed at the transport or application level."""

    def __init__(self, message, status_code=None, astro_status=None):
        super().__init__(message)
        self.status_code = status_code
        self.astro_status = astro_status


class InvalidArgument(AstroLoyaltyError, ValueError):
    """A call was rejected locally, before anything went over the wire."""
