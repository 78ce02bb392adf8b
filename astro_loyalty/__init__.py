import logging

from .authentication import Authenticator, BearerAuth
from .client import Client, CustomerAttributes
from .config import Credentials, Settings
from .errors import ApiError, AstroLoyaltyError, AuthenticationError, InvalidArgument

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "Authenticator",
    "BearerAuth",
    "Client",
    "CustomerAttributes",
    "Credentials",
    "Settings",
    "ApiError",
    "AstroLoyaltyError",
    "AuthenticationError",
    "InvalidArgument",
]
