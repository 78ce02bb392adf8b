"""Runtime configuration read from module defaults and the environment."""
import os
from dataclasses import dataclass

from .errors import InvalidArgument

DEFAULT_BASE_URL = "https://api.astroloyalty.com/api/json"
DEFAULT_TIMEOUT = 30

TOKEN_PATH = "/token/"

ENV_BASE_URL = "ASTRO_LOYALTY_BASE_URL"
ENV_TIMEOUT = "ASTRO_LOYALTY_TIMEOUT"
ENV_USERNAME = "ASTRO_LOYALTY_USERNAME"
ENV_PASSWORD = "ASTRO_LOYALTY_PASSWORD"
ENV_CLIENT_ID = "ASTRO_LOYALTY_CLIENT_ID"


@dataclass(frozen=True)
class Settings:
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT

    @classmethod
    def from_env(cls, environ=None):
        environ = os.environ if environ is None else environ
        raw_timeout = environ.get(ENV_TIMEOUT)
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
        except ValueError:
            raise InvalidArgument(f"{ENV_TIMEOUT} must be a number of seconds, got {raw_timeout!r}")
        return cls(
            base_url=environ.get(ENV_BASE_URL) or DEFAULT_BASE_URL,
            timeout=timeout,
        )


@dataclass(frozen=True)
class Credentials:
    username: str
    password: str
    client_id: str

    def __repr__(self):
        return f"Credentials(username={self.username!r}, password='***', client_id={self.client_id!r})"

    @classmethod
    def from_env(cls, environ=None):
        environ = os.environ if environ is None else environ
        names = (ENV_USERNAME, ENV_PASSWORD, ENV_CLIENT_ID)
        missing = [name for name in names if not environ.get(name)]
        if missing:
            raise InvalidArgument(f"Missing environment variables: {', '.join(missing)}")
        return cls(*(environ[name] for name in names))
