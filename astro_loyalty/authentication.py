"""
Token exchange and bearer authentication for the Astro Loyalty API.

The token is fetched once, when a client is built, and used until the
process holding the client ends. Expiry is not tracked.
"""
import logging

import requests

from .config import TOKEN_PATH
from .errors import AuthenticationError

logger = logging.getLogger(__name__)


class BearerAuth(requests.auth.AuthBase):

    """
    BearerAuth attaches an OAuth2 bearer token to every request it signs.
    """

    def __init__(self, token):
        self.token = token

    def __call__(self, r):
        r.headers['Authorization'] = self.header()
        return r

    def header(self):
        return 'Bearer %s' % self.token


class Authenticator:

    """
    Authenticator exchanges username, password and client id for an access token.
    """

    def __init__(self, api_client, credentials):
        self.api_client = api_client
        self.credentials = credentials

    def token_request_body(self):
        """ Form body for the password grant. """
        return {
            'username': self.credentials.username,
            'password': self.credentials.password,
            'grant_type': 'password',
            'client_id': self.credentials.client_id,
        }

    def fetch_token(self):
        """ Perform the token request and return the access token. """
        logger.debug("POST %s (client_id=%s)", self.api_client._url(TOKEN_PATH), self.credentials.client_id)
        try:
            response = self.api_client.post(TOKEN_PATH, data=self.token_request_body())
        except requests.RequestException as exc:
            logger.warning("Token request failed: %s", exc)
            raise AuthenticationError(f"Token fetch failed: {exc}") from exc

        if not response.ok:
            reason = response.reason or str(response.status_code)
            logger.warning("Token request rejected: %s %s", response.status_code, reason)
            raise AuthenticationError(f"Token fetch failed: {reason}")

        try:
            token = response.json().get('access_token')
        except (ValueError, AttributeError) as exc:
            raise AuthenticationError(f"Token fetch failed: unreadable token response ({exc})") from exc

        if not token:
            raise AuthenticationError("Token fetch failed: response carried no access_token")
        return token
