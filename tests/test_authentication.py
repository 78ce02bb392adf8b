from urllib.parse import parse_qs

import pytest
import requests

from astro_loyalty import AuthenticationError, Client
from astro_loyalty.authentication import BearerAuth

from .conftest import TEST_CLIENT_ID, TEST_PASSWORD, TEST_USER, TOKEN_URL


def test_client_fetches_token_on_construction(client, token_endpoint):
    assert client.token == 'sample_token'
    assert token_endpoint.call_count == 1


def test_token_request_uses_password_grant(client, token_endpoint):
    form = parse_qs(token_endpoint.last_request.text)
    assert form == {
        'username': [TEST_USER],
        'password': [TEST_PASSWORD],
        'grant_type': ['password'],
        'client_id': [TEST_CLIENT_ID],
    }
    assert 'Authorization' not in token_endpoint.last_request.headers


def test_default_base_url(client):
    assert client.base_url == 'https://api.astroloyalty.com/api/json'


def test_unauthorized_token_response_raises(requests_mock, credentials):
    requests_mock.post(TOKEN_URL, status_code=401, reason='Unauthorized')
    with pytest.raises(AuthenticationError, match='Token fetch failed: Unauthorized'):
        Client(**credentials)


def test_transport_failure_raises(requests_mock, credentials):
    requests_mock.post(TOKEN_URL, exc=requests.exceptions.ConnectTimeout)
    with pytest.raises(AuthenticationError, match='Token fetch failed'):
        Client(**credentials)


def test_missing_access_token_raises(requests_mock, credentials):
    requests_mock.post(TOKEN_URL, json={'token_type': 'bearer'})
    with pytest.raises(AuthenticationError, match='no access_token'):
        Client(**credentials)


def test_unreadable_token_body_raises(requests_mock, credentials):
    requests_mock.post(TOKEN_URL, text='<html>maintenance</html>')
    with pytest.raises(AuthenticationError, match='unreadable'):
        Client(**credentials)


def test_custom_base_url(requests_mock, credentials):
    requests_mock.post('https://sandbox.example.com/api/json/token/', json={'access_token': 'sandbox'})
    client = Client(base_url='https://sandbox.example.com/api/json/', **credentials)
    assert client.token == 'sandbox'
    assert client.base_url == 'https://sandbox.example.com/api/json'


def test_bearer_auth_sets_header():
    request = requests.Request('POST', 'https://example.com').prepare()
    BearerAuth('abc')(request)
    assert request.headers['Authorization'] == 'Bearer abc'
