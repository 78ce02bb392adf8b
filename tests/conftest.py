import json
import logging
from urllib.parse import parse_qs

import pytest

from astro_loyalty import Client
from astro_loyalty.config import DEFAULT_BASE_URL

TEST_USER = 'test_user'
TEST_PASSWORD = 'test_pass'
TEST_CLIENT_ID = 'client_123'

TOKEN_URL = DEFAULT_BASE_URL + '/token/'


def api_url(path):
    return DEFAULT_BASE_URL + path


def sent_json_data(request):
    """Decode the jsonData form field of a captured request."""
    form = parse_qs(request.text)
    return json.loads(form['jsonData'][0])


@pytest.fixture
def credentials():
    return {
        'username': TEST_USER,
        'password': TEST_PASSWORD,
        'client_id': TEST_CLIENT_ID,
    }


@pytest.fixture
def token_endpoint(requests_mock):
    return requests_mock.post(TOKEN_URL, json={
        'access_token': 'sample_token',
        'token_type': 'bearer',
        'expires': '1800',
        'created': '1700000000',
    })


@pytest.fixture
def client(token_endpoint, credentials):
    return Client(**credentials)


@pytest.fixture(autouse=True)
def reset_package_logger():
    yield
    logger = logging.getLogger('astro_loyalty')
    for handler in [h for h in logger.handlers if getattr(h, 'cli_handler', False)]:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
