# api_client.py - minimal HTTP transport around a requests session
import requests


class APIClient:
    def __init__(self, base_url, timeout=30):
        self.base_url = base_url.rstrip('/')
        self.session = requests.Session()
        self.timeout = timeout

    def _url(self, endpoint):
        return f"{self.base_url}/{endpoint.lstrip('/')}"

    def post(self, endpoint, data=None, headers=None, auth=None):
        url = self._url(endpoint)
        return self.session.post(url, data=data, headers=headers, auth=auth, timeout=self.timeout)

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
