"""
Astro Loyalty API client.

Every endpoint takes a POST whose form body is a single ``jsonData`` field
holding the JSON-encoded parameters, and answers with an envelope carrying
``returnData`` plus an optional ``astro_status`` code (100 means success).
"""
import datetime
import logging
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Iterable, Mapping, Optional

import requests

from .api_client import APIClient
from .authentication import Authenticator, BearerAuth
from .config import Credentials, Settings
from .errors import ApiError, AuthenticationError, InvalidArgument
from .utils import payload

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = 'application/x-www-form-urlencoded'

BATCH_REQUIRED_KEYS = ('transaction_id', 'item_code')


@dataclass
class CustomerAttributes:
    """Optional profile fields accepted by ``add_customer``. ``None`` means omitted."""
    email_address: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    zip: Optional[str] = None
    phone: Optional[str] = None

    @classmethod
    def coerce(cls, value):
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        if not isinstance(value, Mapping):
            raise InvalidArgument(f"attributes must be CustomerAttributes or a mapping, got {type(value).__name__}")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(value) - known)
        if unknown:
            raise InvalidArgument(f"Unsupported customer attributes: {', '.join(unknown)}")
        return cls(**value)

    def to_params(self) -> Dict[str, Any]:
        return {key: value for key, value in asdict(self).items() if value is not None}


def _wire_date(value):
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    return value


def _batch_entry(index, txn):
    if not isinstance(txn, Mapping):
        raise InvalidArgument(f"Transaction at index {index} must be a mapping")
    missing = [key for key in BATCH_REQUIRED_KEYS if txn.get(key) is None]
    if missing:
        raise InvalidArgument(f"Transaction at index {index} is missing required keys: {', '.join(missing)}")

    entry = {
        'transactionID': txn['transaction_id'],
        'item_code': txn['item_code'],
    }
    if txn.get('item_qty') is not None:
        entry['item_qty'] = txn['item_qty']
    if txn.get('item_transaction_date') is not None:
        entry['item_transaction_date'] = _wire_date(txn['item_transaction_date'])
    return entry


class Client:
    def __init__(self, username, password, client_id, base_url=None, timeout=None, api_client=None):
        defaults = Settings()
        self.credentials = Credentials(username, password, client_id)
        self._owns_api_client = api_client is None
        self.api_client = api_client or APIClient(
            base_url or defaults.base_url,
            timeout=defaults.timeout if timeout is None else timeout,
        )
        self.authenticator = Authenticator(self.api_client, self.credentials)
        try:
            self.token = self.authenticator.fetch_token()
        except AuthenticationError:
            self.close()
            raise
        self._auth = BearerAuth(self.token)

    @classmethod
    def from_env(cls, environ=None):
        settings = Settings.from_env(environ)
        credentials = Credentials.from_env(environ)
        return cls(
            credentials.username,
            credentials.password,
            credentials.client_id,
            base_url=settings.base_url,
            timeout=settings.timeout,
        )

    def close(self):
        """Release the HTTP session, unless it was handed in by the caller."""
        if self._owns_api_client:
            self.api_client.close()

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    @property
    def base_url(self):
        return self.api_client.base_url

    def headers(self):
        return {'Content-Type': FORM_CONTENT_TYPE}

    def post(self, path, params):
        """
        Send ``params`` to ``path`` and unwrap the response envelope.

        Raises ApiError when the HTTP call fails or the envelope reports a
        status other than 100. An empty or missing ``returnData`` comes
        back as ``{}``.
        """
        headers = self.headers()
        body = payload.build_form_body(params)
        logger.debug("POST %s body=%s", self.api_client._url(path), body)

        try:
            response = self.api_client.post(path, data=body, headers=headers, auth=self._auth)
        except requests.RequestException as exc:
            logger.warning("POST %s failed: %s", path, exc)
            raise ApiError(f"API error: {exc}") from exc

        if not response.ok:
            reason = response.reason or str(response.status_code)
            logger.warning("POST %s returned %s %s", path, response.status_code, reason)
            raise ApiError(f"API error: {reason}", status_code=response.status_code)

        try:
            envelope = payload.parse_envelope(response.text)
        except ValueError as exc:
            raise ApiError(f"API error: unreadable response from {path} ({exc})",
                           status_code=response.status_code) from exc

        if not payload.is_success(envelope):
            status = payload.envelope_status(envelope)
            message = payload.status_message(envelope) or 'no status message'
            logger.warning("POST %s reported astro_status %s: %s", path, status, message)
            raise ApiError(f"API error: astro_status {status}: {message}",
                           status_code=response.status_code, astro_status=status)

        return payload.return_data(envelope)

    def customer_status(self, customer_id):
        return self.post('/customerStatus/', {
            'customerID': customer_id,
        })

    def customer_reward_status(self, customer_id):
        return self.post('/customerRewardStatus/', {
            'customerID': customer_id,
        })

    def search_customer(self, email_address=None, phone=None):
        if email_address is None and phone is None:
            raise InvalidArgument('Either email_address or phone must be provided')

        params = {}
        if email_address is not None:
            params['email_address'] = email_address
        if phone is not None:
            params['phone'] = phone
        return self.post('/searchCustomer/', params)

    def link_customer(self, customer_id, astro_customer_id):
        return self.post('/linkCustomer/', {
            'customerID': customer_id,
            'astro_customer_id': astro_customer_id,
        })

    def add_customer(self, customer_id, first_name, last_name, attributes=None):
        params = {
            'customerID': customer_id,
            'first_name': first_name,
            'last_name': last_name,
        }
        params.update(CustomerAttributes.coerce(attributes).to_params())
        return self.post('/addCustomer/', params)

    def list_offers(self):
        return self.post('/listOffers/', {})

    def add_offer_transaction(self, customer_id, transaction_id, item_code, item_qty=1):
        params = {
            'customerID': customer_id,
            'transactionID': transaction_id,
            'item_code': item_code,
        }
        if item_qty is not None:
            params['item_qty'] = item_qty
        return self.post('/addOfferTransaction/', params)

    def add_transaction_batch(self, customer_id, transactions: Iterable[Mapping[str, Any]]):
        entries = [_batch_entry(index, txn) for index, txn in enumerate(transactions)]
        return self.post('/addTransactionBatch/', {
            'customerID': customer_id,
            'transactions': entries,
        })

    def remove_transaction(self, customer_id, transaction_id):
        return self.post('/removeTransaction/', {
            'customerID': customer_id,
            'transactionID': transaction_id,
        })

    def remove_offer_transaction(self, customer_id, transaction_id):
        return self.post('/removeOfferTransaction/', {
            'customerID': customer_id,
            'transactionID': transaction_id,
        })

    def add_redemption(self, customer_id, astro_reward_id, astro_item_id):
        return self.post('/addRedemption/', {
            'customerID': customer_id,
            'astro_reward_id': astro_reward_id,
            'astro_item_id': astro_item_id,
        })

    def remove_redemption(self, customer_id, astro_reward_id):
        return self.post('/removeRedemption/', {
            'customerID': customer_id,
            'astro_reward_id': astro_reward_id,
        })

    def check_redemption_eligibility(self, customer_id, item_code):
        return self.post('/checkRedemptionEligibility/', {
            'customerID': customer_id,
            'item_code': item_code,
        })
