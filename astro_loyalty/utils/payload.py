# utils/payload.py - jsonData request bodies and returnData response envelopes
import json

SUCCESS_STATUS = 100

# The vendor spells the message key both ways depending on the endpoint.
STATUS_KEYS = ('astro_status', 'status')
STATUS_MESSAGE_KEYS = ('astro_status_message', 'astro_status_messsage')


def build_form_body(params):
    """Wrap ``params`` as the single ``jsonData`` form field the API expects."""
    return {'jsonData': json.dumps(params)}


def parse_envelope(text):
    """Decode a response body. Raises ``ValueError`` if it is not a JSON object."""
    envelope = json.loads(text)
    if not isinstance(envelope, dict):
        raise ValueError(f"expected a JSON object, got {type(envelope).__name__}")
    return envelope


def _first_present(envelope, keys):
    for key in keys:
        if envelope.get(key) is not None:
            return envelope[key]
    return None


def envelope_status(envelope):
    """Return the application status code as an int, or None when the envelope has none."""
    status = _first_present(envelope, STATUS_KEYS)
    if status is None:
        return None
    try:
        return int(status)
    except (TypeError, ValueError):
        return status


def status_message(envelope):
    return _first_present(envelope, STATUS_MESSAGE_KEYS)


def is_success(envelope):
    status = envelope_status(envelope)
    return status is None or status == SUCCESS_STATUS


def return_data(envelope):
    data = envelope.get('returnData')
    if data is None or (hasattr(data, '__len__') and len(data) == 0):
        return {}
    return data
