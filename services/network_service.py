import logging

import requests

from utils.constants import REQUEST_TIMEOUT
from utils.errors import BadStatusCode, DecodingFailed, InvalidEndpointPath, InvalidResponse

logger = logging.getLogger(__name__)


class NetworkService:
    """Thin JSON-over-HTTP client; every failure maps onto NetworkRequestError."""

    def __init__(self, session: requests.Session | None = None, timeout: float = REQUEST_TIMEOUT):
        self._session = session or requests.Session()
        self._timeout = timeout

    def request(self, link: str, method: str = "GET") -> dict:
        try:
            resp = self._session.request(method.upper(), link, timeout=self._timeout)
        except (requests.exceptions.MissingSchema,
                requests.exceptions.InvalidSchema,
                requests.exceptions.InvalidURL) as exc:
            raise InvalidEndpointPath(str(exc)) from exc
        except requests.exceptions.RequestException as exc:
            raise InvalidResponse(str(exc)) from exc

        if not 200 <= resp.status_code < 300:
            raise BadStatusCode(resp.status_code)
        try:
            payload = resp.json()
        except ValueError as exc:
            raise DecodingFailed(f"Response from {link} is not JSON") from exc
        if not isinstance(payload, dict):
            raise DecodingFailed(f"Response from {link} is not a JSON object")
        return payload

    def close(self):
        self._session.close()
