"""
HTTP transport for signed Lalamove API requests.
"""

import logging
from typing import Any, Dict, Iterable, Optional, Union

import requests

from .constants import DEFAULT_CONFIG
from .exceptions import APIResponseError, HTTPError

logger = logging.getLogger(__name__)

BODY_METHODS = ('POST', 'PUT', 'PATCH', 'DELETE')


def header_lines_to_dict(lines: Iterable[str]) -> Dict[str, str]:
    """Convert ``Name: value`` header lines into a header mapping."""
    headers = {}
    for line in lines:
        name, _, value = line.partition(':')
        headers[name.strip()] = value.strip()
    return headers


class HttpClient:
    """
    Thin wrapper around a requests session that decodes JSON responses.
    """

    def __init__(self, timeout: float = DEFAULT_CONFIG['timeout'],
                 session: Optional[requests.Session] = None):
        self.timeout = timeout
        self.session = session or requests.Session()

    def make_request(self, method: str, url: str, headers: Optional[Dict[str, str]] = None,
                     body: Union[str, bytes] = '') -> Any:
        """
        Send an HTTP request and decode the response.

        Args:
            method: HTTP method
            url: Absolute request URL
            headers: Request headers
            body: Request body, sent for POST/PUT/PATCH/DELETE when non-empty

        Returns:
            Decoded JSON body. The API reports failures in-band, so non-2xx
            JSON bodies are returned as well. DELETE answered with 204
            returns True, any other empty body None.

        Raises:
            HTTPError: If the request fails at the transport level
            APIResponseError: If the response body is not valid JSON
        """
        method = method.upper()
        kwargs = {'headers': headers or {}, 'timeout': self.timeout}
        if method in BODY_METHODS and body:
            kwargs['data'] = body

        logger.debug("%s %s", method, url)
        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            logger.error("HTTP request %s %s failed: %s", method, url, e)
            raise HTTPError(f"HTTP request failed: {e}") from e

        logger.debug("%s %s -> %s", method, url, response.status_code)

        if response.status_code == 204 and method == 'DELETE':
            return True
        if not response.content:
            return None

        try:
            return response.json()
        except ValueError:
            raise APIResponseError(
                f"Response is not valid JSON (HTTP {response.status_code})",
                status_code=response.status_code
            ) from None

    def close(self):
        """Close HTTP session."""
        if self.session:
            self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
