"""
Request signing for the Lalamove v3 API.

Every request carries an ``Authorization: hmac {api_key}:{timestamp}:{signature}``
header where the signature is a hex HMAC-SHA256 over the canonical string::

    {timestamp}\\r\\n{METHOD}\\r\\n{path}\\r\\n\\r\\n{body}

GET requests never include the body, even when one is supplied.
"""

import enum
import hashlib
import hmac
import time
from typing import Callable, List, Optional, Tuple, Union

from .constants import (
    AUTH_SCHEME,
    CONTENT_TYPE_JSON,
    CRLF,
    HEADER_AUTHORIZATION,
    HEADER_CONTENT_TYPE,
    HEADER_MARKET,
    HEADER_REQUEST_ID,
)
from .exceptions import InvalidInputError


class HttpMethod(enum.Enum):
    """HTTP methods accepted by the signer."""

    GET = "GET"
    POST = "POST"
    PATCH = "PATCH"
    PUT = "PUT"
    DELETE = "DELETE"

    @classmethod
    def parse(cls, method: Union["HttpMethod", str]) -> "HttpMethod":
        """
        Normalize a method name to an HttpMethod.

        Args:
            method: HttpMethod member or method name in any case

        Returns:
            Matching HttpMethod

        Raises:
            InvalidInputError: If the method is not supported
        """
        if isinstance(method, cls):
            return method
        if not isinstance(method, str):
            raise InvalidInputError(f"HTTP method must be a string, got {type(method).__name__}")
        try:
            return cls(method.upper())
        except ValueError:
            raise InvalidInputError(f"Unsupported HTTP method: {method!r}") from None


def current_millis() -> int:
    """Return wall-clock time in milliseconds since the epoch."""
    return int(time.time() * 1000)


def _to_bytes(value: Union[str, bytes]) -> bytes:
    if isinstance(value, bytes):
        return value
    return value.encode('utf-8')


def _check_timestamp(timestamp: int):
    if isinstance(timestamp, bool) or not isinstance(timestamp, int):
        raise InvalidInputError(
            f"timestamp must be integer milliseconds, got {type(timestamp).__name__}"
        )


def _check_path(path: str):
    if not isinstance(path, str) or not path:
        raise InvalidInputError("path cannot be empty")
    if not path.startswith('/'):
        raise InvalidInputError(f"path must start with '/': {path!r}")


def build_raw_signature(timestamp: int, method: Union[HttpMethod, str], path: str,
                        body: Union[str, bytes] = b'') -> bytes:
    """
    Build the canonical string that is fed to HMAC-SHA256.

    Args:
        timestamp: Milliseconds since the epoch
        method: HTTP method (case-insensitive)
        path: API path, starting with '/'
        body: Request body; ignored for GET

    Returns:
        Canonical string as UTF-8 bytes

    Raises:
        InvalidInputError: If timestamp, method or path is invalid
    """
    _check_timestamp(timestamp)
    http_method = HttpMethod.parse(method)
    _check_path(path)

    head = f"{timestamp}{CRLF}{http_method.value}{CRLF}{path}{CRLF}{CRLF}".encode('utf-8')
    if http_method is HttpMethod.GET:
        return head
    return head + _to_bytes(body)


class SignatureGenerator:
    """
    Produces HMAC signatures and authorization headers for API requests.

    Holds only the immutable credentials and a clock, so a single instance
    can be shared between threads.
    """

    def __init__(self, secret: Union[str, bytes], api_key: str,
                 clock: Optional[Callable[[], int]] = None):
        """
        Initialize the signature generator.

        Args:
            secret: API secret used as the HMAC key
            api_key: Public API key embedded in the token
            clock: Callable returning milliseconds since the epoch,
                read when no explicit timestamp is given
        """
        self._secret = _to_bytes(secret)
        self.api_key = api_key
        self.clock = clock or current_millis

    def generate_signature(self, method: Union[HttpMethod, str], path: str,
                           body: Union[str, bytes] = '',
                           timestamp: Optional[int] = None) -> Tuple[str, int]:
        """
        Generate an HMAC-SHA256 signature for a request.

        Args:
            method: HTTP method (case-insensitive)
            path: API path, starting with '/'
            body: JSON request body; ignored for GET
            timestamp: Milliseconds since the epoch; the clock is read when omitted

        Returns:
            Tuple of (signature, timestamp)

        Raises:
            InvalidInputError: If timestamp, method or path is invalid
        """
        if timestamp is None:
            timestamp = self.clock()

        raw_signature = build_raw_signature(timestamp, method, path, body)
        signature = hmac.new(self._secret, raw_signature, hashlib.sha256).hexdigest()
        return signature, timestamp

    def create_token(self, signature: str, timestamp: int) -> str:
        """Build the ``api_key:timestamp:signature`` token."""
        return f"{self.api_key}:{timestamp}:{signature}"

    def get_headers(self, method: Union[HttpMethod, str], path: str, market: str,
                    body: Union[str, bytes] = '', request_id: Optional[str] = None,
                    timestamp: Optional[int] = None) -> List[str]:
        """
        Build the header lines for a signed request.

        Args:
            method: HTTP method (case-insensitive)
            path: API path, starting with '/'
            market: Market code sent in the Market header
            body: JSON request body; ignored for GET
            request_id: Optional request identifier; omitted when None or empty
            timestamp: Milliseconds since the epoch; the clock is read when omitted

        Returns:
            Ordered list of ``Name: value`` header lines

        Raises:
            InvalidInputError: If timestamp, method or path is invalid
        """
        signature, timestamp = self.generate_signature(method, path, body, timestamp)
        token = self.create_token(signature, timestamp)

        headers = [
            f"{HEADER_AUTHORIZATION}: {AUTH_SCHEME} {token}",
            f"{HEADER_MARKET}: {market}",
            f"{HEADER_CONTENT_TYPE}: {CONTENT_TYPE_JSON}",
        ]
        if request_id:
            headers.append(f"{HEADER_REQUEST_ID}: {request_id}")

        return headers
