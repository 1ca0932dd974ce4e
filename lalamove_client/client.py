"""
Lalamove API client.

This module ties the request signer, the HTTP transport and the resource
groups together behind a single client object.
"""

import json
import logging
import uuid
from typing import Any, Callable, Optional

from .constants import BASE_URLS, DEFAULT_CONFIG, DEFAULT_ENVIRONMENT
from .exceptions import ConfigurationError
from .http import HttpClient, header_lines_to_dict
from .payloads import (
    OrderPayloadBuilder,
    PatchOrderPayloadBuilder,
    QuotationPayloadBuilder,
)
from .resources import City, Driver, Market, Order, Quotation, Webhook
from .signature import HttpMethod, SignatureGenerator

logger = logging.getLogger(__name__)


class LalamoveClient:
    """
    Client for the Lalamove v3 REST API.

    Signs every request with the account's API key and secret and exposes
    the API through resource attributes (quotation, order, driver, markets,
    city, webhook).
    """

    def __init__(self, api_key: str, api_secret: str, market: str,
                 environment: str = DEFAULT_ENVIRONMENT, request_id: Optional[str] = None,
                 clock: Optional[Callable[[], int]] = None, **config):
        """
        Initialize Lalamove client.

        Args:
            api_key: Public API key
            api_secret: API secret used to sign requests
            market: Default market code (e.g. "HK", "SG")
            environment: 'sandbox' or 'production'
            request_id: Request-ID header value; generated when omitted or empty
            clock: Callable returning milliseconds since the epoch, used for signing
            **config: Configuration options (timeout, base_url)
        """
        self.api_key = api_key
        self.market = market
        self.environment = environment

        # Merge default config with user overrides
        self.config = {**DEFAULT_CONFIG, **config}

        self._validate_config(api_secret)

        self.base_url = (self.config['base_url'] or BASE_URLS[environment]).rstrip('/')
        self.request_id = request_id or uuid.uuid4().hex
        self.signature_generator = SignatureGenerator(api_secret, api_key, clock=clock)
        self.http_client = HttpClient(timeout=self.config['timeout'])

        self.quotation = Quotation(self)
        self.order = Order(self)
        self.driver = Driver(self)
        self.markets = Market(self)
        self.city = City(self)
        self.webhook = Webhook(self)

        logger.info("Initialized Lalamove client for %s (market %s)", self.base_url, market)

    def _validate_config(self, api_secret: str):
        """Validate client configuration."""
        if not self.api_key:
            raise ConfigurationError("api_key cannot be empty")

        if not api_secret:
            raise ConfigurationError("api_secret cannot be empty")

        if not self.market:
            raise ConfigurationError("market cannot be empty")

        if self.environment not in BASE_URLS:
            raise ConfigurationError(
                f"environment must be one of {sorted(BASE_URLS)}, got {self.environment!r}"
            )

        if self.config['timeout'] <= 0:
            raise ConfigurationError("timeout must be positive")

    @staticmethod
    def quotation_payload_builder() -> QuotationPayloadBuilder:
        return QuotationPayloadBuilder()

    @staticmethod
    def order_payload_builder() -> OrderPayloadBuilder:
        return OrderPayloadBuilder()

    @staticmethod
    def patch_order_payload_builder() -> PatchOrderPayloadBuilder:
        return PatchOrderPayloadBuilder()

    @staticmethod
    def _prepare_request_body(data: Any) -> str:
        """Wrap data in the API's ``{"data": ...}`` envelope."""
        if data is None:
            return ''
        return json.dumps({'data': data}, separators=(',', ':'))

    def make_request(self, method: str, path: str, data: Any = None,
                     market: Optional[str] = None) -> Any:
        """
        Sign and send a request.

        Args:
            method: HTTP method
            path: API path, starting with '/'
            data: Value placed under the body's "data" key; no body when None
            market: Market code; the client's market is used when omitted

        Returns:
            Decoded JSON response

        Raises:
            InvalidInputError: If method or path cannot be signed
            HTTPError: If the request fails
            APIResponseError: If the response is not valid JSON
        """
        http_method = HttpMethod.parse(method)
        body = self._prepare_request_body(data)

        header_lines = self.signature_generator.get_headers(
            http_method, path, market or self.market, body, self.request_id
        )
        headers = header_lines_to_dict(header_lines)

        return self.http_client.make_request(http_method.value, self.base_url + path, headers, body)

    def close(self):
        """Close HTTP session."""
        self.http_client.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
