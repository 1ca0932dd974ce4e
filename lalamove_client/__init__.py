"""
Lalamove Client Library

A Python client for the Lalamove v3 delivery API that signs every request
with the account's HMAC-SHA256 credentials.

Example usage:
    from lalamove_client import LalamoveClient

    client = LalamoveClient("your-api-key", "your-api-secret", "HK")
    quotation = client.quotation.retrieve("1514140994227007571")
"""

from .client import LalamoveClient
from .exceptions import (
    LalamoveClientError,
    InvalidInputError,
    ConfigurationError,
    PayloadError,
    HTTPError,
    APIResponseError,
    NotFoundError
)
from .models import Item, Metadata, Recipient, Sender, Stop
from .payloads import (
    OrderPayload,
    OrderPayloadBuilder,
    PatchOrderPayload,
    PatchOrderPayloadBuilder,
    QuotationPayload,
    QuotationPayloadBuilder
)
from .signature import HttpMethod, SignatureGenerator, build_raw_signature

__version__ = "1.0.0"
__all__ = [
    "LalamoveClient",
    "SignatureGenerator",
    "HttpMethod",
    "build_raw_signature",
    "LalamoveClientError",
    "InvalidInputError",
    "ConfigurationError",
    "PayloadError",
    "HTTPError",
    "APIResponseError",
    "NotFoundError",
    "Item",
    "Metadata",
    "Recipient",
    "Sender",
    "Stop",
    "OrderPayload",
    "OrderPayloadBuilder",
    "PatchOrderPayload",
    "PatchOrderPayloadBuilder",
    "QuotationPayload",
    "QuotationPayloadBuilder"
]
