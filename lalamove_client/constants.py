"""
Constants for the Lalamove client library.
"""

# HTTP headers sent with every signed request
HEADER_AUTHORIZATION = "Authorization"
HEADER_MARKET = "Market"
HEADER_CONTENT_TYPE = "Content-Type"
HEADER_REQUEST_ID = "Request-ID"

AUTH_SCHEME = "hmac"
CONTENT_TYPE_JSON = "application/json"

# Separator used between canonical string components
CRLF = "\r\n"

# API hosts
BASE_URLS = {
    'sandbox': "https://rest.sandbox.lalamove.com",
    'production': "https://rest.lalamove.com",
}
DEFAULT_ENVIRONMENT = 'sandbox'

# Default configuration values
DEFAULT_CONFIG = {
    'timeout': 30,      # HTTP timeout in seconds
    'base_url': None,   # Overrides the environment host when set
}

# API paths (v3)
PATH_QUOTATIONS = "/v3/quotations"
PATH_ORDERS = "/v3/orders"
PATH_CITIES = "/v3/cities"
PATH_WEBHOOK = "/v3/webhook"

DEFAULT_DRIVER_CANCEL_REASON = "DRIVER_UNRESPONSIVE"

# Payload limits
MIN_QUOTATION_STOPS = 2
MAX_QUOTATION_STOPS = 16
MIN_RECIPIENTS = 1
MAX_RECIPIENTS = 15
MIN_PATCH_STOPS = 2
MAX_PATCH_STOPS = 17
