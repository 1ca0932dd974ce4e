"""
Unit tests for request signing.
"""

import hashlib
import hmac

import pytest

from lalamove_client import (
    HttpMethod,
    InvalidInputError,
    SignatureGenerator,
    build_raw_signature
)

TIMESTAMP = 1700000000000
GET_CITIES_SIGNATURE = "e2b6a2dd6de0f386b7d20c4d0f4652e8132bd7953a68c99a24aedc81f96f8602"
POST_ORDERS_SIGNATURE = "2f48840310671ccd208cb6749ad3f1cddcbaf67946567f2144778cc508c9feca"
ORDER_BODY = '{"data":{"a":1}}'


class TestBuildRawSignature:
    """Test canonical string construction."""

    def test_get_omits_body(self):
        """Test GET canonical string ends after the blank line."""
        raw = build_raw_signature(TIMESTAMP, "GET", "/v3/cities", "ignored")

        assert raw == b"1700000000000\r\nGET\r\n/v3/cities\r\n\r\n"

    def test_post_includes_body(self):
        """Test non-GET canonical string carries the body."""
        raw = build_raw_signature(TIMESTAMP, "POST", "/v3/orders", ORDER_BODY)

        assert raw == b'1700000000000\r\nPOST\r\n/v3/orders\r\n\r\n{"data":{"a":1}}'

    def test_empty_body_keeps_separator(self):
        """Test non-GET with empty body still ends with two CRLF pairs."""
        raw = build_raw_signature(TIMESTAMP, "DELETE", "/v3/orders/1", "")

        assert raw == b"1700000000000\r\nDELETE\r\n/v3/orders/1\r\n\r\n"

    def test_method_is_uppercased(self):
        """Test method token is normalized to uppercase."""
        raw = build_raw_signature(TIMESTAMP, "patch", "/v3/webhook", "{}")

        assert raw.split(b"\r\n")[1] == b"PATCH"

    def test_float_timestamp_rejected(self):
        """Test float milliseconds never reach the canonical string."""
        with pytest.raises(InvalidInputError):
            build_raw_signature(1700000000000.0, "GET", "/v3/cities")

    def test_bytes_body(self):
        """Test bytes bodies are appended unchanged."""
        raw = build_raw_signature(TIMESTAMP, HttpMethod.PUT, "/v3/x", b"\xe2\x82\xac")

        assert raw.endswith(b"\r\n\r\n\xe2\x82\xac")


class TestHttpMethod:
    """Test HTTP method parsing."""

    @pytest.mark.parametrize("name", ["get", "Get", "GET", "post", "patch", "put", "delete"])
    def test_parse_case_insensitive(self, name):
        """Test method names are accepted in any case."""
        assert HttpMethod.parse(name).value == name.upper()

    def test_parse_member(self):
        """Test enum members pass through."""
        assert HttpMethod.parse(HttpMethod.DELETE) is HttpMethod.DELETE

    @pytest.mark.parametrize("name", ["HEAD", "OPTIONS", "", "GET ", "FETCH"])
    def test_parse_rejects_unknown(self, name):
        """Test unsupported methods are rejected."""
        with pytest.raises(InvalidInputError):
            HttpMethod.parse(name)

    def test_parse_rejects_non_string(self):
        """Test non-string methods are rejected."""
        with pytest.raises(InvalidInputError):
            HttpMethod.parse(None)


class TestSignatureGenerator:
    """Test signature generation, tokens and headers."""

    @pytest.fixture
    def generator(self):
        """Create test generator with a frozen clock."""
        return SignatureGenerator("s3cr3t", "key123", clock=lambda: TIMESTAMP)

    def test_get_golden_vector(self, generator):
        """Test GET signature against a pinned value."""
        signature, timestamp = generator.generate_signature("GET", "/v3/cities", "", TIMESTAMP)

        assert signature == GET_CITIES_SIGNATURE
        assert timestamp == TIMESTAMP

    def test_post_golden_vector(self, generator):
        """Test POST signature against a pinned value."""
        signature, _ = generator.generate_signature("POST", "/v3/orders", ORDER_BODY, TIMESTAMP)

        assert signature == POST_ORDERS_SIGNATURE

    def test_signature_matches_hmac(self, generator):
        """Test signature is the HMAC-SHA256 hex digest of the canonical string."""
        signature, _ = generator.generate_signature("POST", "/v3/quotations", '{"data":{}}', TIMESTAMP)

        expected = hmac.new(
            b"s3cr3t",
            b'1700000000000\r\nPOST\r\n/v3/quotations\r\n\r\n{"data":{}}',
            hashlib.sha256
        ).hexdigest()
        assert signature == expected
        assert len(signature) == 64
        assert signature == signature.lower()

    def test_deterministic(self, generator):
        """Test repeated calls with the same inputs give the same signature."""
        first = generator.generate_signature("POST", "/v3/orders", ORDER_BODY, TIMESTAMP)
        second = generator.generate_signature("POST", "/v3/orders", ORDER_BODY, TIMESTAMP)

        assert first == second

    def test_get_ignores_body(self, generator):
        """Test GET signature does not depend on the body argument."""
        empty, _ = generator.generate_signature("GET", "/v3/cities", "", TIMESTAMP)
        with_body, _ = generator.generate_signature("GET", "/v3/cities", '{"x":1}', TIMESTAMP)

        assert empty == with_body == GET_CITIES_SIGNATURE

    def test_method_case_insensitive(self, generator):
        """Test lowercase and uppercase methods sign identically."""
        lower, _ = generator.generate_signature("get", "/v3/cities", "", TIMESTAMP)

        assert lower == GET_CITIES_SIGNATURE

    @pytest.mark.parametrize("path, body, timestamp", [
        ("/v3/orderz", ORDER_BODY, TIMESTAMP),
        ("/v3/orders", '{"data":{"a":2}}', TIMESTAMP),
        ("/v3/orders", ORDER_BODY, TIMESTAMP + 1),
    ])
    def test_near_miss_changes_signature(self, generator, path, body, timestamp):
        """Test a one-character change in path, body or timestamp changes the signature."""
        signature, _ = generator.generate_signature("POST", path, body, timestamp)

        assert signature != POST_ORDERS_SIGNATURE

    def test_secret_changes_signature(self):
        """Test a different secret changes the signature."""
        other = SignatureGenerator("s3cr3T", "key123")
        signature, _ = other.generate_signature("POST", "/v3/orders", ORDER_BODY, TIMESTAMP)

        assert signature != POST_ORDERS_SIGNATURE

    def test_bytes_secret(self):
        """Test bytes and str secrets are equivalent."""
        generator = SignatureGenerator(b"s3cr3t", "key123")
        signature, _ = generator.generate_signature("GET", "/v3/cities", "", TIMESTAMP)

        assert signature == GET_CITIES_SIGNATURE

    def test_clock_used_without_timestamp(self):
        """Test the injected clock supplies the timestamp when none is given."""
        calls = []

        def clock():
            calls.append(1)
            return TIMESTAMP

        generator = SignatureGenerator("s3cr3t", "key123", clock=clock)
        signature, timestamp = generator.generate_signature("GET", "/v3/cities")

        assert timestamp == TIMESTAMP
        assert signature == GET_CITIES_SIGNATURE
        assert len(calls) == 1

    def test_explicit_timestamp_skips_clock(self):
        """Test an explicit timestamp does not read the clock."""
        def clock():
            raise AssertionError("clock should not be read")

        generator = SignatureGenerator("s3cr3t", "key123", clock=clock)
        _, timestamp = generator.generate_signature("GET", "/v3/cities", timestamp=42)

        assert timestamp == 42

    def test_default_clock_is_milliseconds(self):
        """Test the default clock returns epoch milliseconds."""
        generator = SignatureGenerator("s3cr3t", "key123")
        _, timestamp = generator.generate_signature("GET", "/v3/cities")

        assert isinstance(timestamp, int)
        assert timestamp > TIMESTAMP

    @pytest.mark.parametrize("path", ["", "v3/cities"])
    def test_invalid_path(self, generator, path):
        """Test empty or relative paths are rejected."""
        with pytest.raises(InvalidInputError):
            generator.generate_signature("GET", path, "", TIMESTAMP)

    @pytest.mark.parametrize("timestamp", [1700000000000.0, "1700000000000", True])
    def test_invalid_timestamp(self, generator, timestamp):
        """Test non-integer timestamps are rejected instead of signed."""
        with pytest.raises(InvalidInputError):
            generator.generate_signature("GET", "/v3/cities", "", timestamp)

    def test_float_clock_rejected(self):
        """Test a clock returning float milliseconds is rejected."""
        generator = SignatureGenerator("s3cr3t", "key123", clock=lambda: 1700000000000.0)

        with pytest.raises(InvalidInputError):
            generator.get_headers("GET", "/v3/cities", "HK")

    def test_invalid_method(self, generator):
        """Test unsupported methods are rejected before hashing."""
        with pytest.raises(InvalidInputError):
            generator.generate_signature("TRACE", "/v3/cities", "", TIMESTAMP)

    def test_create_token(self, generator):
        """Test token format."""
        token = generator.create_token(GET_CITIES_SIGNATURE, TIMESTAMP)

        assert token == f"key123:1700000000000:{GET_CITIES_SIGNATURE}"
        assert token.count(":") == 2
        assert token == token.strip()

    def test_get_headers_with_request_id(self, generator):
        """Test header lines and their order."""
        headers = generator.get_headers("GET", "/v3/cities", "HK", "", "req-1")

        assert headers == [
            f"Authorization: hmac key123:1700000000000:{GET_CITIES_SIGNATURE}",
            "Market: HK",
            "Content-Type: application/json",
            "Request-ID: req-1",
        ]

    @pytest.mark.parametrize("request_id", [None, ""])
    def test_get_headers_without_request_id(self, generator, request_id):
        """Test Request-ID is omitted when absent or empty."""
        headers = generator.get_headers("GET", "/v3/cities", "HK", request_id=request_id)

        assert len(headers) == 3
        assert not any(line.startswith("Request-ID") for line in headers)

    def test_get_headers_passes_values_verbatim(self, generator):
        """Test market and request id are not escaped."""
        headers = generator.get_headers("POST", "/v3/orders", "SG ", ORDER_BODY, "a b:c", TIMESTAMP)

        assert headers[0] == f"Authorization: hmac key123:1700000000000:{POST_ORDERS_SIGNATURE}"
        assert headers[1] == "Market: SG "
        assert headers[3] == "Request-ID: a b:c"
