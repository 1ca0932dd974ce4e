#!/usr/bin/env python3
"""
Basic usage examples for the Lalamove Python client library.

This script demonstrates request signing and a quotation/order flow
against the Lalamove sandbox.
"""

import logging
import os
import sys

from lalamove_client import LalamoveClient, LalamoveClientError, SignatureGenerator


def main():
    """Run basic usage examples."""
    logging.basicConfig(level=logging.INFO)

    api_key = os.environ.get("LALAMOVE_API_KEY", "")
    api_secret = os.environ.get("LALAMOVE_API_SECRET", "")
    market = os.environ.get("LALAMOVE_MARKET", "HK")

    print("=== Lalamove Python Client Usage Examples ===\n")

    # Example 1: signing without any network access
    print("1. Signing a request offline...")
    generator = SignatureGenerator("s3cr3t", "key123")
    for line in generator.get_headers("GET", "/v3/cities", "HK", request_id="example", timestamp=1700000000000):
        print(f"   {line}")
    print()

    if not api_key or not api_secret:
        print("Set LALAMOVE_API_KEY and LALAMOVE_API_SECRET to run the sandbox examples.")
        return 0

    with LalamoveClient(api_key, api_secret, market) as client:
        try:
            # Example 2: pick a service for a 50 kg load
            print("2. Choosing a service by load...")
            service = client.city.get_service_key_by_load(50)
            service_type = service["data"]["serviceType"]
            print(f"   Service: {service_type}\n")

            # Example 3: quotation
            print("3. Requesting a quotation...")
            payload = (client.quotation_payload_builder()
                       .set_service_type(service_type)
                       .set_language("en_HK")
                       .set_stops([
                           {"coordinates": {"lat": "22.3353139", "lng": "114.1758402"},
                            "address": "Innocentre, 72 Tat Chee Ave, Kowloon Tong"},
                           {"coordinates": {"lat": "22.2942708", "lng": "114.1710227"},
                            "address": "Canton Rd, Tsim Sha Tsui"},
                       ])
                       .build())
            quotation = client.quotation.create(payload)
            print(f"   Response: {quotation}\n")

            data = quotation.get("data")
            if not data:
                print("   Quotation failed, stopping here.")
                return 1

            # Example 4: order
            print("4. Placing an order...")
            stops = data["stops"]
            order_payload = (client.order_payload_builder()
                             .set_quotation_id(data["quotationId"])
                             .set_sender({"stopId": stops[0]["stopId"], "name": "Sender", "phone": "+85238008888"})
                             .add_recipients([{"stopId": stops[1]["stopId"], "name": "Recipient",
                                               "phone": "+85238008889", "remarks": "Leave at door"}])
                             .set_metadata({"reference": "example"})
                             .build())
            order = client.order.create(order_payload)
            print(f"   Response: {order}\n")
        except LalamoveClientError as e:
            print(f"   ✗ Request failed: {e}")
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
