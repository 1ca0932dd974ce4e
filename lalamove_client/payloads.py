"""
Builders for quotation, order and order-edit payloads.

Builders collect fields through chained setters and validate on ``build()``;
the resulting payload objects serialize through ``to_dict()`` and can be
passed straight to the matching resource method.
"""

import datetime
from typing import Any, Dict, List, Optional, Union

from .constants import (
    MAX_PATCH_STOPS,
    MAX_QUOTATION_STOPS,
    MAX_RECIPIENTS,
    MIN_PATCH_STOPS,
    MIN_QUOTATION_STOPS,
    MIN_RECIPIENTS,
)
from .exceptions import PayloadError
from .models import Item, Metadata, Recipient, Sender, Stop


def _drop_none(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


def format_schedule_at(value: Union[str, datetime.datetime]) -> str:
    """
    Format a schedule time as ``YYYY-MM-DDTHH:MM:SSZ`` in UTC.

    Naive datetimes and ISO strings without an offset are taken as UTC.
    """
    if isinstance(value, str):
        try:
            value = datetime.datetime.fromisoformat(value.replace('Z', '+00:00'))
        except ValueError:
            raise PayloadError(f"Invalid scheduleAt value: {value!r}") from None
    if value.tzinfo is None:
        value = value.replace(tzinfo=datetime.timezone.utc)
    return value.astimezone(datetime.timezone.utc).strftime('%Y-%m-%dT%H:%M:%SZ')


class QuotationPayload:
    """Body of a quotation request."""

    def __init__(self, builder: "QuotationPayloadBuilder"):
        self.stops = builder.stops
        self.service_type = builder.service_type
        self.language = builder.language
        self.special_requests = builder.special_requests
        self.is_route_optimized = builder.is_route_optimized
        self.schedule_at = builder.schedule_at
        self.item = builder.item

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            'scheduleAt': self.schedule_at,
            'serviceType': self.service_type,
            'specialRequests': self.special_requests,
            'language': self.language,
            'stops': [stop.to_dict() for stop in self.stops],
            'isRouteOptimized': self.is_route_optimized,
            'item': self.item.to_dict() if self.item is not None else None,
        })


class QuotationPayloadBuilder:
    """
    Builder for QuotationPayload.

    Example:
        payload = (QuotationPayloadBuilder()
                   .set_service_type("MOTORCYCLE")
                   .set_stops([pickup, dropoff])
                   .build())
    """

    def __init__(self):
        self.stops: Optional[List[Stop]] = None
        self.service_type: Optional[str] = None
        self.language: Optional[str] = None
        self.special_requests: Optional[List[str]] = None
        self.is_route_optimized: Optional[bool] = None
        self.schedule_at: Optional[str] = None
        self.item: Optional[Item] = None

    def set_service_type(self, service_type: str) -> "QuotationPayloadBuilder":
        self.service_type = service_type
        return self

    def set_stops(self, stops: List[Dict[str, Any]]) -> "QuotationPayloadBuilder":
        """
        Set the route stops.

        Raises:
            PayloadError: If fewer than 2 or more than 16 stops are given,
                or a stop lacks coordinates or address
        """
        if len(stops) < MIN_QUOTATION_STOPS or len(stops) > MAX_QUOTATION_STOPS:
            raise PayloadError(
                f"There must be at least {MIN_QUOTATION_STOPS} stops "
                f"and no more than {MAX_QUOTATION_STOPS} stops."
            )
        self.stops = [stop if isinstance(stop, Stop) else Stop.from_dict(stop) for stop in stops]
        return self

    def set_language(self, language: str) -> "QuotationPayloadBuilder":
        self.language = language
        return self

    def set_schedule_at(self, schedule_at: Optional[Union[str, datetime.datetime]]) -> "QuotationPayloadBuilder":
        if schedule_at:
            self.schedule_at = format_schedule_at(schedule_at)
        return self

    def set_special_requests(self, special_requests: List[str]) -> "QuotationPayloadBuilder":
        self.special_requests = special_requests
        return self

    def set_is_route_optimized(self, is_route_optimized: Optional[bool]) -> "QuotationPayloadBuilder":
        self.is_route_optimized = is_route_optimized
        return self

    def set_item(self, item: Union[Item, Dict[str, Any]]) -> "QuotationPayloadBuilder":
        self.item = item if isinstance(item, Item) else Item.from_dict(item)
        return self

    def build(self) -> QuotationPayload:
        if not self.service_type:
            raise PayloadError("Service Type is required.")
        if self.stops is None:
            raise PayloadError("Stops are required.")
        return QuotationPayload(self)


class OrderPayload:
    """Body of an order placement request."""

    def __init__(self, builder: "OrderPayloadBuilder"):
        self.quotation_id = builder.quotation_id
        self.sender = builder.sender
        self.recipients = builder.recipients
        self.is_pod_enabled = builder.is_pod_enabled
        self.partner = builder.partner
        self.metadata = builder.metadata

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            'quotationId': self.quotation_id,
            'sender': self.sender.to_dict(),
            'recipients': [recipient.to_dict() for recipient in self.recipients],
            'isPODEnabled': self.is_pod_enabled,
            'partner': self.partner,
            'metadata': self.metadata.to_dict() if self.metadata is not None else None,
        })


class OrderPayloadBuilder:
    """Builder for OrderPayload."""

    def __init__(self):
        self.quotation_id: Optional[str] = None
        self.sender: Optional[Sender] = None
        self.recipients: List[Recipient] = []
        self.is_pod_enabled: Optional[bool] = None
        self.partner: Optional[str] = None
        self.metadata: Optional[Metadata] = None

    def set_quotation_id(self, quotation_id: str) -> "OrderPayloadBuilder":
        self.quotation_id = quotation_id
        return self

    def set_sender(self, sender: Union[Sender, Dict[str, Any]]) -> "OrderPayloadBuilder":
        self.sender = sender if isinstance(sender, Sender) else Sender.from_dict(sender)
        return self

    def add_recipients(self, recipients: List[Union[Recipient, Dict[str, Any]]]) -> "OrderPayloadBuilder":
        """
        Set the order recipients.

        Raises:
            PayloadError: If fewer than 1 or more than 15 recipients are given,
                or a recipient lacks stopId, name or phone
        """
        if len(recipients) < MIN_RECIPIENTS or len(recipients) > MAX_RECIPIENTS:
            raise PayloadError(
                f"There must be at least {MIN_RECIPIENTS} recipient "
                f"and no more than {MAX_RECIPIENTS} recipients."
            )
        self.recipients = [
            recipient if isinstance(recipient, Recipient) else Recipient.from_dict(recipient)
            for recipient in recipients
        ]
        return self

    def set_is_pod_enabled(self, is_pod_enabled: Optional[bool]) -> "OrderPayloadBuilder":
        self.is_pod_enabled = is_pod_enabled
        return self

    def set_partner(self, partner: Optional[str]) -> "OrderPayloadBuilder":
        self.partner = partner
        return self

    def set_metadata(self, metadata: Union[Metadata, Dict[str, Any]]) -> "OrderPayloadBuilder":
        self.metadata = metadata if isinstance(metadata, Metadata) else Metadata(metadata)
        return self

    def build(self) -> OrderPayload:
        if not self.quotation_id:
            raise PayloadError("Quotation ID is required.")
        if self.sender is None:
            raise PayloadError("Sender is required.")
        if not self.recipients:
            raise PayloadError("Recipients are required.")
        return OrderPayload(self)


class PatchOrderPayload:
    """Replacement stop list for editing a placed order."""

    def __init__(self, builder: "PatchOrderPayloadBuilder"):
        stops = builder.stops
        if len(stops) < MIN_PATCH_STOPS or len(stops) > MAX_PATCH_STOPS:
            raise PayloadError(
                f"The number of stops must be between {MIN_PATCH_STOPS} and {MAX_PATCH_STOPS}."
            )
        for stop in stops:
            if not isinstance(stop, dict) or not stop.get('address'):
                raise PayloadError("Each stop must contain a valid, non-empty address.")
        self.stops = stops

    def to_dict(self) -> List[Dict[str, Any]]:
        return list(self.stops)


class PatchOrderPayloadBuilder:
    """Builder for PatchOrderPayload."""

    def __init__(self):
        self.stops: List[Dict[str, Any]] = []

    def with_stops(self, stops: List[Union[Stop, Dict[str, Any]]]) -> "PatchOrderPayloadBuilder":
        self.stops = [stop.to_dict() if isinstance(stop, Stop) else stop for stop in stops]
        return self

    def build(self) -> PatchOrderPayload:
        return PatchOrderPayload(self)
