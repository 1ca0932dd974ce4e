"""
Value objects used inside quotation and order payloads.

Each model validates its required fields on construction and serializes
to the camelCase structure the API expects via ``to_dict()``.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .exceptions import PayloadError


@dataclass
class Stop:
    """A pickup or drop-off location."""
    coordinates: Dict[str, str]
    address: str
    stop_id: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.coordinates, dict) or \
                self.coordinates.get('lat') is None or self.coordinates.get('lng') is None:
            raise PayloadError("Each stop must contain valid coordinates (lat and lng).")
        if not self.address:
            raise PayloadError("Each stop must contain an address.")

    @property
    def latitude(self) -> str:
        return self.coordinates['lat']

    @property
    def longitude(self) -> str:
        return self.coordinates['lng']

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Stop":
        return cls(
            coordinates=data.get('coordinates'),
            address=data.get('address'),
            stop_id=data.get('stopId'),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'coordinates': dict(self.coordinates),
            'address': self.address,
        }
        if self.stop_id is not None:
            data['stopId'] = self.stop_id
        return data


@dataclass
class Item:
    """Description of the goods being delivered."""
    quantity: Optional[str] = None
    weight: Optional[str] = None
    categories: Optional[List[str]] = None
    handling_instructions: Optional[List[str]] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Item":
        return cls(
            quantity=data.get('quantity'),
            weight=data.get('weight'),
            categories=data.get('categories'),
            handling_instructions=data.get('handlingInstructions'),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'quantity': self.quantity,
            'weight': self.weight,
            'categories': self.categories,
            'handlingInstructions': self.handling_instructions,
        }
        return {key: value for key, value in data.items() if value is not None}


def _require_contact(kind: str, data: Dict[str, Any]):
    missing = [key for key in ('stopId', 'name', 'phone') if data.get(key) is None]
    if missing:
        raise PayloadError(f"{kind} data must contain stopId, name, and phone.")


@dataclass
class Sender:
    """Contact at the pickup stop."""
    stop_id: str
    name: str
    phone: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Sender":
        _require_contact("Sender", data)
        return cls(stop_id=data['stopId'], name=data['name'], phone=data['phone'])

    def to_dict(self) -> Dict[str, Any]:
        return {'stopId': self.stop_id, 'name': self.name, 'phone': self.phone}


@dataclass
class Recipient:
    """Contact at a drop-off stop."""
    stop_id: str
    name: str
    phone: str
    remarks: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Recipient":
        _require_contact("Recipient", data)
        return cls(
            stop_id=data['stopId'],
            name=data['name'],
            phone=data['phone'],
            remarks=data.get('remarks'),
        )

    def to_dict(self) -> Dict[str, Any]:
        data = {'stopId': self.stop_id, 'name': self.name, 'phone': self.phone}
        if self.remarks is not None:
            data['remarks'] = self.remarks
        return data


@dataclass
class Metadata:
    """Free-form key/value pairs attached to an order."""
    values: Dict[str, Any]

    def __post_init__(self):
        if not self.values:
            raise PayloadError("Metadata cannot be empty.")

    def to_dict(self) -> Dict[str, Any]:
        return dict(self.values)
