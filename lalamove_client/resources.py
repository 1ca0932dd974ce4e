"""
Resource groups of the Lalamove v3 API.

Each resource holds a reference to the owning LalamoveClient and turns its
method arguments into a path and ``data`` body for ``client.make_request``.
"""

from typing import Any, Dict, List, Optional, TYPE_CHECKING

from .constants import (
    DEFAULT_DRIVER_CANCEL_REASON,
    PATH_CITIES,
    PATH_ORDERS,
    PATH_QUOTATIONS,
    PATH_WEBHOOK,
)
from .exceptions import APIResponseError, NotFoundError

if TYPE_CHECKING:
    from .client import LalamoveClient


def _payload_data(payload: Any) -> Any:
    """Return a JSON-compatible structure for a payload object or plain data."""
    to_dict = getattr(payload, 'to_dict', None)
    if callable(to_dict):
        return to_dict()
    return payload


class Resource:
    """Base class binding a resource to its client."""

    def __init__(self, client: "LalamoveClient"):
        self.client = client


class Quotation(Resource):
    """Quotation creation and lookup."""

    def create(self, payload: Any) -> Any:
        """Request a price quotation for a route."""
        return self.client.make_request('POST', PATH_QUOTATIONS, data=_payload_data(payload))

    def retrieve(self, quotation_id: str) -> Any:
        """Fetch a previously created quotation."""
        return self.client.make_request('GET', f"{PATH_QUOTATIONS}/{quotation_id}")


class Order(Resource):
    """Order placement, lookup, edit and cancellation."""

    def create(self, payload: Any) -> Any:
        """Place an order against a quotation."""
        return self.client.make_request('POST', PATH_ORDERS, data=_payload_data(payload))

    def retrieve(self, order_id: str) -> Any:
        return self.client.make_request('GET', f"{PATH_ORDERS}/{order_id}")

    def cancel(self, order_id: str) -> Any:
        """Cancel an order. Returns True when the API answers 204."""
        return self.client.make_request('DELETE', f"{PATH_ORDERS}/{order_id}")

    def edit(self, order_id: str, payload: Any) -> Any:
        """
        Replace the stops of an order.

        Args:
            order_id: Order to edit
            payload: PatchOrderPayload or a list of stop dicts
        """
        data = {'stops': _payload_data(payload)}
        return self.client.make_request('PATCH', f"{PATH_ORDERS}/{order_id}", data=data)

    def add_priority_fee(self, order_id: str, fee: str) -> Any:
        """Add a priority fee (tip) to an order."""
        data = {'priorityFee': fee}
        return self.client.make_request('POST', f"{PATH_ORDERS}/{order_id}/priority-fee", data=data)


class Driver(Resource):
    """Driver details and driver change requests for an order."""

    @staticmethod
    def _path(order_id: str, driver_id: str) -> str:
        return f"{PATH_ORDERS}/{order_id}/drivers/{driver_id}"

    def retrieve(self, order_id: str, driver_id: str) -> Any:
        return self.client.make_request('GET', self._path(order_id, driver_id))

    def cancel(self, order_id: str, driver_id: str,
               reason: str = DEFAULT_DRIVER_CANCEL_REASON) -> Any:
        """Ask for a different driver on an order."""
        data = {'reason': reason}
        return self.client.make_request('DELETE', self._path(order_id, driver_id), data=data)


class Market(Resource):
    """Market information (cities and services)."""

    def retrieve(self, market: Optional[str] = None) -> Any:
        """
        List the cities and services of a market.

        Args:
            market: Market code; the client's market is used when omitted
        """
        return self.client.make_request('GET', PATH_CITIES, market=market)


class City(Resource):
    """City lookup and service selection on top of the market listing."""

    def _fetch_cities(self, market: Optional[str]) -> List[Dict[str, Any]]:
        response = self.client.make_request('GET', PATH_CITIES, market=market)
        if not isinstance(response, dict) or not isinstance(response.get('data'), list):
            raise APIResponseError("Invalid API response structure", status_code=500)
        return [self._transform_city(city) for city in response['data']]

    @staticmethod
    def _transform_city(city: Dict[str, Any]) -> Dict[str, Any]:
        city = dict(city)
        if 'locode' in city:
            city['id'] = city.pop('locode')
        return city

    @staticmethod
    def _find_city(cities: List[Dict[str, Any]], city_id: str) -> Dict[str, Any]:
        for city in cities:
            if city.get('id') == city_id:
                return city
        raise NotFoundError(f"No such city with ID: {city_id}")

    @staticmethod
    def _closest_service_by_load(cities: List[Dict[str, Any]], target_load: float) -> Optional[str]:
        closest_service = None
        closest_load = float('inf')
        for city in cities:
            services = city.get('services') or []
            if not isinstance(services, list):
                raise APIResponseError("Invalid API response structure", status_code=500)
            for service in services:
                if not isinstance(service, dict):
                    raise APIResponseError("Invalid API response structure", status_code=500)
                load_info = service.get('load')
                load = load_info.get('value') if isinstance(load_info, dict) else None
                if load is None:
                    continue
                try:
                    service_load = float(load)
                except (TypeError, ValueError):
                    raise APIResponseError(
                        f"Invalid load value for service {service.get('key')!r}: {load!r}",
                        status_code=500
                    ) from None
                if target_load <= service_load < closest_load:
                    closest_load = service_load
                    closest_service = service.get('key')
        return closest_service

    def retrieve(self, city_id: str, market: Optional[str] = None) -> Dict[str, Any]:
        """
        Look up one city of a market.

        Args:
            city_id: City id (the API's ``locode``)
            market: Market code; the client's market is used when omitted

        Returns:
            ``{'data': city}`` with ``locode`` renamed to ``id``

        Raises:
            APIResponseError: If the listing is malformed
            NotFoundError: If the city is not in the listing
        """
        cities = self._fetch_cities(market)
        return {'data': self._find_city(cities, city_id)}

    def get_service_key_by_load(self, target_load: float, city_id: Optional[str] = None,
                                market: Optional[str] = None) -> Dict[str, Any]:
        """
        Pick the smallest service whose load capacity covers target_load.

        Args:
            target_load: Required load, in the unit the market reports
            city_id: Restrict the search to one city; all cities when omitted
            market: Market code; the client's market is used when omitted

        Returns:
            ``{'data': {'serviceType': key}}``; key is None when nothing fits

        Raises:
            APIResponseError: If the listing is malformed
            NotFoundError: If city_id is given and not in the listing
        """
        cities = self._fetch_cities(market)
        if city_id:
            cities = [self._find_city(cities, city_id)]
        return {'data': {'serviceType': self._closest_service_by_load(cities, target_load)}}


class Webhook(Resource):
    """Webhook registration for order status callbacks."""

    def set_webhook(self, url: str) -> Any:
        """Register the URL that receives order status callbacks."""
        return self.client.make_request('PATCH', PATH_WEBHOOK, data={'url': url})
