"""
Path parameters for the relay lookups.

``/orders/{id}`` and ``/products/{id}`` share their prefix with the POST-only
action routes (``/orders/webhook``, ``/orders/backorder``, ``/products/sync``).
These convertors refuse the action names as ids, so a GET on an action path
gets the router's 405 instead of a lookup.
"""
from starlette.convertors import Convertor, register_url_convertor


class _ReservedSegmentConvertor(Convertor):
    def convert(self, value: str) -> str:
        return value

    def to_string(self, value: str) -> str:
        return str(value)


class OrderRefConvertor(_ReservedSegmentConvertor):
    regex = r"(?!(?:webhook|backorder)$)[^/]+"


class ProductRefConvertor(_ReservedSegmentConvertor):
    # "sync" is only reserved as the final segment
    regex = r"(?!sync$)[^/]+"


register_url_convertor("order_ref", OrderRefConvertor())
register_url_convertor("product_ref", ProductRefConvertor())
