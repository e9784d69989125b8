"""Answer extraction for order creation."""

from scriptflow.extraction.answers import (
    OrderDetails,
    extract,
    extract_legacy,
    extract_order_details,
    parse_int,
)
from scriptflow.extraction.orders import LineItem, OrderLine, build_line_item, build_order_line

__all__ = [
    "LineItem",
    "OrderDetails",
    "OrderLine",
    "build_line_item",
    "build_order_line",
    "extract",
    "extract_legacy",
    "extract_order_details",
    "parse_int",
]
