"""Order line built from extracted details for downstream order creation."""

from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from scriptflow.config.models import MessagesConfig
from scriptflow.extraction.answers import OrderDetails, extract_order_details
from scriptflow.runtime.session import TranscriptEntry


class LineItem(BaseModel):
    """A single order line."""

    name: str
    price: float
    quantity: int = Field(ge=1)


class OrderLine(BaseModel):
    """Extracted details plus the priced line item."""

    model_config = ConfigDict(populate_by_name=True)

    quantity: int
    details: str
    line_item: LineItem = Field(alias="lineItem")
    total_amount: float = Field(alias="totalAmount")


def build_line_item(service_name: str, service_price: float, details: OrderDetails) -> LineItem:
    """Name the line ``"{service} ({details})"`` and price it per unit."""
    return LineItem(
        name=f"{service_name} ({details.details})",
        price=service_price,
        quantity=details.quantity,
    )


def build_order_line(
    service_name: str,
    service_price: float,
    answers: Iterable[TranscriptEntry | Mapping[str, Any]] | None = None,
    summary: str | None = None,
    messages: MessagesConfig | None = None,
) -> OrderLine:
    """Extract details from a finished chat and price the resulting line."""
    details = extract_order_details(answers, summary, messages)
    item = build_line_item(service_name, service_price, details)
    return OrderLine(
        quantity=details.quantity,
        details=details.details,
        line_item=item,
        total_amount=service_price * details.quantity,
    )
