"""Derives an order quantity and a readable detail string from collected answers."""

import logging
import re
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel, Field

from scriptflow.config.models import MessagesConfig
from scriptflow.runtime.session import TranscriptEntry

logger = logging.getLogger(__name__)

QUANTITY_HINTS = ("how many", "copies")
DEFAULT_QUESTION = "Question"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class OrderDetails(BaseModel):
    """Quantity and details handed to order creation."""

    quantity: int = Field(default=1, ge=1)
    details: str = ""


def parse_int(value: Any) -> int | None:
    """Leading-integer parse: ``"5 copies"`` -> 5, ``"3.7"`` -> 3, ``"abc"`` -> None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value == value and abs(value) != float("inf") else None
    if not isinstance(value, str):
        return None
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else None


def _asks_for_quantity(entry: TranscriptEntry, question: str) -> bool:
    if entry.type == "number":
        return True
    lowered = question.lower()
    return any(hint in lowered for hint in QUANTITY_HINTS)


def extract(answers: Iterable[TranscriptEntry | Mapping[str, Any]]) -> OrderDetails:
    """Build order details from structured answers.

    ``details`` joins every ``question: answer`` pair with ``"; "``. The
    quantity starts at 1 and is overwritten by every positive integer given
    to a number question or a question mentioning "how many" or "copies";
    the last one wins.
    """
    quantity = 1
    parts: list[str] = []

    for raw in answers:
        entry = raw if isinstance(raw, TranscriptEntry) else TranscriptEntry.model_validate(raw)
        question = entry.question.strip() or DEFAULT_QUESTION
        parts.append(f"{question}: {entry.answer}")

        if _asks_for_quantity(entry, question):
            number = parse_int(entry.answer)
            if number is not None and number > 0:
                quantity = number
            else:
                logger.debug(f"Ignoring non-quantity answer {entry.answer!r} to '{question}'")

    return OrderDetails(quantity=quantity, details="; ".join(parts))


def extract_legacy(summary: str | None, fallback_details: str | None = None) -> OrderDetails:
    """Build order details from a free-text, comma separated summary.

    Each comma separated token that parses as a positive integer overwrites
    the quantity; the summary itself becomes the details.
    """
    quantity = 1
    for token in (summary or "").split(","):
        number = parse_int(token.strip())
        if number is not None and number > 0:
            quantity = number

    details = summary or fallback_details or MessagesConfig().legacy_details_fallback
    return OrderDetails(quantity=quantity, details=details)


def extract_order_details(
    answers: Iterable[TranscriptEntry | Mapping[str, Any]] | None = None,
    summary: str | None = None,
    messages: MessagesConfig | None = None,
) -> OrderDetails:
    """Use structured answers when there are any, the legacy summary otherwise."""
    entries = list(answers or [])
    if entries:
        return extract(entries)
    messages = messages or MessagesConfig()
    return extract_legacy(summary, messages.legacy_details_fallback)
