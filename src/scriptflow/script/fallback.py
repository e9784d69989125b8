"""Canned script used when a service has no usable script of its own."""

from typing import Any

from scriptflow.script.models import RuntimeScript

DEFAULT_BUSINESS_NAME = "our shop"


def _default_document(business_name: str) -> dict[str, Any]:
    return {
        "startNodeId": "start",
        "nodes": {
            "start": {
                "text": (
                    f"Welcome to {business_name}! "
                    "What specific service would you like today?"
                ),
                "options": [
                    {"label": "Printing", "value": "Printing", "next": "printing"},
                    {"label": "Scanning", "value": "Scanning", "next": "scanning"},
                    {"label": "Binding", "value": "Binding", "next": "binding"},
                ],
            },
            "printing": {
                "text": "What type of printing?",
                "options": [
                    {
                        "label": "Black & White ($0.10/page)",
                        "value": "BW",
                        "next": "copies",
                        "priceMod": 0.10,
                    },
                    {
                        "label": "Color ($0.50/page)",
                        "value": "Color",
                        "next": "copies",
                        "priceMod": 0.50,
                    },
                ],
            },
            "scanning": {
                "text": "How many pages to scan?",
                "inputType": "number",
                "next": "upload",
            },
            "binding": {
                "text": "Select binding type",
                "options": [
                    {"label": "Spiral", "value": "Spiral", "next": "finish"},
                    {"label": "Hardcover", "value": "Hardcover", "next": "finish"},
                ],
            },
            "copies": {
                "text": "How many copies?",
                "inputType": "number",
                "next": "upload",
            },
            "upload": {
                "text": "Please upload your document",
                "inputType": "file",
                "next": "finish",
            },
            "finish": {
                "text": "Great! We have your details. Place Order Now?",
                "isFinal": True,
            },
        },
    }


def default_script(service_name: str | None = None, business_name: str | None = None) -> RuntimeScript:
    """Return the fallback script.

    Only the business display name appears in the script (welcome text);
    ``service_name`` is accepted so callers can pass the full service
    context.
    """
    return RuntimeScript.from_document(_default_document(business_name or DEFAULT_BUSINESS_NAME))
