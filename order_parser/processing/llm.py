"""Chat-completion client that asks a hosted model to extract orders."""
from __future__ import annotations

import json
import logging
import math
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

import requests

from order_parser.core.models import UNKNOWN_CUSTOMER, UNSPECIFIED_HOUSE, OrderRecord
from order_parser.core.utils import get_config_value, load_env_file
from order_parser.extraction.assembler import normalize_phone
from order_parser.extraction.products import normalize_unit, positive_quantity
from order_parser.extraction.registry import find_product

logger = logging.getLogger(__name__)
DEFAULT_SECRET_FILE = Path("secrets") / "groq.env"
DEFAULT_BASE_URL = "https://api.groq.com/openai/v1"
DEFAULT_MODEL = "llama3-8b-8192"
DEFAULT_TIMEOUT_SECONDS = 30.0
_AI_ENV_LOADED = False

BASE_SYSTEM_PROMPT = """You are an order parser for a WhatsApp fruit and vegetable business.
Extract orders from WhatsApp messages and return structured JSON data.

Each message follows pattern: [Date Time] Phone: Order details
Note: Some messages may span multiple lines. A new message starts with a timestamp in square brackets.

Products to look for:
- Ginger Tea (variations: ginger tea, Ginger tea)
- Masala Tea (variations: masala tea, masala chai, Masala Chai)
- Avocado (variations: avocado, avacado, avokado, Avacado)
- Dragon Fruit (variations: dragon fruit, Dragon fruit, dragon, Dragon)
- Cardamom

Special parsing rules:
1. "Dragon" alone refers to "Dragon Fruit"
2. "one kg each" or "1 kg each" means 1 kg for each product mentioned
3. Handle ellipsis (..., …) in messages
4. Ignore emojis
5. Multi-line messages: content continues until the next timestamp
6. If quantity is mentioned once for multiple products (e.g., "Avocado and Dragon fruit one kg each"), apply that quantity to each product

Extract:
- Date (DD-MM-YYYY format from square brackets)
- Time (HH:MM format from square brackets)
- Phone number (extract the full number after the time)
- Customer name (if mentioned after "for" or at end after dash)
- House number (format like A1-102, B1-324, A3-1319, etc. - may have hyphen or space)
- Products ordered (handle multiple products per message)
- Quantity for each product
- Unit (gm, kg, pieces)

Important:
- If a message contains multiple products, create separate entries for each product with the same customer details.
- When "each" is used with quantity, apply that quantity to all mentioned products.
- Be flexible with house number formats (A1 102, A1-102, B1 324, etc.)"""

RESPONSE_SHAPE = """Return a JSON object with an "orders" array where each order has these fields:
{
  "orders": [
    {
      "date": "DD-MM-YYYY",
      "time": "HH:MM",
      "phone": "+91XXXXXXXXXX",
      "customerName": "Name or Unknown",
      "houseNumber": "A1-1023 or Not specified",
      "product": "Product Name",
      "quantity": 250,
      "unit": "gm"
    }
  ]
}"""


class RemoteParseError(RuntimeError):
    """The hosted model could not produce usable orders."""


class AuthenticationError(RemoteParseError):
    pass


class RateLimitError(RemoteParseError):
    pass


class ModelDecommissionedError(RemoteParseError):
    pass


def _ensure_ai_env() -> None:
    """Load API credentials from a local secrets file once per process."""

    global _AI_ENV_LOADED
    if _AI_ENV_LOADED:
        return

    _AI_ENV_LOADED = True
    secret_location = os.getenv("ORDER_PARSER_SECRET_FILE")
    path = Path(secret_location).expanduser() if secret_location else DEFAULT_SECRET_FILE
    load_env_file(path)


def build_system_prompt(custom_prompt: Optional[str] = None) -> str:
    """Combine the base instructions, optional extra ones, and the JSON shape."""

    prompt = BASE_SYSTEM_PROMPT
    if custom_prompt and custom_prompt.strip():
        prompt = f"{prompt}\n\nAdditional Instructions:\n{custom_prompt.strip()}"
    return f"{prompt}\n\n{RESPONSE_SHAPE}"


def build_user_prompt(text: str) -> str:
    return f"Parse these WhatsApp orders and return structured JSON:\n\n{text}"


def _text_field(item: Dict[str, Any], key: str, default: str = "") -> str:
    value = item.get(key)
    if value is None:
        return default
    text = str(value).strip()
    return text or default


def coerce_order(item: Any) -> Optional[OrderRecord]:
    """Convert one element of the model's ``orders`` array into an order record.

    Returns None for elements without a product or a positive quantity.
    """

    if not isinstance(item, dict):
        return None

    product = _text_field(item, "product")
    if not product:
        return None
    known = find_product(product)
    if known is not None:
        product = known.name

    try:
        quantity = positive_quantity(str(item.get("quantity")).strip())
    except ValueError:
        return None
    if quantity is None:
        return None

    unit = item.get("unit")
    return OrderRecord(
        date=_text_field(item, "date"),
        time=_text_field(item, "time"),
        phone=normalize_phone(_text_field(item, "phone")),
        customer_name=_text_field(item, "customerName", UNKNOWN_CUSTOMER),
        house_number=_text_field(item, "houseNumber", UNSPECIFIED_HOUSE),
        product=product,
        quantity=quantity,
        unit=normalize_unit(str(unit) if unit is not None else None, product),
    )


def parse_model_content(content: str) -> List[OrderRecord]:
    """Read the JSON body returned by the model into order records."""

    try:
        payload = json.loads(content)
    except json.JSONDecodeError as exc:
        raise RemoteParseError(f"Model response is not valid JSON: {content[:200]}") from exc

    if not isinstance(payload, dict) or not isinstance(payload.get("orders"), list):
        raise RemoteParseError("Model response does not contain an 'orders' array")

    orders: List[OrderRecord] = []
    for item in payload["orders"]:
        order = coerce_order(item)
        if order is None:
            logger.warning("Skipping unusable order from model response: %r", item)
            continue
        orders.append(order)
    return orders


def _timeout_seconds() -> float:
    raw = get_config_value("GROQ_TIMEOUT_SECONDS")
    if not raw:
        return DEFAULT_TIMEOUT_SECONDS
    try:
        timeout = float(raw)
    except ValueError:
        timeout = 0.0
    if not math.isfinite(timeout) or timeout <= 0:
        logger.warning(
            "Ignoring GROQ_TIMEOUT_SECONDS=%r, using %s seconds", raw, DEFAULT_TIMEOUT_SECONDS
        )
        return DEFAULT_TIMEOUT_SECONDS
    return timeout


class GroqOrderClient:
    """Calls a Groq (OpenAI-compatible) chat-completions endpoint."""

    def __init__(self, api_key: Optional[str] = None, custom_prompt: Optional[str] = None) -> None:
        _ensure_ai_env()
        self.api_key = api_key or get_config_value("GROQ_API_KEY") or None
        self.model = get_config_value("GROQ_MODEL", DEFAULT_MODEL)
        self.base_url = get_config_value("GROQ_BASE_URL", DEFAULT_BASE_URL).rstrip("/")
        self.timeout = _timeout_seconds()
        self.custom_prompt = (
            custom_prompt
            if custom_prompt is not None
            else get_config_value("ORDER_PARSER_CUSTOM_PROMPT")
        )
        self.session = requests.Session() if self.api_key else None

    @property
    def configured(self) -> bool:
        return self.session is not None

    def build_payload(self, text: str) -> Dict[str, Any]:
        return {
            "model": self.model,
            "messages": [
                {"role": "system", "content": build_system_prompt(self.custom_prompt)},
                {"role": "user", "content": build_user_prompt(text)},
            ],
            "temperature": 0.1,
            "max_tokens": 2000,
            "response_format": {"type": "json_object"},
        }

    def parse(self, text: str) -> List[OrderRecord]:
        """Send ``text`` to the model and return the orders it extracted."""

        if self.session is None:
            raise AuthenticationError("No API key configured for the remote parser.")

        logger.debug("Sending %d characters to %s", len(text), self.model)
        try:
            response = self.session.post(
                f"{self.base_url}/chat/completions",
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                json=self.build_payload(text),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise RemoteParseError(f"Request to the model API failed: {exc}") from exc

        self._raise_for_status(response)

        try:
            content = response.json()["choices"][0]["message"]["content"]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise RemoteParseError("Invalid response format from the model API") from exc
        if not isinstance(content, str) or not content.strip():
            raise RemoteParseError("Empty response from the model API")

        orders = parse_model_content(content)
        logger.info("Model returned %d orders", len(orders))
        return orders

    def _raise_for_status(self, response: requests.Response) -> None:
        if response.ok:
            return

        body = response.text
        logger.debug("Model API error %s: %s", response.status_code, body)
        if response.status_code == 401:
            raise AuthenticationError("Invalid API key. Please check your GROQ API key.")
        if response.status_code == 429:
            raise RateLimitError("Rate limit exceeded. Please try again later.")
        if response.status_code == 400 and "model_decommissioned" in body:
            raise ModelDecommissionedError(
                f"The model {self.model} has been decommissioned. Set GROQ_MODEL to a supported model."
            )
        raise RemoteParseError(f"API Error: {response.status_code} - {body}")
