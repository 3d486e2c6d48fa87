"""Choose between the hosted model and the deterministic fallback."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from order_parser.core.models import OrderRecord
from order_parser.core.utils import get_config_value
from order_parser.extraction.fallback import parse
from order_parser.processing.llm import GroqOrderClient, RemoteParseError

logger = logging.getLogger(__name__)

SOURCE_AI = "ai"
SOURCE_FALLBACK = "fallback"


@dataclass
class OrderParseResult:
    """Orders plus where they came from and why the model was skipped, if it was."""

    orders: List[OrderRecord] = field(default_factory=list)
    source: str = SOURCE_FALLBACK
    error: Optional[str] = None


def ai_disabled() -> bool:
    return get_config_value("ORDER_PARSER_AI_DISABLED", "0") == "1"


def parse_orders(
    text: str,
    use_ai: Optional[bool] = None,
    custom_prompt: Optional[str] = None,
    client: Optional[GroqOrderClient] = None,
) -> OrderParseResult:
    """Parse chat text with the model when configured, else locally.

    ``use_ai=None`` means "use the model if a key is configured and AI is not
    disabled". Any remote failure falls back to the local parser; the reason
    is kept on the result.
    """

    if use_ai is None:
        use_ai = not ai_disabled()

    if use_ai:
        client = client or GroqOrderClient(custom_prompt=custom_prompt)
        if client.configured:
            try:
                return OrderParseResult(orders=client.parse(text), source=SOURCE_AI)
            except RemoteParseError as exc:
                logger.warning("Remote parsing failed, using fallback parser: %s", exc)
                return OrderParseResult(orders=parse(text), source=SOURCE_FALLBACK, error=str(exc))
        logger.debug("No API key configured; using fallback parser")

    return OrderParseResult(orders=parse(text), source=SOURCE_FALLBACK)
