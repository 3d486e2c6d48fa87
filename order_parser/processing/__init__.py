"""Orchestration of the remote model and the local fallback parser."""
from order_parser.processing.llm import (
    AuthenticationError,
    GroqOrderClient,
    ModelDecommissionedError,
    RateLimitError,
    RemoteParseError,
)
from order_parser.processing.orders import OrderParseResult, parse_orders

__all__ = [
    "AuthenticationError",
    "GroqOrderClient",
    "ModelDecommissionedError",
    "OrderParseResult",
    "RateLimitError",
    "RemoteParseError",
    "parse_orders",
]
