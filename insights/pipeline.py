"""Turn an outgoing transaction into a human-readable insight.

The insight names the function the call data most likely invokes and
lists its decoded arguments. Transactions without call data, and selectors
the signature directory does not know, yield the "Unknown Transaction"
fallback; lookup and decode failures propagate.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from eth_utils import remove_0x_prefix

from insights.decoder import decode_call_data
from insights.normalize import normalize
from insights.signatures import SignatureResolver, parse_param_types
from utils.config import Config
from utils.logging import get_logger

logger = get_logger("insights.pipeline")

UNKNOWN_TRANSACTION = "Unknown Transaction"

# Hex characters of the function selector (4 bytes)
SELECTOR_LENGTH = 8


@dataclass
class Insight:
    type: str = UNKNOWN_TRANSACTION
    params: list[Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        """JSON form; ``params`` is omitted until the arguments are decoded."""
        result: dict[str, Any] = {"type": self.type}
        if self.params is not None:
            result["params"] = self.params
        return result


class InsightPipeline:
    """Resolve, parse, decode and normalize a transaction's call data."""

    def __init__(self, resolver: SignatureResolver):
        self.resolver = resolver

    def inspect(self, transaction: Any) -> Insight:
        insight = Insight()

        if not isinstance(transaction, Mapping) or not isinstance(transaction.get("data"), str):
            logger.info("Unknown transaction type.")
            return insight

        call_data = remove_0x_prefix(transaction["data"])
        selector, payload = call_data[:SELECTOR_LENGTH], call_data[SELECTOR_LENGTH:]

        signature = self.resolver.resolve(selector)
        if signature is None:
            logger.info("No matching function signatures found for 0x%s.", selector)
            return insight

        insight.type = signature
        param_types = parse_param_types(signature)
        insight.params = normalize(decode_call_data(param_types, payload))
        logger.debug("Decoded %s with %s params", signature, len(insight.params))
        return insight


def default_pipeline() -> InsightPipeline:
    """Build a pipeline from environment configuration."""
    config = Config.get_insights_config()
    return InsightPipeline(SignatureResolver(config.lookup_url, timeout=config.request_timeout))


def on_transaction(request: Mapping[str, Any], pipeline: InsightPipeline | None = None) -> dict[str, Any]:
    """Entry point for a transaction-inspection request.

    Args:
        request: Mapping with a ``transaction`` object.
        pipeline: Pipeline to use; defaults to one built from ``Config``.

    Returns:
        ``{"insights": {"type": ..., "params": ...}}``.

    Raises:
        LookupFailure: If the signature directory cannot be queried.
        DecodeFailure: If the call data does not match the resolved signature.
    """
    if pipeline is None:
        pipeline = default_pipeline()
    insight = pipeline.inspect(request.get("transaction"))
    return {"insights": insight.to_dict()}
