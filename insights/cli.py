#!/usr/bin/env python3
"""Print the insight for a transaction's call data."""

import argparse
import json
import sys

from insights.errors import InsightError
from insights.pipeline import InsightPipeline, on_transaction
from insights.signatures import SignatureResolver
from utils.config import Config
from utils.logging import get_logger, set_log_level

logger = get_logger("insights.cli")


def load_transaction(raw: str) -> object:
    """Treat ``raw`` as a JSON transaction object if it looks like one, else as call data."""
    if raw.lstrip().startswith("{"):
        return json.loads(raw)
    return {"data": raw}


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Decode a transaction's call data into a human-readable insight.")
    parser.add_argument("transaction", help="Raw call data (0x...) or a JSON transaction object with a 'data' field")
    parser.add_argument("--lookup-url", type=str, default=None, help="Signature directory URL (default: $SIGNATURE_LOOKUP_URL)")
    parser.add_argument("--timeout", type=float, default=None, help="Request timeout in seconds (default: $REQUEST_TIMEOUT)")
    parser.add_argument("--log-level", type=str, default=None, help="Logging level (DEBUG, INFO, WARNING, ERROR).")
    args = parser.parse_args(argv)

    if args.log_level:
        set_log_level(args.log_level)

    try:
        transaction = load_transaction(args.transaction)
    except json.JSONDecodeError as e:
        parser.error(f"invalid transaction JSON: {e}")

    config = Config.get_insights_config()
    resolver = SignatureResolver(
        args.lookup_url or config.lookup_url,
        timeout=args.timeout if args.timeout is not None else config.request_timeout,
    )

    try:
        response = on_transaction({"transaction": transaction}, InsightPipeline(resolver))
    except InsightError as e:
        logger.error("Inspection failed: %s", e)
        print(json.dumps({"error": str(e)}), file=sys.stderr)
        sys.exit(1)

    print(json.dumps(response, indent=2))


if __name__ == "__main__":
    main()
