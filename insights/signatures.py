"""Resolve 4-byte function selectors to text signatures.

Queries a 4byte-style signature directory and, when several signatures
share a selector, keeps the earliest registered one.
"""

from dataclasses import dataclass
from typing import Any

from eth_utils import add_0x_prefix

from insights.abi_types import split_type_list
from insights.errors import LookupFailure
from utils.http import HttpError, fetch_json
from utils.logging import get_logger

logger = get_logger("insights.signatures")


@dataclass(frozen=True)
class SignatureCandidate:
    """One entry returned by the signature directory."""

    text_signature: str
    created_at: str
    id: int | None = None
    hex_signature: str | None = None
    bytes_signature: str | None = None

    @classmethod
    def from_dict(cls, entry: Any) -> "SignatureCandidate":
        if not isinstance(entry, dict):
            raise LookupFailure(f"Malformed signature entry: {entry!r}")
        text_signature = entry.get("text_signature")
        created_at = entry.get("created_at")
        if not isinstance(text_signature, str) or not isinstance(created_at, str):
            raise LookupFailure(f"Signature entry missing text_signature or created_at: {entry!r}")
        return cls(
            text_signature=text_signature,
            created_at=created_at,
            id=entry.get("id"),
            hex_signature=entry.get("hex_signature"),
            bytes_signature=entry.get("bytes_signature"),
        )


def select_signature(candidates: list[SignatureCandidate]) -> str | None:
    """Pick the earliest-created candidate's text signature.

    ISO-8601 timestamps order correctly as strings. Ties keep the
    directory's response order.
    """
    if not candidates:
        return None
    return min(candidates, key=lambda c: c.created_at).text_signature


def parse_param_types(signature: str) -> list[str]:
    """Extract parameter types from a function signature.

    Commas nested inside tuple types do not split the list.

    Args:
        signature: Function signature like "swap((address,uint256),bool)".

    Returns:
        List of type strings, e.g. ["(address,uint256)", "bool"]. Empty list for
        no-arg functions or text without parentheses.
    """
    start = signature.find("(")
    end = signature.rfind(")")
    if start == -1 or end <= start:
        return []
    return split_type_list(signature[start + 1 : end])


class SignatureResolver:
    """Look up selectors in a signature directory at ``base_url``.

    Each ``resolve`` call makes exactly one request; nothing is cached or retried.
    """

    def __init__(self, base_url: str, timeout: float | None = None):
        self.base_url = base_url
        self.timeout = timeout

    def fetch_candidates(self, selector: str) -> list[SignatureCandidate]:
        hex_signature = add_0x_prefix(selector)
        try:
            data = fetch_json(
                self.base_url,
                timeout=self.timeout,
                params={"hex_signature": hex_signature},
                headers={"Content-Type": "application/json"},
            )
        except HttpError as e:
            raise LookupFailure(f"Unable to fetch function signature data for {hex_signature}") from e

        if not isinstance(data, dict) or not isinstance(data.get("results"), list):
            raise LookupFailure(f"Unexpected signature directory response for {hex_signature}")
        return [SignatureCandidate.from_dict(entry) for entry in data["results"]]

    def resolve(self, selector: str) -> str | None:
        """Resolve a selector (with or without 0x) to its text signature.

        Returns:
            Signature like "transfer(address,uint256)", or None when the directory
            has no entry for the selector.

        Raises:
            LookupFailure: If the directory request fails or answers malformed data.
        """
        candidates = self.fetch_candidates(selector)
        signature = select_signature(candidates)
        if len(candidates) > 1:
            logger.debug("%s candidates for %s, picked %s", len(candidates), selector, signature)
        return signature
