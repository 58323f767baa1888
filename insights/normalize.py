"""Convert decoded ABI values into JSON-safe values."""

from typing import Any

from eth_utils import encode_hex


def normalize(value: Any) -> Any:
    """Recursively make a decoded value JSON-serializable.

    Bytes become 0x-prefixed hex and integers become decimal strings, so
    values beyond the float-safe range survive JSON round-trips. Applying
    this twice gives the same result as applying it once.
    """
    if isinstance(value, (list, tuple)):
        return [normalize(item) for item in value]
    if isinstance(value, (bytes, bytearray)):
        return encode_hex(value)
    # bool is an int subclass and must pass through unchanged
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return str(value)
    return value
