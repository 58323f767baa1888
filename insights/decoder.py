"""Decode contract-ABI encoded call data.

Values are laid out head-first: every static value sits inline in the
head of its enclosing tuple, and every dynamic value stores an offset
(relative to the start of that tuple) pointing into the tail.
"""

from typing import Any, Sequence, Union

from eth_utils import decode_hex, encode_hex

from insights.abi_types import SLOT_SIZE, AbiType, ArrayType, ElementaryType, TupleType, parse_type
from insights.errors import DecodeFailure


def decode(types: Sequence[Union[str, AbiType]], data: bytes) -> list[Any]:
    """Decode ``data`` against an ordered list of parameter types.

    Args:
        types: Type names such as ["address", "uint256"], or already parsed descriptors.
        data: Encoded arguments, without the 4-byte selector.

    Returns:
        Decoded values in parameter order. Tuples and arrays become lists,
        addresses become lowercase 0x strings.

    Raises:
        DecodeFailure: If a type is not recognized or ``data`` is too short.
    """
    if not types:
        return []
    descriptors = [parse_type(t) if isinstance(t, str) else t for t in types]
    return _decode_tuple(descriptors, data, 0)


def decode_call_data(types: Sequence[str], payload_hex: str) -> list[Any]:
    """Decode a hex argument payload (with or without 0x) against ``types``."""
    if not types:
        return []
    try:
        data = decode_hex(payload_hex)
    except ValueError as e:
        raise DecodeFailure(f"Call data is not valid hex: {e}") from e
    return decode(types, data)


def _read(data: bytes, pos: int, size: int) -> bytes:
    if pos < 0 or pos + size > len(data):
        raise DecodeFailure(f"Not enough data: need {size} bytes at offset {pos}, have {len(data)}")
    return data[pos : pos + size]


def _read_uint(data: bytes, pos: int) -> int:
    return int.from_bytes(_read(data, pos, SLOT_SIZE), "big")


def _check_array_fits(count: int, element: AbiType, data: bytes, pos: int) -> None:
    # Reject lengths the remaining data cannot possibly hold
    available = len(data) - pos
    if count > len(data) or count * element.head_size > available:
        raise DecodeFailure(f"Array length {count} exceeds available data at offset {pos}")


def _decode_tuple(components: Sequence[AbiType], data: bytes, start: int) -> list[Any]:
    values = []
    pos = start
    for component in components:
        if component.is_dynamic:
            offset = _read_uint(data, pos)
            values.append(_decode_value(component, data, start + offset))
            pos += SLOT_SIZE
        else:
            values.append(_decode_value(component, data, pos))
            pos += component.head_size
    return values


def _decode_value(abi_type: AbiType, data: bytes, pos: int) -> Any:
    if isinstance(abi_type, TupleType):
        return _decode_tuple(abi_type.components, data, pos)

    if isinstance(abi_type, ArrayType):
        if abi_type.length is not None:
            _check_array_fits(abi_type.length, abi_type.element, data, pos)
            return _decode_tuple([abi_type.element] * abi_type.length, data, pos)
        count = _read_uint(data, pos)
        _check_array_fits(count, abi_type.element, data, pos + SLOT_SIZE)
        return _decode_tuple([abi_type.element] * count, data, pos + SLOT_SIZE)

    if abi_type.is_dynamic:
        length = _read_uint(data, pos)
        payload = _read(data, pos + SLOT_SIZE, length)
        if abi_type.name == "string":
            return payload.decode("utf-8", errors="replace")
        return payload

    return _decode_slot(abi_type, _read(data, pos, SLOT_SIZE))


def _decode_slot(abi_type: ElementaryType, slot: bytes) -> Any:
    name = abi_type.name
    if name == "uint":
        value = int.from_bytes(slot, "big")
        if value >> abi_type.size:
            raise DecodeFailure(f"Value out of range for uint{abi_type.size}")
        return value
    if name == "int":
        value = int.from_bytes(slot, "big", signed=True)
        bound = 1 << (abi_type.size - 1)
        if not -bound <= value < bound:
            raise DecodeFailure(f"Value out of range for int{abi_type.size}")
        return value
    if name == "bool":
        return bool(slot[-1] & 1)
    if name == "address":
        return encode_hex(slot[-20:])
    if name == "bytes":
        return slot[: abi_type.size]
    if name == "function":
        return slot[:24]
    raise DecodeFailure(f"Unrecognized type: {name}")
