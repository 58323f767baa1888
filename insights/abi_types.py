"""Structured descriptors for contract-ABI type names.

A type name such as ``(address,uint256)[]`` is parsed once into a tree of
descriptors. The decoder recurses over that tree instead of re-reading
strings at every level.
"""

import re
from dataclasses import dataclass
from typing import Union

from insights.errors import DecodeFailure

SLOT_SIZE = 32

_INT_RE = re.compile(r"^(u?int)(\d*)$")
_FIXED_BYTES_RE = re.compile(r"^bytes(\d+)$")
_ARRAY_SUFFIX_RE = re.compile(r"^(.*)\[(\d*)\]$")

# Leaf types with no size component
_BARE_TYPES = ("address", "bool", "bytes", "string", "function")


@dataclass(frozen=True)
class ElementaryType:
    """A leaf type.

    ``size`` is the bit width for ``uint``/``int`` and the byte length for
    fixed ``bytes<M>``; it is None for every other leaf.
    """

    name: str
    size: int | None = None

    @property
    def is_dynamic(self) -> bool:
        return self.name in ("bytes", "string") and self.size is None

    @property
    def head_size(self) -> int:
        return SLOT_SIZE


@dataclass(frozen=True)
class ArrayType:
    """``T[k]`` when ``length`` is set, ``T[]`` otherwise."""

    element: "AbiType"
    length: int | None = None

    @property
    def is_dynamic(self) -> bool:
        return self.length is None or self.element.is_dynamic

    @property
    def head_size(self) -> int:
        if self.is_dynamic:
            return SLOT_SIZE
        return self.length * self.element.head_size


@dataclass(frozen=True)
class TupleType:
    components: tuple["AbiType", ...]

    @property
    def is_dynamic(self) -> bool:
        return any(component.is_dynamic for component in self.components)

    @property
    def head_size(self) -> int:
        if self.is_dynamic:
            return SLOT_SIZE
        return sum(component.head_size for component in self.components)


AbiType = Union[ElementaryType, ArrayType, TupleType]


def split_type_list(text: str) -> list[str]:
    """Split a comma-separated type list on top-level commas only.

    Args:
        text: Contents of a parameter list, e.g. "(address,uint256),bool".

    Returns:
        Stripped type names. Empty list for blank input.

    Raises:
        DecodeFailure: If the parentheses are unbalanced.
    """
    if not text.strip():
        return []

    parts: list[str] = []
    depth = 0
    current: list[str] = []
    for char in text:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                raise DecodeFailure(f"Unbalanced parentheses in type list: {text!r}")
        elif char == "," and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(char)

    if depth != 0:
        raise DecodeFailure(f"Unbalanced parentheses in type list: {text!r}")
    parts.append("".join(current).strip())
    return parts


def parse_type(type_str: str) -> AbiType:
    """Parse a single ABI type name into its descriptor.

    Raises:
        DecodeFailure: If the type name is empty, malformed, or not recognized.
    """
    type_str = type_str.strip()
    if not type_str:
        raise DecodeFailure("Empty type name")

    match = _ARRAY_SUFFIX_RE.match(type_str)
    if match:
        inner, length = match.groups()
        return ArrayType(parse_type(inner), int(length) if length else None)

    if type_str.startswith("tuple("):
        type_str = type_str[len("tuple") :]
    if type_str.startswith("(") and type_str.endswith(")"):
        return TupleType(tuple(parse_type(part) for part in split_type_list(type_str[1:-1])))

    return _parse_elementary(type_str)


def _parse_elementary(type_str: str) -> ElementaryType:
    if type_str in _BARE_TYPES:
        return ElementaryType(type_str)

    match = _INT_RE.match(type_str)
    if match:
        base, bits = match.groups()
        width = int(bits) if bits else 256
        if width < 8 or width > 256 or width % 8:
            raise DecodeFailure(f"Invalid integer width: {type_str}")
        return ElementaryType(base, width)

    match = _FIXED_BYTES_RE.match(type_str)
    if match:
        length = int(match.group(1))
        if length < 1 or length > 32:
            raise DecodeFailure(f"Invalid fixed bytes length: {type_str}")
        return ElementaryType("bytes", length)

    raise DecodeFailure(f"Unrecognized type: {type_str}")
